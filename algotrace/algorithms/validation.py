"""
validation.py — Input Guards
=============================
Shared checks the per-algorithm `prepare` functions use to turn a raw
input mapping into clean generator kwargs.

Every failure raises InvalidInputError *before* the generator is created,
so a half-built Trace can never exist.
"""

import copy
import math
import numbers
from typing import Any, Dict, List, Mapping, Sequence

from algotrace import config
from algotrace.errors import InvalidInputError
from algotrace.graph import Graph


def require(raw: Mapping[str, Any], key: str) -> Any:
    if key not in raw or raw[key] is None:
        raise InvalidInputError(f"Missing input field '{key}'")
    return raw[key]


def number(value: Any, what: str) -> float:
    """Accept ints / floats (not bools, not NaN) and return the value unchanged."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidInputError(f"{what} must be a number, got {value!r}")
    if isinstance(value, float) and math.isnan(value):
        raise InvalidInputError(f"{what} must not be NaN")
    return value


def integer(value: Any, what: str) -> int:
    value = number(value, what)
    if isinstance(value, float):
        if not value.is_integer():
            raise InvalidInputError(f"{what} must be a whole number, got {value!r}")
        value = int(value)
    return int(value)


def number_list(raw: Mapping[str, Any], key: str) -> List[float]:
    values = require(raw, key)
    if isinstance(values, (str, bytes)) or not isinstance(values, Sequence):
        raise InvalidInputError(f"'{key}' must be a list of numbers")
    bounded(values, key)
    return [number(v, f"{key}[{i}]") for i, v in enumerate(values)]


def bounded(values: Sequence[Any], what: str) -> None:
    if len(values) > config.MAX_INPUT_SIZE:
        raise InvalidInputError(
            f"'{what}' has {len(values)} elements; at most {config.MAX_INPUT_SIZE} can be traced"
        )


def items(raw: Mapping[str, Any]) -> List[List[float]]:
    """weights / values pairs shared by both knapsack variants."""
    weights = number_list(raw, "weights")
    values = number_list(raw, "values")
    if len(weights) != len(values):
        raise InvalidInputError(
            f"'weights' and 'values' differ in length ({len(weights)} vs {len(values)})"
        )
    for i, w in enumerate(weights):
        if w <= 0:
            raise InvalidInputError(f"Item {i} has non-positive weight {w}")
    for i, v in enumerate(values):
        if v < 0:
            raise InvalidInputError(f"Item {i} has negative value {v}")
    return [weights, values]


def capacity(raw: Mapping[str, Any]) -> float:
    cap = number(require(raw, "capacity"), "capacity")
    if cap < 0:
        raise InvalidInputError(f"Capacity must be non-negative, got {cap}")
    if math.isinf(cap):
        raise InvalidInputError("Capacity must be finite")
    return cap


def graph_input(
    raw: Mapping[str, Any],
    shortest_path: bool = False,
    allow_negative: bool = True,
) -> Dict[str, Any]:
    """
    Coerce `raw["graph"]` into a private Graph copy and check the endpoints.

    The graph may be a Graph, a `Graph.to_dict()` mapping, a list of
    (source, target[, weight]) tuples, or adjacency-list text.
    """
    value = require(raw, "graph")
    directed = bool(raw.get("directed", False))
    if not isinstance(value, (Graph, Mapping, str, Sequence)):
        raise InvalidInputError(f"'graph' has unsupported type {type(value).__name__}")
    try:
        if isinstance(value, Graph):
            graph = copy.deepcopy(value)
        elif isinstance(value, Mapping):
            graph = Graph.from_dict(value)
        elif isinstance(value, str):
            graph = Graph.from_adjacency_list(value, directed=directed)
        else:
            graph = Graph.from_edges(value, directed=directed)
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidInputError(f"Malformed graph: {exc}") from exc

    bounded(graph.node_ids(), "graph nodes")
    for edge in graph.edges.values():
        number(edge.weight, f"weight of edge {edge.source}-{edge.target}")
        if not allow_negative and edge.weight < 0:
            raise InvalidInputError(
                f"Edge {edge.source}-{edge.target} has negative weight {edge.weight}; "
                f"use Bellman-Ford for negative weights"
            )

    source = str(require(raw, "source"))
    if not graph.has_node(source):
        raise InvalidInputError(f"Source node '{source}' is not in the graph")

    target = raw.get("target")
    if target is not None:
        target = str(target)
        if not graph.has_node(target):
            raise InvalidInputError(f"Target node '{target}' is not in the graph")
        if shortest_path and target not in graph.reachable_from(source):
            raise InvalidInputError(f"Target node '{target}' is not reachable from '{source}'")

    return {"graph": graph, "source": source, "target": target}
