"""Tests that malformed input fails before any step exists."""

import pytest

from algotrace import config
from algotrace.engine import TraceRecorder, build_trace
from algotrace.errors import AlgoTraceError, InvalidInputError, UnknownAlgorithmError

WEIGHTED = [("A", "B", 4), ("B", "C", 1)]


class TestUnknownAlgorithm:
    def test_unknown_id(self):
        with pytest.raises(UnknownAlgorithmError) as excinfo:
            build_trace("quantum_sort", {"values": [1]})
        assert excinfo.value.algorithm_id == "quantum_sort"

    def test_is_an_input_error(self):
        assert issubclass(UnknownAlgorithmError, InvalidInputError)
        assert issubclass(InvalidInputError, AlgoTraceError)
        assert issubclass(InvalidInputError, ValueError)


class TestArrayInputs:
    @pytest.mark.parametrize("raw", [
        {},
        {"values": None},
        {"values": "5,3,1"},
        {"values": [1, "two", 3]},
        {"values": [1, True]},
        {"values": [1, float("nan")]},
    ])
    def test_rejects_bad_values(self, raw):
        with pytest.raises(InvalidInputError):
            build_trace("bubble_sort", raw)

    def test_rejects_oversized_input(self):
        with pytest.raises(InvalidInputError, match="at most"):
            build_trace("insertion_sort", {"values": list(range(config.MAX_INPUT_SIZE + 1))})

    def test_binary_search_needs_sorted_values(self):
        with pytest.raises(InvalidInputError, match="sorted"):
            build_trace("binary_search", {"values": [1, 3, 2], "target": 3})

    def test_search_needs_target(self):
        with pytest.raises(InvalidInputError, match="target"):
            build_trace("linear_search", {"values": [1, 2]})


class TestItemInputs:
    @pytest.mark.parametrize("raw, fragment", [
        ({"weights": [1, 2], "values": [1], "capacity": 3}, "differ in length"),
        ({"weights": [0, 2], "values": [1, 1], "capacity": 3}, "non-positive"),
        ({"weights": [1, 2], "values": [1, -1], "capacity": 3}, "negative value"),
        ({"weights": [1, 2], "values": [1, 1], "capacity": -1}, "non-negative"),
        ({"weights": [1, 2], "values": [1, 1]}, "capacity"),
    ])
    def test_shared_item_checks(self, raw, fragment):
        for algorithm_id in ("knapsack_01", "fractional_knapsack"):
            with pytest.raises(InvalidInputError, match=fragment):
                build_trace(algorithm_id, raw)

    def test_knapsack_needs_whole_weights(self):
        with pytest.raises(InvalidInputError, match="whole number"):
            build_trace("knapsack_01", {"weights": [1.5], "values": [1], "capacity": 3})

    def test_knapsack_accepts_integral_floats(self):
        trace = build_trace("knapsack_01", {"weights": [2.0], "values": [3], "capacity": 2.0})
        assert trace.final_state["value"] == 3

    def test_knapsack_capacity_limit(self):
        with pytest.raises(InvalidInputError, match="exceeds"):
            build_trace("knapsack_01", {
                "weights": [1], "values": [1], "capacity": config.MAX_KNAPSACK_CAPACITY + 1,
            })

    def test_fractional_accepts_real_weights(self):
        trace = build_trace("fractional_knapsack", {"weights": [0.5], "values": [1], "capacity": 0.25})
        assert trace.final_state["total_value"] == pytest.approx(0.5)

    def test_infinite_capacity(self):
        with pytest.raises(InvalidInputError, match="finite"):
            build_trace("fractional_knapsack", {"weights": [1], "values": [1], "capacity": float("inf")})


class TestOtherInputs:
    def test_interval_must_start_before_end(self):
        with pytest.raises(InvalidInputError, match="start before"):
            build_trace("interval_scheduling", {"intervals": [[3, 3]]})

    def test_interval_shape(self):
        with pytest.raises(InvalidInputError):
            build_trace("interval_scheduling", {"intervals": [[1, 2, 3]]})

    def test_lcs_needs_strings(self):
        with pytest.raises(InvalidInputError, match="string"):
            build_trace("lcs", {"first": ["A"], "second": "A"})


class TestGraphInputs:
    def test_unknown_source(self):
        with pytest.raises(InvalidInputError, match="Source node 'Z'"):
            build_trace("bfs", {"graph": WEIGHTED, "source": "Z"})

    def test_unknown_target(self):
        with pytest.raises(InvalidInputError, match="Target node 'Z'"):
            build_trace("dfs", {"graph": WEIGHTED, "source": "A", "target": "Z"})

    def test_dijkstra_rejects_negative_weight(self):
        with pytest.raises(InvalidInputError, match="negative weight"):
            build_trace("dijkstra", {"graph": [("A", "B", -1)], "source": "A"})

    def test_bellman_ford_accepts_negative_weight(self):
        graph = {"directed": True, "edges": [["A", "B", -1]]}
        trace = build_trace("bellman_ford", {"graph": graph, "source": "A", "target": "B"})
        assert trace.final_state["distance"] == -1

    @pytest.mark.parametrize("algorithm_id", ["dijkstra", "bellman_ford"])
    def test_shortest_path_target_must_be_reachable(self, algorithm_id):
        graph = [("A", "B", 1), ("C", "D", 1)]
        with pytest.raises(InvalidInputError, match="not reachable"):
            build_trace(algorithm_id, {"graph": graph, "source": "A", "target": "D"})

    def test_non_numeric_weight(self):
        with pytest.raises(InvalidInputError, match="weight"):
            build_trace("bfs", {"graph": [("A", "B", "heavy")], "source": "A"})

    def test_malformed_edges(self):
        with pytest.raises(InvalidInputError, match="Malformed graph"):
            build_trace("bfs", {"graph": [("A",)], "source": "A"})

    def test_unsupported_graph_type(self):
        with pytest.raises(InvalidInputError, match="unsupported type"):
            build_trace("bfs", {"graph": 42, "source": "A"})

    def test_adjacency_text(self):
        trace = build_trace("bfs", {"graph": "A: B C\nB: D", "source": "A"})
        assert trace.final_state["order"] == ["A", "B", "C", "D"]


class TestNoPartialTrace:
    def test_recorder_never_opened_on_bad_input(self):
        rec = TraceRecorder()
        with pytest.raises(InvalidInputError):
            build_trace("bubble_sort", {"values": "nope"}, recorder=rec)
        assert rec.generation == 0
        assert not rec.is_open
