"""
bellman_ford.py — Bellman–Ford Algorithm
=========================================
The single-source shortest-path algorithm that handles NEGATIVE edge
weights (but not negative cycles).

Structure:
  • Up to V-1 rounds of relaxing every edge in the graph.
  • A V-th "detector" round that flags negative cycles.

Yields a Step for:
  1. Initialisation                             →  ASSIGN
  2. Round start                                →  ASSIGN  (round counter)
  3. Each successful relaxation                 →  RELAX
  4. Each failed relaxation                     →  COMPARE
  5. A round with no relaxation                 →  SELECT  (converged, stop early)
  6. Detector round start                       →  ASSIGN
  7. Negative cycle found                       →  REJECT  (final)
  8. Path / distance summary                    →  SELECT  (final)

An unreachable target is rejected by `prepare`, before any step exists.

Edges leaving a node whose distance is still ∞ cannot relax anything and
produce no step.

Working state:  {"distances", "parent", "round", "negative_cycle", "path", "distance"}
"""

from typing import Any, Dict, Generator, List, Mapping, Optional

from algotrace.algorithms import validation
from algotrace.algorithms.paths import node_states, path_edges, reconstruct
from algotrace.algorithms.step import INF, Step, StepBuilder, StepKind, fmt
from algotrace.graph import EdgeState, Graph


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def BellmanFord(graph, source):",             # 0
    "    dist ← {v: ∞ for v in V}",                # 1
    "    dist[source] ← 0",                        # 2
    "    parent ← {}",                             # 3
    "    for i in 1 … |V|-1:",                     # 4
    "        for each edge (u, v, w):",            # 5
    "            if dist[u] + w < dist[v]:",       # 6
    "                dist[v] ← dist[u] + w",       # 7
    "                parent[v] = u",               # 8
    "        if nothing changed: break",           # 9
    "    for each edge (u, v, w):",                # 10
    "        if dist[u] + w < dist[v]:",           # 11
    "            return NEGATIVE CYCLE",           # 12
    "    return dist, parent",                     # 13
]


def prepare(raw: Mapping[str, Any]) -> Dict[str, Any]:
    return validation.graph_input(raw, shortest_path=True)


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def bellman_ford(
    graph: Graph,
    source: str,
    target: Optional[str] = None,
) -> Generator[Step, None, None]:

    V = graph.node_count()
    all_edges = graph.directed_edges()

    dist = {nid: INF for nid in graph.node_ids()}
    dist[source] = 0
    sb = StepBuilder(
        distances=dist,
        parent={source: None},
        round=0,
        negative_cycle=False,
        path=[],
        distance=None,
    )

    def tags(current: Optional[str] = None, **extra: Any) -> Dict[str, Any]:
        reached = [n for n, d in sb.state["distances"].items() if d != INF]
        extra["node_states"] = node_states(graph, reached, current=current)
        return extra

    # -- init step --
    yield sb.build(
        StepKind.ASSIGN,
        f"Initialise: dist['{source}'] = 0, all others = ∞. "
        f"At most {max(V - 1, 0)} round(s) over {len(all_edges)} directed edge(s).",
        node_ids=(source,),
        highlights=tags(),
        line=2,
    )

    # ==============================================================
    # MAIN ROUNDS
    # ==============================================================
    for round_idx in range(1, V):
        sb.set("round", round_idx)
        yield sb.build(
            StepKind.ASSIGN,
            f"Round {round_idx} of {V - 1}: scan every edge",
            highlights=tags(),
            line=4,
        )

        any_relaxed = False
        for u, v, w, _edge in all_edges:
            dists = sb.state["distances"]
            if dists[u] == INF:
                continue

            new_dist = dists[u] + w
            summary = f"{fmt(dists[u])} + {fmt(w)} = {fmt(new_dist)}"
            if new_dist < dists[v]:
                old = dists[v]
                sb.update_distance(v, new_dist)
                sb.set_cell("parent", v, u)
                any_relaxed = True
                yield sb.build(
                    StepKind.RELAX,
                    f"Relax {u}→{v} (w={fmt(w)}): {summary} < {fmt(old)}, update dist['{v}']",
                    node_ids=(u, v),
                    highlights=tags(u, edge=[u, v], edge_state=EdgeState.RELAXED.value),
                    line=7,
                )
            else:
                yield sb.build(
                    StepKind.COMPARE,
                    f"Edge {u}→{v} (w={fmt(w)}): {summary} ≥ {fmt(dists[v])}, no change",
                    node_ids=(u, v),
                    highlights=tags(u, comparing=[u, v], edge=[u, v],
                                    edge_state=EdgeState.IGNORED.value),
                    line=6,
                )

        if not any_relaxed:
            yield sb.decide(
                True,
                f"Round {round_idx}: no distance changed, so the distances have converged. "
                f"Skip the remaining rounds.",
                line=9, **tags(),
            )
            break

    # ==============================================================
    # NEGATIVE-CYCLE DETECTOR (round V)
    # ==============================================================
    sb.set("round", V)
    yield sb.build(
        StepKind.ASSIGN,
        "Negative-cycle check: one more pass over every edge",
        highlights=tags(),
        line=10,
    )

    dists = sb.state["distances"]
    for u, v, w, _edge in all_edges:
        if dists[u] == INF:
            continue
        if dists[u] + w < dists[v]:
            sb.set("negative_cycle", True)
            yield sb.decide(
                False,
                f"Negative cycle detected via edge {u}→{v} (w={fmt(w)}): "
                f"{fmt(dists[u])} + {fmt(w)} = {fmt(dists[u] + w)} < {fmt(dists[v])}. "
                f"Shortest paths are undefined.",
                node_ids=(u, v), line=12,
                **tags(u, edge=[u, v], edge_state=EdgeState.ACTIVE.value),
            )
            return

    # ==============================================================
    # RESULT
    # ==============================================================
    if target is None:
        summary = ", ".join(f"{n}={fmt(dists[n])}" for n in graph.node_ids())
        yield sb.decide(True, f"No negative cycle. Final distances: {summary}", line=13, **tags())
        return

    path = reconstruct(sb.state["parent"], target)
    sb.set("path", path)
    sb.set("distance", dists[target])
    yield sb.decide(
        True,
        f"No negative cycle. Shortest path to '{target}': {' → '.join(path)}, "
        f"cost = {fmt(dists[target])}",
        node_ids=path, line=13,
        path_edges=path_edges(path),
        node_states=node_states(graph, path=path),
    )
