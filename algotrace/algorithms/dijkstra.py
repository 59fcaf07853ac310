"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Generator-based Dijkstra using a min-heap (heapq).

Yields a Step at:
  1. Initialise distances / push source         →  ASSIGN
  2. Pop a stale heap entry                     →  REJECT
  3. Pop minimum-distance node                  →  VISIT   (distance is final)
  4. Neighbour already final                    →  REJECT  (edge ignored)
  5. Relaxation improves a distance             →  RELAX
  6. Relaxation does not improve                →  COMPARE
  7. Target popped                              →  SELECT  with path and cost
  8. Heap empty                                 →  SELECT  distance summary

Heap entries are (distance, declaration order, node) so equal distances
pop in the order the nodes were declared.

Working state:  {"distances", "parent", "heap", "finalised", "path", "distance"}

Dijkstra requires non-negative weights; `prepare` rejects negative edges.
"""

import heapq
from typing import Any, Dict, Generator, List, Mapping, Optional, Tuple

from algotrace.algorithms import validation
from algotrace.algorithms.paths import node_states, path_edges, reconstruct
from algotrace.algorithms.step import INF, Step, StepBuilder, StepKind, fmt
from algotrace.graph import EdgeState, Graph


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Dijkstra(graph, source, target):",        # 0
    "    dist ← {v: ∞ for v in V}",                # 1
    "    dist[source] ← 0",                        # 2
    "    pq ← [(0, source)]",                      # 3
    "    parent ← {}",                             # 4
    "    while pq is not empty:",                   # 5
    "        (d, node) ← pq.pop_min()",            # 6
    "        if d > dist[node]: continue",         # 7
    "        if node == target: return path",      # 8
    "        for (neighbour, w) in adj(node):",    # 9
    "            new_dist ← dist[node] + w",       # 10
    "            if new_dist < dist[neighbour]:",  # 11
    "                dist[neighbour] ← new_dist",  # 12
    "                parent[neighbour] = node",    # 13
    "                pq.push((new_dist, nbr))",    # 14
    "    return dist",                             # 15
]


def prepare(raw: Mapping[str, Any]) -> Dict[str, Any]:
    return validation.graph_input(raw, shortest_path=True, allow_negative=False)


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def dijkstra(
    graph: Graph,
    source: str,
    target: Optional[str] = None,
) -> Generator[Step, None, None]:

    order = {nid: i for i, nid in enumerate(graph.node_ids())}
    pq: List[Tuple[float, int, str]] = [(0, order[source], source)]
    finalised: List[str] = []

    dist = {nid: INF for nid in graph.node_ids()}
    dist[source] = 0
    sb = StepBuilder(
        distances=dist,
        parent={source: None},
        heap=[[0, source]],
        finalised=[],
        path=[],
        distance=None,
    )

    def sync_heap() -> None:
        sb.set("heap", [[d, n] for d, _, n in sorted(pq)])

    def tags(current: Optional[str] = None, **extra: Any) -> Dict[str, Any]:
        frontier = [n for _, _, n in pq if n not in finalised]
        extra["node_states"] = node_states(graph, finalised, frontier, current)
        extra["frontier"] = sorted(set(frontier), key=order.get)
        return extra

    # --- init step ---
    yield sb.build(
        StepKind.ASSIGN,
        f"Initialise: every distance = ∞ except source '{source}' = 0. "
        f"Push '{source}' into the priority queue.",
        node_ids=(source,),
        highlights=tags(),
        line=2,
    )

    # --- main loop ---
    while pq:
        d, _, node = heapq.heappop(pq)
        sync_heap()
        dists = sb.state["distances"]

        # stale entry
        if node in finalised or d > dists[node]:
            yield sb.decide(
                False,
                f"Pop (dist={fmt(d)}, '{node}'): stale entry, best known is {fmt(dists[node])}. Skip.",
                node_ids=(node,), line=7, **tags(),
            )
            continue

        finalised.append(node)
        sb.mark_visited(node, key="finalised")
        yield sb.build(
            StepKind.VISIT,
            f"Pop '{node}' with distance {fmt(d)}: the smallest in the queue, so it is now final",
            node_ids=(node,),
            highlights=tags(node, visiting=node),
            line=6,
        )

        # -- target check --
        if node == target:
            path = reconstruct(sb.state["parent"], target)
            sb.set("path", path)
            sb.set("distance", dists[target])
            yield sb.decide(
                True,
                f"Target '{target}' popped. Shortest distance = {fmt(dists[target])} "
                f"via {' → '.join(path)}",
                node_ids=path, line=8,
                path_edges=path_edges(path),
                node_states=node_states(graph, finalised, path=path),
            )
            return

        # -- relax neighbours --
        for nbr, edge in graph.neighbours(node):
            dists = sb.state["distances"]
            if nbr in finalised:
                yield sb.decide(
                    False,
                    f"Edge {node}→{nbr} (w={fmt(edge.weight)}): '{nbr}' already final, skip",
                    node_ids=(node, nbr), line=9,
                    **tags(node, edge=[node, nbr], edge_state=EdgeState.IGNORED.value),
                )
                continue

            new_dist = dists[node] + edge.weight
            summary = f"{fmt(dists[node])} + {fmt(edge.weight)} = {fmt(new_dist)}"
            if new_dist < dists[nbr]:
                old = dists[nbr]
                sb.update_distance(nbr, new_dist)
                sb.set_cell("parent", nbr, node)
                heapq.heappush(pq, (new_dist, order[nbr], nbr))
                sync_heap()
                yield sb.build(
                    StepKind.RELAX,
                    f"Relax {node}→{nbr}: {summary} < {fmt(old)}, update dist['{nbr}']",
                    node_ids=(node, nbr),
                    highlights=tags(node, edge=[node, nbr], edge_state=EdgeState.RELAXED.value),
                    line=12,
                )
            else:
                yield sb.build(
                    StepKind.COMPARE,
                    f"Edge {node}→{nbr}: {summary} ≥ {fmt(dists[nbr])}, no improvement",
                    node_ids=(node, nbr),
                    highlights=tags(node, comparing=[node, nbr], edge=[node, nbr],
                                    edge_state=EdgeState.IGNORED.value),
                    line=11,
                )

    # --- heap exhausted ---
    dists = sb.state["distances"]
    summary = ", ".join(f"{n}={fmt(dists[n])}" for n in graph.node_ids())
    yield sb.decide(
        True,
        f"Priority queue empty. Final distances: {summary}",
        node_ids=tuple(finalised), line=15, **tags(),
    )
