"""
bfs.py — Breadth-First Search
==============================
Generator-based BFS.  Yields a Step at every meaningful event:
  1. Source enqueued                →  ASSIGN  (frontier update)
  2. Dequeue a node                 →  VISIT
  3. Neighbour already discovered   →  REJECT  (edge ignored)
  4. Enqueue an unseen neighbour    →  ASSIGN  (frontier update)
  5. Target dequeued                →  SELECT  with the hop-count path
  6. Queue exhausted                →  SELECT  traversal summary, or
                                       REJECT  when a target was unreachable

Neighbours are examined in declaration order, so the visit order is the
textbook level order.

Working state:  {"queue", "discovered", "order", "parent", "path"}
"""

from collections import deque
from typing import Any, Dict, Generator, List, Mapping, Optional

from algotrace.algorithms import validation
from algotrace.algorithms.paths import node_states, path_edges, reconstruct
from algotrace.algorithms.step import Step, StepBuilder, StepKind
from algotrace.graph import EdgeState, Graph


# ---------------------------------------------------------------------------
# Pseudocode — each string is one displayed line; index = pseudocode_line
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def BFS(graph, source, target):",          # 0
    "    queue ← [source]",                     # 1
    "    visited ← {source}",                   # 2
    "    parent ← {}",                          # 3
    "    while queue is not empty:",            # 4
    "        node ← queue.dequeue()",           # 5
    "        if node == target: return path",   # 6
    "        for neighbour in adj(node):",      # 7
    "            if neighbour not visited:",    # 8
    "                visited.add(neighbour)",   # 9
    "                parent[neighbour] = node", # 10
    "                queue.enqueue(neighbour)", # 11
    "    return NOT FOUND",                     # 12
]


def prepare(raw: Mapping[str, Any]) -> Dict[str, Any]:
    return validation.graph_input(raw)


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def bfs(
    graph: Graph,
    source: str,
    target: Optional[str] = None,
) -> Generator[Step, None, None]:
    """
    Yields Step snapshots for every event during BFS execution.

    Args:
        graph  : The graph to traverse.
        source : Starting node id.
        target : Optional goal node id; the run stops when it is dequeued.
    """

    queue = deque([source])
    sb = StepBuilder(queue=[source], discovered=[source], order=[], parent={source: None}, path=[])

    def tags(current: Optional[str] = None, **extra: Any) -> Dict[str, Any]:
        extra["node_states"] = node_states(graph, sb.state["order"], queue, current)
        extra["frontier"] = list(queue)
        return extra

    # --- initialisation step ---
    yield sb.build(
        StepKind.ASSIGN,
        f"Initialise: enqueue source '{source}' and mark it discovered",
        node_ids=(source,),
        highlights=tags(),
        line=1,
    )

    # --- main loop ---
    while queue:
        node = queue.popleft()
        sb.set("queue", list(queue))
        sb.mark_visited(node, key="order")
        yield sb.build(
            StepKind.VISIT,
            f"Dequeue '{node}': the earliest-discovered node waiting (FIFO)",
            node_ids=(node,),
            highlights=tags(node, visiting=node),
            line=5,
        )

        # -- target check --
        if node == target:
            path = reconstruct(sb.state["parent"], target)
            sb.set("path", path)
            yield sb.decide(
                True,
                f"Target '{target}' reached in {len(path) - 1} hop(s): {' → '.join(path)}",
                node_ids=path, line=6,
                path_edges=path_edges(path),
                node_states=node_states(graph, sb.state["order"], queue, path=path),
            )
            return

        # -- explore neighbours --
        for nbr, edge in graph.neighbours(node):
            if nbr in sb.state["discovered"]:
                yield sb.decide(
                    False,
                    f"Edge {node}→{nbr}: '{nbr}' already discovered, skip",
                    node_ids=(node, nbr), line=8,
                    **tags(node, edge=[node, nbr], edge_state=EdgeState.IGNORED.value),
                )
                continue

            queue.append(nbr)
            sb.mark_visited(nbr, key="discovered")
            sb.set_cell("parent", nbr, node)
            sb.set("queue", list(queue))
            yield sb.build(
                StepKind.ASSIGN,
                f"Edge {node}→{nbr}: '{nbr}' is new, enqueue it (parent '{node}')",
                node_ids=(node, nbr),
                highlights=tags(node, edge=[node, nbr], edge_state=EdgeState.RELAXED.value),
                line=11,
            )

    # --- exhausted ---
    order = sb.state["order"]
    if target is not None:
        yield sb.decide(
            False,
            f"Queue is empty: target '{target}' is not reachable from '{source}'",
            line=12, **tags(),
        )
        return
    yield sb.decide(
        True,
        f"Traversal complete. Visit order: {', '.join(order)}",
        node_ids=order, line=12, **tags(),
    )
