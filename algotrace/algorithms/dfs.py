"""
dfs.py — Depth-First Search
=============================
Generator-based DFS using an explicit stack (no Python recursion limit issues).

Yields a Step at:
  1. Push source onto stack                     →  ASSIGN
  2. Pop an unvisited node                      →  VISIT
  3. Pop an already-visited node                →  REJECT
  4. Push each unvisited neighbour              →  ASSIGN  (frontier update)
  5. Neighbour already visited                  →  REJECT
  6. Target popped                              →  SELECT  with the path
  7. Stack empty                                →  SELECT summary / REJECT unreachable

Neighbours are pushed in reverse declaration order so they pop in
declaration order, matching the recursive textbook DFS.
"""

from typing import Any, Dict, Generator, List, Mapping, Optional

from algotrace.algorithms import validation
from algotrace.algorithms.paths import node_states, path_edges, reconstruct
from algotrace.algorithms.step import Step, StepBuilder, StepKind
from algotrace.graph import EdgeState, Graph


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def DFS(graph, source, target):",          # 0
    "    stack ← [source]",                     # 1
    "    visited ← {}",                         # 2
    "    parent ← {}",                          # 3
    "    while stack is not empty:",            # 4
    "        node ← stack.pop()",               # 5
    "        if node in visited: continue",     # 6
    "        visited.add(node)",                # 7
    "        if node == target: return path",   # 8
    "        for neighbour in reversed(adj(node)):",  # 9
    "            if neighbour not visited:",    # 10
    "                parent[neighbour] = node", # 11
    "                stack.push(neighbour)",    # 12
    "    return NOT FOUND",                     # 13
]


def prepare(raw: Mapping[str, Any]) -> Dict[str, Any]:
    return validation.graph_input(raw)


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def dfs(
    graph: Graph,
    source: str,
    target: Optional[str] = None,
) -> Generator[Step, None, None]:
    """
    Iterative DFS with parent tracking for path reconstruction.

    "Mark on pop": a node may sit on the stack more than once; the copy
    pushed last is the one that pops first, so its parent overwrites any
    earlier one.
    """

    stack = [source]
    sb = StepBuilder(stack=[source], order=[], parent={source: None}, path=[])

    def tags(current: Optional[str] = None, **extra: Any) -> Dict[str, Any]:
        visited = sb.state["order"]
        extra["node_states"] = node_states(graph, visited, [n for n in stack if n not in visited], current)
        extra["frontier"] = list(stack)
        return extra

    # --- init step ---
    yield sb.build(
        StepKind.ASSIGN,
        f"Initialise: push source '{source}' onto the stack",
        node_ids=(source,),
        highlights=tags(),
        line=1,
    )

    # --- main loop ---
    while stack:
        node = stack.pop()
        sb.set("stack", list(stack))

        # already visited (can happen because we mark-on-pop)
        if node in sb.state["order"]:
            yield sb.decide(False, f"Pop '{node}': already visited, skip", node_ids=(node,), line=6, **tags())
            continue

        # -- pop & visit --
        sb.mark_visited(node, key="order")
        yield sb.build(
            StepKind.VISIT,
            f"Pop '{node}' and mark it visited; explore its neighbours before backtracking",
            node_ids=(node,),
            highlights=tags(node, visiting=node),
            line=7,
        )

        # -- target check --
        if node == target:
            path = reconstruct(sb.state["parent"], target)
            sb.set("path", path)
            yield sb.decide(
                True,
                f"Target '{target}' found: {' → '.join(path)} ({len(path) - 1} edge(s))",
                node_ids=path, line=8,
                path_edges=path_edges(path),
                node_states=node_states(graph, sb.state["order"], path=path),
            )
            return

        # -- push neighbours --
        for nbr, edge in reversed(graph.neighbours(node)):
            if nbr in sb.state["order"]:
                yield sb.decide(
                    False,
                    f"Edge {node}→{nbr}: '{nbr}' already visited, ignore",
                    node_ids=(node, nbr), line=10,
                    **tags(node, edge=[node, nbr], edge_state=EdgeState.IGNORED.value),
                )
                continue

            stack.append(nbr)
            sb.set_cell("parent", nbr, node)
            sb.set("stack", list(stack))
            yield sb.build(
                StepKind.ASSIGN,
                f"Edge {node}→{nbr}: push '{nbr}' onto the stack (parent '{node}')",
                node_ids=(node, nbr),
                highlights=tags(node, edge=[node, nbr], edge_state=EdgeState.RELAXED.value),
                line=12,
            )

    # --- not found / done ---
    order = sb.state["order"]
    if target is not None:
        yield sb.decide(
            False,
            f"Stack is empty: target '{target}' is not reachable from '{source}'",
            line=13, **tags(),
        )
        return
    yield sb.decide(
        True,
        f"Traversal complete. Visit order: {', '.join(order)}",
        node_ids=order, line=13, **tags(),
    )
