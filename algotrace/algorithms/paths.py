"""Helpers shared by the graph algorithms: path reconstruction and node tags."""

from typing import Dict, Iterable, List, Optional

from algotrace.graph import Graph, NodeState


def reconstruct(parent: Dict[str, Optional[str]], target: str) -> List[str]:
    path = []
    cur: Optional[str] = target
    while cur is not None:
        path.append(cur)
        cur = parent.get(cur)
    path.reverse()
    return path


def path_edges(path: List[str]) -> List[List[str]]:
    return [[path[i], path[i + 1]] for i in range(len(path) - 1)]


def node_states(
    graph: Graph,
    visited: Iterable[str] = (),
    frontier: Iterable[str] = (),
    current: Optional[str] = None,
    path: Iterable[str] = (),
) -> Dict[str, str]:
    """{node_id: NodeState value} for every node; later tags win."""
    states = {nid: NodeState.UNVISITED.value for nid in graph.node_ids()}
    for nid in frontier:
        states[nid] = NodeState.FRONTIER.value
    for nid in visited:
        states[nid] = NodeState.VISITED.value
    for nid in path:
        states[nid] = NodeState.PATH.value
    if current is not None:
        states[current] = NodeState.CURRENT.value
    return states
