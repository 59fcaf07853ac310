"""
graph/
-----
Graph-shaped Algorithm Input.  Public API:

    from algotrace.graph import Graph, Node, Edge
    from algotrace.graph import NodeState, EdgeState
"""

from algotrace.graph.node  import Node,  NodeState
from algotrace.graph.edge  import Edge,  EdgeState
from algotrace.graph.graph import Graph

__all__ = [
    "Node",      "NodeState",
    "Edge",      "EdgeState",
    "Graph",
]
