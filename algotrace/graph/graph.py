"""
graph.py — Graph Container
===========================
The graph-shaped Algorithm Input.  BFS / DFS / Dijkstra / Bellman-Ford
read it; nothing ever writes algorithm state back into it.

Responsibilities:
  1. CRUD on nodes & edges                  (add / get)
  2. Adjacency queries                      (neighbours, directed_edges)
  3. Reachability                           (input validation for shortest paths)
  4. Import from edge lists / adjacency-list text
  5. Serialisation round-trip               (to_dict / from_dict)

Design decisions:
  - Nodes & edges stored in plain dicts keyed by id for O(1) lookup.
    Dict insertion order IS the declaration order, which is what every
    algorithm uses to break ties.
  - A separate adjacency dict  `_adj[node_id] → [(neighbour_id, edge_id)]`
    is maintained incrementally so neighbour queries are O(degree), not O(E).
  - `directed` is a graph-level flag; individual Edge objects also carry it
    so serialisation is self-contained.
"""

from collections import deque
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

from algotrace.graph.edge import Edge
from algotrace.graph.node import Node


class Graph:
    """
    Attributes:
        nodes      : {node_id: Node}
        edges      : {edge_id: Edge}
        directed   : bool – graph-level directedness
        _adj       : {node_id: [(neighbour_id, edge_id), …]}
    """

    def __init__(self, directed: bool = False):
        self.nodes:    Dict[str, Node] = {}
        self.edges:    Dict[str, Edge] = {}
        self.directed: bool           = directed
        self._adj:     Dict[str, List[Tuple[str, str]]] = {}   # node_id → [(nbr, edge_id)]

    # ==================================================================
    # NODE CRUD
    # ==================================================================
    def add_node(self, node: Node) -> Node:
        self.nodes.setdefault(node.id, node)
        self._adj.setdefault(node.id, [])
        return self.nodes[node.id]

    def create_node(self, node_id: str, label: Optional[str] = None) -> Node:
        """Convenience: create + add in one call (no-op if it exists)."""
        return self.add_node(Node(node_id=node_id, label=label))

    def has_node(self, node_id: str) -> bool:
        return node_id in self.nodes

    # ==================================================================
    # EDGE CRUD
    # ==================================================================
    def add_edge(self, edge: Edge) -> Edge:
        # parallel edges get a numbered id so both survive
        if edge.id in self.edges:
            n = 2
            while f"{edge.id}#{n}" in self.edges:
                n += 1
            edge.id = f"{edge.id}#{n}"
        self.create_node(edge.source)
        self.create_node(edge.target)
        self.edges[edge.id] = edge
        # maintain adjacency
        self._adj[edge.source].append((edge.target, edge.id))
        if not edge.directed:
            self._adj[edge.target].append((edge.source, edge.id))
        return edge

    def create_edge(self, source: str, target: str, weight: float = 1, edge_id: Optional[str] = None) -> Edge:
        return self.add_edge(Edge(source=source, target=target, weight=weight, directed=self.directed, edge_id=edge_id))

    def get_edge_between(self, a: str, b: str) -> Optional[Edge]:
        """First edge connecting a and b (direction-aware)."""
        for nbr, eid in self._adj.get(a, []):
            if nbr == b:
                return self.edges[eid]
        return None

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours(self, node_id: str) -> List[Tuple[str, Edge]]:
        """Return [(neighbour_id, edge)] in declaration order."""
        return [(nbr_id, self.edges[eid]) for nbr_id, eid in self._adj.get(node_id, [])]

    def directed_edges(self) -> List[Tuple[str, str, float, Edge]]:
        """Every traversable (u, v, w, edge); undirected edges appear both ways."""
        result = []
        for edge in self.edges.values():
            result.append((edge.source, edge.target, edge.weight, edge))
            if not edge.directed:
                result.append((edge.target, edge.source, edge.weight, edge))
        return result

    def reachable_from(self, source: str) -> Set[str]:
        seen = {source}
        queue = deque([source])
        while queue:
            node = queue.popleft()
            for nbr, _ in self._adj.get(node, []):
                if nbr not in seen:
                    seen.add(nbr)
                    queue.append(nbr)
        return seen

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "directed": self.directed,
            "nodes":    [n.to_dict() for n in self.nodes.values()],
            "edges":    [e.to_dict() for e in self.edges.values()],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        """
        Accepts the `to_dict()` shape.  Nodes may be given as dicts or as
        bare ids; edges as dicts or as (source, target[, weight]) tuples.
        """
        g = cls(directed=data.get("directed", False))
        for nd in data.get("nodes", []):
            g.add_node(Node.from_dict(nd) if isinstance(nd, dict) else Node(nd))
        for ed in data.get("edges", []):
            if isinstance(ed, dict):
                g.add_edge(Edge.from_dict(ed, directed=g.directed))
            else:
                g._add_tuple(ed)
        return g

    @classmethod
    def from_edges(cls, edges: Iterable[Any], directed: bool = False, nodes: Iterable[str] = ()) -> "Graph":
        """
        Build from (source, target) or (source, target, weight) tuples.

            Graph.from_edges([("A", "B", 4), ("A", "D", 2)])
        """
        g = cls(directed=directed)
        for nid in nodes:
            g.create_node(nid)
        for ed in edges:
            g._add_tuple(ed)
        return g

    def _add_tuple(self, ed: Any) -> Edge:
        if len(ed) == 2:
            return self.create_edge(ed[0], ed[1])
        if len(ed) == 3:
            return self.create_edge(ed[0], ed[1], weight=ed[2])
        raise ValueError(f"Edge must be (source, target) or (source, target, weight), got {ed!r}")

    # ---------- Import from Adjacency List (text) ----------
    @classmethod
    def from_adjacency_list(cls, text: str, directed: bool = False) -> "Graph":
        """
        Parse a simple text adjacency list.

        Supported formats (one node per line):
            A: B C D            → A connects to B, C, D  (weight 1)
            A: B(3) C(7)        → A→B weight 3, A→C weight 7
            0 → 1,2,3           → alternate arrow syntax
            0: 1(5), 2(3)       → comma-separated with weights
        """
        g = cls(directed=directed)
        seen_edges: Set[Any] = set()

        for line in text.strip().splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            # split on ':' or '→'
            if ":" in line:
                parts = line.split(":", 1)
            elif "→" in line:
                parts = line.split("→", 1)
            elif "->" in line:
                parts = line.split("->", 1)
            else:
                raise ValueError(f"Cannot parse adjacency line: {line!r}")

            src = parts[0].strip()
            g.create_node(src)

            for token in parts[1].replace(",", " ").split():
                # parse optional weight: "B(3)" or "B"
                if "(" in token and token.endswith(")"):
                    tgt, w_str = token[:-1].split("(", 1)
                    w = float(w_str)
                    if w.is_integer():
                        w = int(w)
                else:
                    tgt, w = token, 1
                key = (src, tgt) if directed else frozenset([src, tgt])
                if key in seen_edges:
                    continue
                seen_edges.add(key)
                g.create_edge(src, tgt, weight=w)

        return g

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def node_ids(self) -> List[str]:
        return list(self.nodes.keys())

    def __repr__(self) -> str:
        kind = "directed" if self.directed else "undirected"
        return f"Graph({kind}, nodes={self.node_count()}, edges={self.edge_count()})"
