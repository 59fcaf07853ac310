"""
edge.py — Graph Edge
====================
Connects two nodes and carries a weight.

Design decisions:
  - `source` and `target` are node-id strings, NOT Node references.
    This keeps edges serialisable and avoids circular references.
  - Weight defaults to 1 for unweighted graphs; algorithms that ignore
    weights simply never read it.
  - Edge ids are derived from the endpoints ("A-B") so that two runs over
    the same input produce identical traces.
"""

from enum import Enum
from typing import Optional


# ---------------------------------------------------------------------------
# Edge State Enum — semantic tags for the renderer
# ---------------------------------------------------------------------------
class EdgeState(Enum):
    DEFAULT  = "default"   # untouched
    RELAXED  = "relaxed"   # considered and improved a distance / discovered a node
    CHOSEN   = "chosen"    # on the final path
    IGNORED  = "ignored"   # considered and explicitly skipped
    ACTIVE   = "active"    # the edge being traversed RIGHT NOW


# ---------------------------------------------------------------------------
# Edge
# ---------------------------------------------------------------------------
class Edge:
    """
    Attributes:
        id       : Unique identifier (defaults to "source-target").
        source   : ID of the tail node.
        target   : ID of the head node.
        weight   : Numeric cost (default 1). Can be negative for Bellman-Ford.
        directed : If False, traversal works in both directions.
    """

    __slots__ = ("id", "source", "target", "weight", "directed")

    def __init__(
        self,
        source: str,
        target: str,
        weight: float = 1,
        directed: bool = False,
        edge_id: Optional[str] = None,
    ):
        self.source:   str   = str(source)
        self.target:   str   = str(target)
        self.id:       str   = edge_id or f"{self.source}-{self.target}"
        self.weight:   float = weight
        self.directed: bool  = directed

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":       self.id,
            "source":   self.source,
            "target":   self.target,
            "weight":   self.weight,
            "directed": self.directed,
        }

    @classmethod
    def from_dict(cls, data: dict, directed: bool = False) -> "Edge":
        return cls(
            source=data["source"],
            target=data["target"],
            weight=data.get("weight", 1),
            directed=data.get("directed", directed),
            edge_id=data.get("id"),
        )

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        arrow = " → " if self.directed else " ↔ "
        return f"Edge({self.source}{arrow}{self.target}, w={self.weight})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Edge) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
