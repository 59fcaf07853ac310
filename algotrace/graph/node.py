from enum import Enum
from typing import Optional


# ---------------------------------------------------------------------------
# Node State Enum — the semantic tags graph snapshots use in `highlights`
# ---------------------------------------------------------------------------
class NodeState(Enum):
    UNVISITED  = "unvisited"   # not yet discovered
    FRONTIER   = "frontier"    # discovered, waiting in the queue / stack / heap
    VISITED    = "visited"     # fully processed
    CURRENT    = "current"     # the node being expanded RIGHT NOW
    PATH       = "path"        # on the final reconstructed path
    SOURCE     = "source"      # start node
    TARGET     = "target"      # goal node


# ---------------------------------------------------------------------------
# Node
# ---------------------------------------------------------------------------
class Node:
    """
    Immutable identity (id, label).  Algorithm state never lives on the
    node; it lives in the StepBuilder's working state and is snapshotted
    into each Step.

    Attributes:
        id       : Unique identifier, e.g. "A".
        label    : Human-readable name (defaults to the id).
    """

    __slots__ = ("id", "label")

    def __init__(self, node_id: str, label: Optional[str] = None):
        self.id: str    = str(node_id)
        self.label: str = label or self.id

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {"id": self.id, "label": self.label}

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        return cls(node_id=data["id"], label=data.get("label"))

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Node(id={self.id}, label={self.label})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
