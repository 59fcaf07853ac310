"""
snapshot.py — Renderer-Facing Snapshot Model
=============================================
A Snapshot is what a subscriber receives each time the playback
position changes: the Step at that position plus enough context
(trace generation, total length, schema version) for a renderer to
draw it without ever touching the Trace itself.

The JSON helpers here are the one place that knows how engine values
become wire values:

    • INF / -INF        →  "inf" / "-inf"
    • Enum              →  its value
    • Graph             →  Graph.to_dict()
    • tuple             →  list
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from algotrace.config import SNAPSHOT_VERSION
from algotrace.algorithms.step import Step, Trace
from algotrace.graph import Graph


@dataclass(frozen=True)
class Snapshot:
    version:      int
    algorithm_id: str
    generation:   int
    step_index:   int
    total_steps:  int
    step:         Step

    @property
    def state(self) -> Dict[str, Any]:
        return self.step.state

    @property
    def highlights(self) -> Dict[str, Any]:
        return self.step.highlights

    @property
    def message(self) -> str:
        return self.step.message

    @property
    def is_final(self) -> bool:
        return self.step.is_final

    @classmethod
    def from_trace(cls, trace: Trace, index: int) -> "Snapshot":
        return cls(
            version=SNAPSHOT_VERSION,
            algorithm_id=trace.algorithm_id,
            generation=trace.generation,
            step_index=index,
            total_steps=len(trace),
            step=trace[index],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version":      self.version,
            "algorithm_id": self.algorithm_id,
            "generation":   self.generation,
            "step_index":   self.step_index,
            "total_steps":  self.total_steps,
            "step":         step_to_dict(self.step),
        }


# ---------------------------------------------------------------------------
# JSON helpers
# ---------------------------------------------------------------------------
def to_jsonable(value: Any) -> Any:
    if isinstance(value, float) and math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Graph):
        return value.to_dict()
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


def step_to_dict(step: Optional[Step]) -> Optional[Dict[str, Any]]:
    if step is None:
        return None
    return {
        "index":           step.index,
        "kind":            step.kind.value,
        "message":         step.message,
        "indices":         to_jsonable(step.indices),
        "node_ids":        list(step.node_ids),
        "state":           to_jsonable(step.state),
        "highlights":      to_jsonable(step.highlights),
        "pseudocode_line": step.pseudocode_line,
        "is_final":        step.is_final,
    }
