"""
step.py — Algorithm Step Snapshot
==================================
Every algorithm is a generator that yields Step objects.
A Step is a frozen-in-time picture of one micro-operation:

    • What kind of operation happened (compare, swap, relax, …)
    • Which array positions / graph nodes it touched
    • The full working state AFTER the operation was applied
      (array contents, DP table, queue / stack, distance map)
    • Semantic highlight tags for the renderer (comparing, sorted, path, …)
    • Which line of pseudocode is executing right now
    • A plain-English description of the decision that was made

Design decisions:
  - Step is a frozen dataclass.  It is a SNAPSHOT.  The algorithm
    generator is the only writer; the recorder / controller / renderer
    are pure readers.
  - The StepBuilder owns the algorithm's working state.  Algorithms
    mutate it only through the primitives below (set_cell, swap_indices,
    mark_visited, update_distance, …) and `build()` deep-copies it into
    the new Step, so later mutation can never leak into a recorded Step.
  - `highlights` carries tags only, never colours or geometry.
"""

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union


# Unreached distance.  Compares correctly against every finite float.
INF = float("inf")


class StepKind(Enum):
    COMPARE   = "compare"
    SWAP      = "swap"
    ASSIGN    = "assign"
    SELECT    = "select"
    REJECT    = "reject"
    VISIT     = "visit"
    RELAX     = "relax"
    DIVIDE    = "divide"
    MERGE     = "merge"
    BACKTRACK = "backtrack"


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        index           : 0-based position of this step in its Trace.
        kind            : The micro-operation (StepKind).
        message         : Human-readable description of the decision made.
        indices         : Array positions / table coordinates involved.
        node_ids        : Graph node ids involved.
        state           : Deep copy of the working data after this step.
        highlights      : {tag: value} semantic tags for the renderer:
                            • "comparing"  – [i, j]
                            • "buffer_comparing" – {"left": i, "right": j} into a merge buffer
                            • "swapping"   – [i, j]
                            • "sorted"     – indices in final position
                            • "found"      – index of the search hit
                            • "visiting"   – node id being expanded
                            • "path_edges" – [(u, v), …] on the answer path
                            • "cell"       – (row, col) of a DP cell
        pseudocode_line : 0-based index into the algorithm's PSEUDOCODE.
        is_final        : True on the very last step of a Trace.
    """

    index:           int
    kind:            StepKind
    message:         str
    indices:         Tuple[Any, ...]      = ()
    node_ids:        Tuple[str, ...]      = ()
    state:           Dict[str, Any]       = field(default_factory=dict)
    highlights:      Dict[str, Any]       = field(default_factory=dict)
    pseudocode_line: int                  = 0
    is_final:        bool                 = False


@dataclass(frozen=True)
class Trace:
    """An ordered, finite, immutable sequence of Steps for one run."""

    algorithm_id: str
    steps:        Tuple[Step, ...]     = ()
    input:        Dict[str, Any]       = field(default_factory=dict)
    generation:   int                  = 0
    build_ms:     float                = 0.0

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[Step]:
        return iter(self.steps)

    def __getitem__(self, idx: int) -> Step:
        return self.steps[idx]

    @property
    def final_step(self) -> Optional[Step]:
        return self.steps[-1] if self.steps else None

    @property
    def final_state(self) -> Dict[str, Any]:
        last = self.final_step
        return copy.deepcopy(last.state) if last else {}

    def count(self, kind: StepKind) -> int:
        return sum(1 for s in self.steps if s.kind is kind)

    def of_kind(self, kind: StepKind) -> List[Step]:
        return [s for s in self.steps if s.kind is kind]


# ---------------------------------------------------------------------------
# Formatting helper for step messages
# ---------------------------------------------------------------------------
def fmt(value: Any) -> str:
    """Render numbers the way a textbook would: 4 not 4.0, ∞ for INF."""
    if isinstance(value, float):
        if value == INF:
            return "∞"
        if value == -INF:
            return "-∞"
        if value.is_integer():
            return str(int(value))
        return f"{value:.4g}"
    return str(value)


# ---------------------------------------------------------------------------
# StepBuilder — the working-state owner every algorithm writes through
# ---------------------------------------------------------------------------
Index = Union[int, Tuple[int, int]]


class StepBuilder:
    """
    Mutable scratch-pad that algorithms use to construct Steps cleanly.

    Usage inside an algorithm generator:
        sb = StepBuilder(array=[5, 3, 1])
        yield sb.compare([0, 1], "Compare 5 and 3")
        yield sb.swap("array", 0, 1, "5 > 3: swap")
        sb.mark("sorted", 2)

    Persistent marks (set with `mark`) are copied into every later step's
    highlights until cleared with `unmark`; per-step highlights passed to
    `build` apply to that step only.
    """

    def __init__(self, **state: Any):
        self.state:           Dict[str, Any]        = copy.deepcopy(state)
        self.marks:           Dict[str, List[Any]]  = {}
        self.pseudocode_line: int                   = 0
        self._next_index:     int                   = 0

    # -- state-mutation primitives --
    def set(self, key: str, value: Any) -> None:
        self.state[key] = copy.deepcopy(value)

    def set_cell(self, key: str, index: Index, value: Any) -> None:
        target = self.state[key]
        if isinstance(index, tuple):
            row, col = index
            target[row][col] = value
        else:
            target[index] = value

    def swap_indices(self, key: str, i: int, j: int) -> None:
        arr = self.state[key]
        arr[i], arr[j] = arr[j], arr[i]

    def mark_visited(self, node_id: str, key: str = "visited") -> None:
        visited = self.state.setdefault(key, [])
        if node_id not in visited:
            visited.append(node_id)

    def update_distance(self, node_id: str, value: float, key: str = "distances") -> None:
        self.state.setdefault(key, {})[node_id] = value

    # -- persistent highlight marks --
    def mark(self, tag: str, *values: Any) -> None:
        bucket = self.marks.setdefault(tag, [])
        for v in values:
            if v not in bucket:
                bucket.append(v)

    def unmark(self, tag: str) -> None:
        self.marks.pop(tag, None)

    # -- step construction --
    def build(
        self,
        kind: StepKind,
        message: str,
        indices: Iterable[Any] = (),
        node_ids: Iterable[str] = (),
        highlights: Optional[Dict[str, Any]] = None,
        line: Optional[int] = None,
    ) -> Step:
        merged: Dict[str, Any] = copy.deepcopy(self.marks)
        if highlights:
            merged.update(copy.deepcopy(highlights))
        if line is not None:
            self.pseudocode_line = line
        step = Step(
            index=self._next_index,
            kind=kind,
            message=message,
            indices=tuple(indices),
            node_ids=tuple(node_ids),
            state=copy.deepcopy(self.state),
            highlights=merged,
            pseudocode_line=self.pseudocode_line,
        )
        self._next_index += 1
        return step

    # -- strategy capabilities: compare / swap / decide --
    def compare(self, indices: Sequence[Any], message: str, line: Optional[int] = None, **highlights: Any) -> Step:
        highlights.setdefault("comparing", list(indices))
        return self.build(StepKind.COMPARE, message, indices=indices, highlights=highlights, line=line)

    def swap(self, key: str, i: int, j: int, message: str, line: Optional[int] = None) -> Step:
        self.swap_indices(key, i, j)
        return self.build(StepKind.SWAP, message, indices=(i, j), highlights={"swapping": [i, j]}, line=line)

    def decide(
        self,
        accepted: bool,
        message: str,
        indices: Iterable[Any] = (),
        node_ids: Iterable[str] = (),
        line: Optional[int] = None,
        **highlights: Any,
    ) -> Step:
        kind = StepKind.SELECT if accepted else StepKind.REJECT
        return self.build(kind, message, indices=indices, node_ids=node_ids, highlights=highlights, line=line)
