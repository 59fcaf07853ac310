"""
recorder.py — Trace Recorder & Analytics
==========================================
Turns an algorithm generator into a sealed, immutable Trace, then
computes the metrics the comparison table needs.

Usage:
    trace   = build_trace("bubble_sort", {"values": [5, 3, 1]})
    metrics = compute_metrics(trace)
    export_trace(trace)               # JSON-safe dict for the renderer

Low-level protocol (what build_trace does for you):
    rec    = TraceRecorder()
    handle = rec.begin("bubble_sort", kwargs)
    for step in generator:
        rec.record(step)              # index must be len(steps so far)
    trace  = rec.finish(handle)       # last step gets is_final=True

Comparison Mode:
    Build two traces on the SAME input, then compare(m1, m2) →
    ComparisonResult.
"""

import copy
import dataclasses
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from algotrace.algorithms import get_algorithm
from algotrace.algorithms.step import Step, StepKind, Trace
from algotrace.engine.snapshot import step_to_dict, to_jsonable
from algotrace.errors import OutOfOrderStepError, UnknownAlgorithmError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Recorder protocol
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class TraceHandle:
    algorithm_id: str
    generation:   int


class TraceRecorder:
    """
    Append-only Step buffer with an explicit begin / record / finish
    lifecycle.  Every `begin` bumps the generation, so a handle from an
    earlier run can never seal the current one.
    """

    def __init__(self):
        self.generation: int                    = 0
        self._steps:     List[Step]             = []
        self._input:     Dict[str, Any]         = {}
        self._handle:    Optional[TraceHandle]  = None
        self._started:   float                  = 0.0

    @property
    def is_open(self) -> bool:
        return self._handle is not None

    def begin(self, algorithm_id: str, input: Optional[Mapping[str, Any]] = None) -> TraceHandle:
        if self._handle is not None:
            logger.debug("Discarding unfinished %s run (generation %d)",
                         self._handle.algorithm_id, self._handle.generation)
        self.generation += 1
        self._steps = []
        self._input = copy.deepcopy(dict(input or {}))
        self._handle = TraceHandle(algorithm_id, self.generation)
        self._started = time.monotonic()
        return self._handle

    def record(self, step: Step) -> None:
        if self._handle is None:
            raise OutOfOrderStepError(f"Step {step.index} recorded with no open run")
        expected = len(self._steps)
        if step.index != expected:
            raise OutOfOrderStepError(
                f"Step {step.index} recorded out of order; expected index {expected}"
            )
        self._steps.append(step)

    def finish(self, handle: TraceHandle) -> Trace:
        if self._handle is None:
            raise OutOfOrderStepError("finish() called with no open run")
        if handle != self._handle:
            raise OutOfOrderStepError(
                f"Stale handle (generation {handle.generation}); "
                f"current run is generation {self._handle.generation}"
            )

        steps = list(self._steps)
        if steps:
            steps[-1] = dataclasses.replace(steps[-1], is_final=True)
        trace = Trace(
            algorithm_id=handle.algorithm_id,
            steps=tuple(steps),
            input=self._input,
            generation=handle.generation,
            build_ms=round((time.monotonic() - self._started) * 1000, 3),
        )
        self._handle = None
        self._steps = []
        return trace


def build_trace(
    algorithm_id: str,
    input: Mapping[str, Any],
    recorder: Optional[TraceRecorder] = None,
) -> Trace:
    """
    Validate `input`, run the algorithm to completion and return its Trace.

    Raises InvalidInputError (or UnknownAlgorithmError) before any Step
    is produced.
    """
    info = get_algorithm(algorithm_id)
    if info is None:
        raise UnknownAlgorithmError(algorithm_id)

    kwargs = info.prepare(input)
    rec = recorder or TraceRecorder()
    handle = rec.begin(algorithm_id, kwargs)
    for step in info.fn(**kwargs):
        rec.record(step)
    trace = rec.finish(handle)

    logger.debug("%s kind counts: %s", algorithm_id,
                 {k.value: trace.count(k) for k in StepKind if trace.count(k)})
    logger.info("Built %s trace: %d steps in %.2f ms (generation %d)",
                algorithm_id, len(trace), trace.build_ms, trace.generation)
    return trace


# ---------------------------------------------------------------------------
# Metrics dataclass — what the comparison table renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algorithm_id:    str   = ""
    label:           str   = ""
    total_steps:     int   = 0
    comparisons:     int   = 0          # COMPARE steps
    writes:          int   = 0          # SWAP + ASSIGN steps
    nodes_visited:   int   = 0          # VISIT steps
    edges_relaxed:   int   = 0          # RELAX steps
    kind_counts:     Dict[str, int] = field(default_factory=dict)
    wall_time_ms:    float = 0.0        # time to build the whole trace
    final_message:   str   = ""


# ---------------------------------------------------------------------------
# ComparisonResult — side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived: "left", "right" or "tie" (fewer is better)
    winner_steps:       str = ""
    winner_comparisons: str = ""
    winner_writes:      str = ""


def compute_metrics(trace: Trace) -> RunMetrics:
    info = get_algorithm(trace.algorithm_id)
    counts = {k.value: trace.count(k) for k in StepKind}
    last = trace.final_step
    return RunMetrics(
        algorithm_id=trace.algorithm_id,
        label=info.label if info else trace.algorithm_id,
        total_steps=len(trace),
        comparisons=counts[StepKind.COMPARE.value],
        writes=counts[StepKind.SWAP.value] + counts[StepKind.ASSIGN.value],
        nodes_visited=counts[StepKind.VISIT.value],
        edges_relaxed=counts[StepKind.RELAX.value],
        kind_counts=counts,
        wall_time_ms=trace.build_ms,
        final_message=last.message if last else "",
    )


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: RunMetrics, right: RunMetrics) -> ComparisonResult:
    """Given two runs' metrics, produce a ComparisonResult."""

    def winner(l_val, r_val):
        if l_val == r_val:
            return "tie"
        return "left" if l_val < r_val else "right"

    return ComparisonResult(
        left=left,
        right=right,
        winner_steps=winner(left.total_steps, right.total_steps),
        winner_comparisons=winner(left.comparisons, right.comparisons),
        winner_writes=winner(left.writes, right.writes),
    )


# ---------------------------------------------------------------------------
# Export (serialisable snapshot)
# ---------------------------------------------------------------------------
def export_trace(trace: Trace) -> Dict[str, Any]:
    return {
        "algorithm_id": trace.algorithm_id,
        "generation":   trace.generation,
        "input":        to_jsonable(trace.input),
        "steps":        [step_to_dict(s) for s in trace.steps],
    }


def export_metrics(metrics: RunMetrics) -> Dict[str, Any]:
    return dataclasses.asdict(metrics)
