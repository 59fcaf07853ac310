"""
engine/
-------
Recording & playback layer.

    from algotrace.engine import build_trace, PlaybackController, ManualScheduler
"""

from algotrace.engine.recorder  import (
    TraceRecorder, TraceHandle, build_trace,
    RunMetrics, ComparisonResult, compute_metrics, compare,
    export_trace, export_metrics,
)
from algotrace.engine.snapshot  import Snapshot, SNAPSHOT_VERSION
from algotrace.engine.scheduler import ManualScheduler, AsyncioScheduler
from algotrace.engine.playback  import PlaybackController, PlaybackState, ControllerState

__all__ = [
    "TraceRecorder",
    "TraceHandle",
    "build_trace",
    "RunMetrics",
    "ComparisonResult",
    "compute_metrics",
    "compare",
    "export_trace",
    "export_metrics",
    "Snapshot",
    "SNAPSHOT_VERSION",
    "ManualScheduler",
    "AsyncioScheduler",
    "PlaybackController",
    "PlaybackState",
    "ControllerState",
]
