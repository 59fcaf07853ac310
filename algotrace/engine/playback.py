"""
playback.py — Trace Playback Controller
=========================================
The PlaybackController is the ONLY object a UI talks to during a run.
It owns the current Trace and the PlaybackState, walks the trace on a
cancellable scheduler, and pushes a Snapshot to every subscriber each
time the position changes.

State machine:
    IDLE       →  start()             →  RUNNING
    COMPLETED  →  start()             →  RUNNING   (replays from step 0)
    RUNNING    →  pause()             →  PAUSED
    PAUSED     →  resume()            →  RUNNING
    RUNNING    →  (last step shown)   →  COMPLETED
    any        →  reset()             →  IDLE      (trace discarded)
    any        →  load(trace)         →  IDLE      (trace attached, not started)

step_forward / step_back / seek are valid in IDLE or PAUSED only.

Cancellation:
  Every state change that invalidates a pending tick bumps a generation
  counter and cancels the scheduler handle.  A tick carries the
  generation it was scheduled under and does nothing if it no longer
  matches, so nothing is applied after pause() or reset() returns.

Threading:
  This class is NOT thread-safe.  Drive it from one thread (or one
  event loop) together with its scheduler.
"""

import functools
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional

from algotrace import config
from algotrace.algorithms.step import Trace
from algotrace.engine.scheduler import ManualScheduler
from algotrace.engine.snapshot import Snapshot
from algotrace.errors import PlaybackCommandError

logger = logging.getLogger(__name__)

Subscriber = Callable[[Optional[Snapshot]], None]


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class ControllerState(Enum):
    IDLE      = "idle"
    RUNNING   = "running"
    PAUSED    = "paused"
    COMPLETED = "completed"


@dataclass(frozen=True)
class PlaybackState:
    current_step_index: int
    is_running:         bool
    speed_ms:           float


def _command(method):
    """Run a playback command; a rejected command returns False (or raises when strict)."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            method(self, *args, **kwargs)
        except PlaybackCommandError as exc:
            if self.strict:
                raise
            logger.warning("Ignored playback command: %s", exc)
            return False
        return True

    return wrapper


# ---------------------------------------------------------------------------
# Controller
# ---------------------------------------------------------------------------
class PlaybackController:
    """
    Attributes:
        state        : Current ControllerState.
        trace        : The loaded Trace, or None after reset().
        current_idx  : Index of the displayed step; -1 when nothing is shown.
        speed_ms     : Milliseconds between automatic advances.
        strict       : Re-raise PlaybackCommandError instead of logging it.
    """

    def __init__(self, scheduler: Any = None, speed_ms: float = config.DEFAULT_SPEED_MS, strict: bool = False):
        self.scheduler                         = scheduler if scheduler is not None else ManualScheduler()
        self.state:       ControllerState      = ControllerState.IDLE
        self.trace:       Optional[Trace]      = None
        self.current_idx: int                  = -1
        self.speed_ms:    float                = max(float(speed_ms), config.MIN_SPEED_MS)
        self.strict:      bool                 = strict

        self._subscribers: List[Subscriber]    = []
        self._generation:  int                 = 0
        self._pending:     Any                 = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    @_command
    def load(self, trace: Trace) -> None:
        """Attach a trace in IDLE without starting it."""
        self._cancel_pending()
        self.trace       = trace
        self.state       = ControllerState.IDLE
        self.current_idx = -1
        self._notify(None)

    @_command
    def start(self, trace: Optional[Trace] = None) -> None:
        if self.state not in (ControllerState.IDLE, ControllerState.COMPLETED):
            raise PlaybackCommandError("start", self.state.value, "reset first")
        if trace is not None:
            self.trace = trace
        if self.trace is None:
            raise PlaybackCommandError("start", self.state.value, "no trace loaded")

        self._cancel_pending()
        logger.info("Playback started: %s (%d steps, %s ms/step)",
                    self.trace.algorithm_id, len(self.trace), self.speed_ms)
        self.current_idx = -1
        if len(self.trace) == 0:
            self._complete()
            return

        self.state = ControllerState.RUNNING
        if self._show(0):
            self._continue()

    @_command
    def pause(self) -> None:
        if self.state is not ControllerState.RUNNING:
            raise PlaybackCommandError("pause", self.state.value)
        self._cancel_pending()
        self.state = ControllerState.PAUSED

    @_command
    def resume(self) -> None:
        if self.state is not ControllerState.PAUSED:
            raise PlaybackCommandError("resume", self.state.value)
        self.state = ControllerState.RUNNING
        self._continue()

    @_command
    def toggle(self) -> None:
        if self.state is ControllerState.RUNNING:
            self._cancel_pending()
            self.state = ControllerState.PAUSED
        elif self.state is ControllerState.PAUSED:
            self.state = ControllerState.RUNNING
            self._continue()
        else:
            raise PlaybackCommandError("toggle", self.state.value)

    def reset(self) -> bool:
        """Back to IDLE from any state; always succeeds."""
        self._cancel_pending()
        was_showing = self.current_idx != -1
        self.trace       = None
        self.current_idx = -1
        self.state       = ControllerState.IDLE
        if was_showing:
            self._notify(None)
        return True

    # ------------------------------------------------------------------
    # Manual navigation
    # ------------------------------------------------------------------
    @_command
    def step_forward(self) -> None:
        self._require_manual("step_forward")
        self._show(self._clamp(self.current_idx + 1))

    @_command
    def step_back(self) -> None:
        self._require_manual("step_back")
        self._show(self._clamp(self.current_idx - 1))

    @_command
    def seek(self, index: int) -> None:
        self._require_manual("seek")
        self._show(self._clamp(index))

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    @_command
    def set_speed(self, ms: float) -> None:
        """Takes effect from the next scheduled advance, never the pending one."""
        if isinstance(ms, bool) or not isinstance(ms, (int, float)) or ms != ms:
            raise PlaybackCommandError("set_speed", self.state.value, f"invalid speed {ms!r}")
        self.speed_ms = max(float(ms), config.MIN_SPEED_MS)

    @_command
    def set_speed_preset(self, name: str) -> None:
        if name not in config.SPEED_PRESETS:
            raise PlaybackCommandError(
                "set_speed_preset", self.state.value,
                f"unknown preset {name!r}; choose from {', '.join(config.SPEED_PRESETS)}",
            )
        self.speed_ms = float(config.SPEED_PRESETS[name])

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------
    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a snapshot listener; returns a function that removes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def current_snapshot(self) -> Optional[Snapshot]:
        if self.trace is None or not 0 <= self.current_idx < len(self.trace):
            return None
        return Snapshot.from_trace(self.trace, self.current_idx)

    @property
    def playback_state(self) -> PlaybackState:
        return PlaybackState(
            current_step_index=self.current_idx,
            is_running=self.state is ControllerState.RUNNING,
            speed_ms=self.speed_ms,
        )

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_running(self) -> bool:
        return self.state is ControllerState.RUNNING

    @property
    def is_completed(self) -> bool:
        return self.state is ControllerState.COMPLETED

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _require_manual(self, command: str) -> None:
        if self.state not in (ControllerState.IDLE, ControllerState.PAUSED):
            raise PlaybackCommandError(command, self.state.value)
        if self.trace is None or len(self.trace) == 0:
            raise PlaybackCommandError(command, self.state.value, "no steps to show")

    def _clamp(self, index: int) -> int:
        return min(max(index, 0), len(self.trace) - 1)

    def _continue(self) -> None:
        if self.current_idx >= len(self.trace) - 1:
            self._complete()
            return
        generation = self._generation
        self._pending = self.scheduler.call_later(self.speed_ms, lambda: self._tick(generation))

    def _tick(self, generation: int) -> None:
        if generation != self._generation or self.state is not ControllerState.RUNNING:
            return
        self._pending = None
        if self._show(self.current_idx + 1):
            self._continue()

    def _complete(self) -> None:
        self._cancel_pending()
        self.state = ControllerState.COMPLETED
        logger.info("Playback completed: %s at step %d",
                    self.trace.algorithm_id if self.trace else "-", self.current_idx)

    def _cancel_pending(self) -> None:
        self._generation += 1
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _show(self, index: int) -> bool:
        """Move to `index` and publish; False if a subscriber failed and we fell back to IDLE."""
        if index == self.current_idx:
            return True
        self.current_idx = index
        if self._notify(self.current_snapshot()):
            return True
        logger.error("Subscriber failure at step %d; falling back to idle", index)
        self.reset()
        return False

    def _notify(self, snapshot: Optional[Snapshot]) -> bool:
        ok = True
        for callback in list(self._subscribers):
            try:
                callback(snapshot)
            except Exception:
                logger.exception("Playback subscriber %r raised", callback)
                ok = False
        return ok
