"""
scheduler.py — Cancellable Timers for Playback
================================================
The PlaybackController never sleeps.  It asks a scheduler to call it
back after `speed_ms` and keeps the returned handle so pause / reset
can cancel the pending tick.

    ManualScheduler   – virtual clock.  Tests drive it with advance(ms);
                        a UI loop can call poll() once per frame.
    AsyncioScheduler  – thin wrapper over loop.call_later.

Both return handles exposing cancel().
"""

import asyncio
import heapq
import itertools
from typing import Callable, List, Optional, Tuple


class ScheduledCall:
    __slots__ = ("due", "callback", "cancelled")

    def __init__(self, due: float, callback: Callable[[], None]):
        self.due       = due
        self.callback  = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def __repr__(self) -> str:
        return f"ScheduledCall(due={self.due}, cancelled={self.cancelled})"


class ManualScheduler:
    """
    Deterministic scheduler.  `now` is in milliseconds; by default it is
    a virtual clock that only moves through `advance`.  Pass `clock` (a
    zero-argument callable returning ms) to follow a real clock and drive
    it with `poll`.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self._clock = clock
        self._now: float = 0.0
        self._seq = itertools.count()
        self._queue: List[Tuple[float, int, ScheduledCall]] = []

    @property
    def now(self) -> float:
        return self._clock() if self._clock else self._now

    @property
    def pending(self) -> int:
        return sum(1 for _, _, c in self._queue if not c.cancelled)

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> ScheduledCall:
        call = ScheduledCall(self.now + max(delay_ms, 0), callback)
        heapq.heappush(self._queue, (call.due, next(self._seq), call))
        return call

    def poll(self) -> int:
        """Fire every call that is due at the current time.  Returns how many fired."""
        return self._run_until(self.now)

    def advance(self, ms: float) -> int:
        """Move the virtual clock forward by `ms`, firing due calls in order."""
        if self._clock is not None:
            raise RuntimeError("advance() needs the virtual clock; use poll() with a real clock")
        return self._run_until(self._now + ms)

    def _run_until(self, deadline: float) -> int:
        fired = 0
        while self._queue and self._queue[0][0] <= deadline:
            due, _, call = heapq.heappop(self._queue)
            if call.cancelled:
                continue
            if self._clock is None:
                self._now = due
            call.callback()
            fired += 1
        if self._clock is None:
            self._now = max(self._now, deadline)
        return fired


class AsyncioScheduler:
    """Schedules ticks on an asyncio event loop (the running loop by default)."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(max(delay_ms, 0) / 1000.0, callback)
