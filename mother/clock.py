"""Timer scheduling for reveals, boot steps and reply latency.

All delays are in milliseconds. Production code runs on the asyncio loop
(LoopClock); tests drive a VirtualClock by hand so no test ever waits on a
real timer.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
from collections.abc import Callable
from typing import Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Clock(Protocol):
    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle: ...


class LoopClock:
    """Schedules callbacks on the running asyncio event loop."""

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = asyncio.get_running_loop()
        return loop.call_later(delay_ms / 1000, callback)


class VirtualTimer:
    def __init__(self, when: float, callback: Callable[[], None]) -> None:
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class VirtualClock:
    """Manually advanced clock. Callbacks run synchronously inside advance()."""

    def __init__(self) -> None:
        self.now: float = 0.0
        self._queue: list[tuple[float, int, VirtualTimer]] = []
        self._seq = itertools.count()

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> VirtualTimer:
        timer = VirtualTimer(self.now + max(delay_ms, 0), callback)
        heapq.heappush(self._queue, (timer.when, next(self._seq), timer))
        return timer

    @property
    def pending(self) -> int:
        """Number of scheduled, not-yet-cancelled timers."""
        return sum(1 for _, _, t in self._queue if not t.cancelled)

    def advance(self, ms: float) -> None:
        """Move time forward, firing every timer that falls due on the way."""
        target = self.now + ms
        while self._queue and self._queue[0][0] <= target:
            when, _, timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self.now = when
            timer.callback()
        self.now = target

    def run_until_idle(self, limit: int = 100_000) -> None:
        """Fire timers in order until none are left (including ones they schedule)."""
        fired = 0
        while self._queue:
            when, _, timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self.now = when
            timer.callback()
            fired += 1
            if fired >= limit:
                raise RuntimeError(f"VirtualClock still busy after {limit} timers")
