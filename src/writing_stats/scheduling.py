"""Cooperative timers for the coordinator.

Everything runs on one thread: a scheduler only ever invokes callbacks from
its own loop (asyncio) or from ``ManualScheduler.advance``.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import logging
from typing import Any, Callable, List, Protocol, Tuple

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Minimal scheduling surface the coordinator depends on."""

    def now_ms(self) -> float: ...

    def call_later(self, delay_ms: float, callback: Callable[[], Any]) -> TimerHandle: ...


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop or asyncio.get_running_loop()

    def now_ms(self) -> float:
        return self._loop.time() * 1000.0

    def call_later(
        self, delay_ms: float, callback: Callable[[], Any]
    ) -> asyncio.TimerHandle:
        return self._loop.call_later(max(0.0, delay_ms) / 1000.0, callback)


class _ManualHandle:
    __slots__ = ("cancelled",)

    def __init__(self) -> None:
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Virtual clock; callbacks fire only when the clock is advanced."""

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now = start_ms
        self._queue: List[Tuple[float, int, _ManualHandle, Callable[[], Any]]] = []
        self._counter = itertools.count()

    def now_ms(self) -> float:
        return self._now

    def call_later(self, delay_ms: float, callback: Callable[[], Any]) -> _ManualHandle:
        handle = _ManualHandle()
        due = self._now + max(0.0, delay_ms)
        heapq.heappush(self._queue, (due, next(self._counter), handle, callback))
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for _, _, handle, _ in self._queue if not handle.cancelled)

    def advance(self, delta_ms: float) -> None:
        """Move the clock forward, firing due callbacks in order."""
        self.advance_to(self._now + delta_ms)

    def advance_to(self, target_ms: float) -> None:
        if target_ms < self._now:
            raise ValueError(f"Cannot move the clock back from {self._now} to {target_ms}.")
        while self._queue and self._queue[0][0] <= target_ms:
            due, _, handle, callback = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self._now = due
            callback()
        self._now = target_ms


class PeriodicTimer:
    """Re-arming timer that invokes callback every interval_ms."""

    def __init__(
        self, scheduler: Scheduler, interval_ms: float, callback: Callable[[], Any]
    ) -> None:
        self._scheduler = scheduler
        self._interval_ms = interval_ms
        self._callback = callback
        self._handle: TimerHandle | None = None

    @property
    def active(self) -> bool:
        return self._handle is not None

    def start(self) -> None:
        self.stop()
        self._arm()

    def stop(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _arm(self) -> None:
        self._handle = self._scheduler.call_later(self._interval_ms, self._fire)

    def _fire(self) -> None:
        self._arm()
        self._callback()


class Debouncer:
    """Runs callback once input has been quiet for delay_ms."""

    def __init__(
        self, scheduler: Scheduler, delay_ms: float, callback: Callable[[], Any]
    ) -> None:
        self._scheduler = scheduler
        self._delay_ms = delay_ms
        self._callback = callback
        self._handle: TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self) -> None:
        """Restart the quiet period, cancelling any pending run."""
        if self._handle is not None:
            self._handle.cancel()
            logger.debug("Debounce restarted.")
        self._handle = self._scheduler.call_later(self._delay_ms, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        self._callback()
