"""
Cancellable delayed callbacks.

Gesture detection needs two timers (long press and tap commit) that run on the
UI event loop. The classifier only talks to a ``Scheduler``; the tkinter view
plugs in ``TkScheduler`` and tests and headless replays use ``ManualScheduler``.
"""

import heapq
import itertools
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Tuple


class Scheduler(ABC):
    """Clock plus one-shot timers, all in milliseconds."""

    @abstractmethod
    def now(self) -> float:
        """Current time in milliseconds."""

    @abstractmethod
    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> Any:
        """Run ``callback`` once after ``delay_ms``. Returns a cancel handle."""

    @abstractmethod
    def cancel(self, handle: Any):
        """Cancel a pending callback. Unknown or fired handles are ignored."""


class TkScheduler(Scheduler):
    """Scheduler backed by a tkinter widget's ``after`` queue."""

    def __init__(self, widget):
        self.widget = widget

    def now(self) -> float:
        return time.monotonic() * 1000

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> Any:
        return self.widget.after(max(0, int(delay_ms)), callback)

    def cancel(self, handle: Any):
        if handle is not None:
            self.widget.after_cancel(handle)


class ManualScheduler(Scheduler):
    """
    Virtual clock for tests and headless replay.

    Time only moves through ``advance``; due callbacks run in due order with
    the clock set to their due time.
    """

    def __init__(self, start_ms: float = 0.0):
        self._now = start_ms
        self._queue: List[Tuple[float, int]] = []
        self._callbacks: Dict[int, Callable[[], None]] = {}
        self._ids = itertools.count(1)

    def now(self) -> float:
        return self._now

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> int:
        handle = next(self._ids)
        self._callbacks[handle] = callback
        heapq.heappush(self._queue, (self._now + max(0.0, delay_ms), handle))
        return handle

    def cancel(self, handle: Any):
        self._callbacks.pop(handle, None)

    @property
    def pending(self) -> int:
        """Number of callbacks still waiting to run."""
        return len(self._callbacks)

    def advance(self, ms: float):
        """Move the clock forward, running every callback that comes due."""
        end = self._now + ms
        while self._queue and self._queue[0][0] <= end:
            due, handle = heapq.heappop(self._queue)
            callback = self._callbacks.pop(handle, None)
            if callback is None:
                continue
            self._now = due
            callback()
        self._now = end

    def run_all(self):
        """Advance until no callbacks are pending."""
        while self._callbacks:
            due = min(d for d, h in self._queue if h in self._callbacks)
            self.advance(due - self._now)
