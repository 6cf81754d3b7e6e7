"""
Tap / long-press gesture classification.

Raw pointer events become one of: a click with multiplicity N (single,
double, triple...) or a long press on an existing shape. Two timers drive
it: a long-press timer started on press over a shape, and a commit timer
that delays dispatching a tap sequence until no further tap arrives.

States and transitions:

    IDLE               --down-->        PRESSING
    AWAITING_MORE_TAPS --down-->        PRESSING            (commit paused)
    PRESSING           --long press-->  LONG_PRESS_FIRED    (pending taps dropped)
    PRESSING           --up-->          AWAITING_MORE_TAPS  (tap counted)
    PRESSING           --up (slow)-->   IDLE                (press discarded)
    LONG_PRESS_FIRED   --up-->          IDLE                (swallowed)
    AWAITING_MORE_TAPS --commit-->      IDLE                (click dispatched)

Pointer cancel and pointer leave are handled as up. Events with no entry in
the table are ignored.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from spraywall.config import EditorSettings
from spraywall.core.scheduling import Scheduler
from spraywall.utils.geometry import distance

logger = logging.getLogger("spraywall.gestures")


class GestureState(Enum):
    IDLE = "idle"
    PRESSING = "pressing"
    LONG_PRESS_FIRED = "long_press_fired"
    AWAITING_MORE_TAPS = "awaiting_more_taps"


@dataclass
class PointerDown:
    """Press captured at pointer down."""
    x: float
    y: float
    timestamp: float
    hit_index: Optional[int] = None


@dataclass
class TapRecord:
    """Most recent counted tap of the running sequence."""
    x: float
    y: float
    count: int
    timestamp: float


class GestureClassifier:
    """
    Turns pointer events into clicks with multiplicity and long presses.

    Callbacks:
        hit_test(x, y) -> index of the shape under the point, or None
        on_click(x, y, count) -> dispatched once per tap sequence
        on_long_press(index) -> dispatched when a press on a shape is held
        long_press_enabled() -> whether the current mode supports long press

    Callbacks are called with plain values only. Whatever they act on is read
    through the caller's live state at call time.
    """

    TRANSITIONS = {
        (GestureState.IDLE, "down"): "_handle_down",
        (GestureState.AWAITING_MORE_TAPS, "down"): "_handle_down",
        (GestureState.PRESSING, "down"): "_handle_down",
        (GestureState.LONG_PRESS_FIRED, "down"): "_handle_down",
        (GestureState.PRESSING, "up"): "_handle_up",
        (GestureState.PRESSING, "long_press"): "_handle_long_press",
        (GestureState.LONG_PRESS_FIRED, "up"): "_handle_swallowed_up",
        (GestureState.AWAITING_MORE_TAPS, "commit"): "_handle_commit",
    }

    def __init__(self,
                 scheduler: Scheduler,
                 hit_test: Callable[[float, float], Optional[int]],
                 on_click: Callable[[float, float, int], None],
                 on_long_press: Callable[[int], None],
                 long_press_enabled: Callable[[], bool] = lambda: True,
                 settings: EditorSettings = None):
        settings = settings or EditorSettings()
        self.scheduler = scheduler
        self.hit_test = hit_test
        self.on_click = on_click
        self.on_long_press = on_long_press
        self.long_press_enabled = long_press_enabled

        self.long_press_ms = settings.long_press_ms
        self.click_commit_ms = settings.click_commit_ms
        self.tap_max_duration_ms = settings.tap_max_duration_ms
        self.tap_window_ms = settings.tap_window_ms
        self.tap_distance = settings.tap_distance

        self.state = GestureState.IDLE
        self.pointer_down_info: Optional[PointerDown] = None
        self.last_tap: Optional[TapRecord] = None
        self._long_press_timer: Any = None
        self._commit_timer: Any = None
        self._commit_paused = False

    # ------------------------------------------------------------------
    # Public event API
    # ------------------------------------------------------------------

    def pointer_down(self, x: float, y: float):
        self._dispatch("down", x, y)

    def pointer_up(self):
        self._dispatch("up")

    def pointer_cancel(self):
        self._dispatch("up")

    def pointer_leave(self):
        self._dispatch("up")

    def reset(self):
        """Cancel both timers and forget the tap sequence."""
        self._cancel_long_press_timer()
        self._cancel_commit_timer()
        self._commit_paused = False
        self.pointer_down_info = None
        self.last_tap = None
        self.state = GestureState.IDLE

    @property
    def has_pending_timers(self) -> bool:
        return self._long_press_timer is not None or self._commit_timer is not None

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    def _dispatch(self, event: str, *args):
        handler = self.TRANSITIONS.get((self.state, event))
        if handler is None:
            logger.debug(f"Ignoring '{event}' in state {self.state.value}")
            return
        getattr(self, handler)(*args)

    def _handle_down(self, x: float, y: float):
        self._cancel_long_press_timer()
        if self._commit_timer is not None:
            # A press in the commit window may extend the running sequence
            self._cancel_commit_timer()
            self._commit_paused = True

        hit_index = self.hit_test(x, y)
        self.pointer_down_info = PointerDown(x, y, self.scheduler.now(), hit_index)
        self.state = GestureState.PRESSING

        if hit_index is not None and self.long_press_enabled():
            self._long_press_timer = self.scheduler.call_later(
                self.long_press_ms,
                lambda: self._dispatch("long_press", hit_index),
            )

    def _handle_long_press(self, hit_index: int):
        self._long_press_timer = None
        self._cancel_commit_timer()
        self._commit_paused = False
        self.last_tap = None
        self.state = GestureState.LONG_PRESS_FIRED
        logger.debug(f"Long press on shape {hit_index}")
        self.on_long_press(hit_index)

    def _handle_swallowed_up(self):
        self.pointer_down_info = None
        self.state = GestureState.IDLE

    def _handle_up(self):
        self._cancel_long_press_timer()
        press = self.pointer_down_info
        self.pointer_down_info = None
        now = self.scheduler.now()

        if now - press.timestamp >= self.tap_max_duration_ms:
            logger.debug(f"Discarding slow press ({now - press.timestamp:.0f}ms)")
            self._flush_paused_sequence()
            return

        last = self.last_tap
        continues = (
            last is not None
            and now - last.timestamp <= self.tap_window_ms
            and distance((press.x, press.y), (last.x, last.y)) <= self.tap_distance
        )
        if not continues:
            self._flush_paused_sequence()

        count = last.count + 1 if continues else 1
        self.last_tap = TapRecord(press.x, press.y, count, now)
        self._commit_paused = False
        self._restart_commit_timer()
        self.state = GestureState.AWAITING_MORE_TAPS

    def _handle_commit(self):
        self._commit_timer = None
        tap = self.last_tap
        self.last_tap = None
        self.state = GestureState.IDLE
        if tap is not None:
            logger.debug(f"Click x{tap.count} at ({tap.x:.0f}, {tap.y:.0f})")
            self.on_click(tap.x, tap.y, tap.count)

    def _flush_paused_sequence(self):
        """Dispatch a sequence whose commit was paused by a press that ended it."""
        self.state = GestureState.IDLE
        if self._commit_paused:
            self._commit_paused = False
            tap = self.last_tap
            self.last_tap = None
            if tap is not None:
                self.on_click(tap.x, tap.y, tap.count)

    # ------------------------------------------------------------------
    # Timers
    # ------------------------------------------------------------------

    def _restart_commit_timer(self):
        self._cancel_commit_timer()
        self._commit_timer = self.scheduler.call_later(
            self.click_commit_ms,
            lambda: self._dispatch("commit"),
        )

    def _cancel_long_press_timer(self):
        if self._long_press_timer is not None:
            self.scheduler.cancel(self._long_press_timer)
            self._long_press_timer = None

    def _cancel_commit_timer(self):
        if self._commit_timer is not None:
            self.scheduler.cancel(self._commit_timer)
            self._commit_timer = None
