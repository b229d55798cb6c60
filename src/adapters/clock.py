"""
Timer and frame adapters for the cascade scheduler.

Both adapters run every callback on the calling thread, in due-time
order (ties in scheduling order). Frames are timers due one
frame_interval_ms later whose callback receives the firing time.

- ManualClock: virtual time, advanced explicitly. Deterministic.
- RealtimeLoop: wall-clock time via time.monotonic(), sleeps between
  callbacks.
"""

from __future__ import annotations

import heapq
import itertools
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field


@dataclass(order=True)
class ScheduledCall:
    """A pending callback. Doubles as its own cancellation handle."""

    due_ms: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)


class _HeapScheduler(ABC):
    def __init__(self, frame_interval_ms: float = 16.0) -> None:
        if frame_interval_ms <= 0:
            raise ValueError("frame_interval_ms must be positive")
        self._frame_interval_ms = frame_interval_ms
        self._queue: list[ScheduledCall] = []
        self._seq = itertools.count()

    @abstractmethod
    def now_ms(self) -> float:
        """Current time in milliseconds."""

    # --- TimerPort ---

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> ScheduledCall:
        call = ScheduledCall(self.now_ms() + max(delay_ms, 0.0), next(self._seq), callback)
        heapq.heappush(self._queue, call)
        return call

    def cancel(self, handle: object) -> None:
        if isinstance(handle, ScheduledCall):
            handle.cancelled = True

    # --- FramePort ---

    def request_frame(self, callback: Callable[[float], None]) -> ScheduledCall:
        return self.call_later(self._frame_interval_ms, lambda: callback(self.now_ms()))

    def cancel_frame(self, handle: object) -> None:
        self.cancel(handle)

    # --- Driving ---

    @property
    def pending(self) -> int:
        """Number of callbacks still scheduled and not cancelled."""
        return sum(1 for call in self._queue if not call.cancelled)

    def _pop_due(self, until_ms: float | None) -> ScheduledCall | None:
        while self._queue:
            head = self._queue[0]
            if until_ms is not None and head.due_ms > until_ms:
                return None
            heapq.heappop(self._queue)
            if not head.cancelled:
                return head
        return None


class ManualClock(_HeapScheduler):
    """Virtual-time clock. Nothing fires until advance() or run_until_idle()."""

    def __init__(self, start_ms: float = 0.0, frame_interval_ms: float = 16.0) -> None:
        super().__init__(frame_interval_ms)
        self._now_ms = start_ms

    def now_ms(self) -> float:
        return self._now_ms

    def advance(self, ms: float) -> None:
        """Move time forward by ms, firing everything that falls due."""
        target = self._now_ms + ms
        while (call := self._pop_due(target)) is not None:
            self._now_ms = max(self._now_ms, call.due_ms)
            call.callback()
        self._now_ms = target

    def run_until_idle(self, limit_ms: float = 60_000.0) -> float:
        """
        Fire callbacks until nothing is pending.

        Returns:
            Virtual milliseconds elapsed.

        Raises:
            RuntimeError: if callbacks are still pending after limit_ms
        """
        start = self._now_ms
        deadline = start + limit_ms
        while (call := self._pop_due(deadline)) is not None:
            self._now_ms = max(self._now_ms, call.due_ms)
            call.callback()
        if self.pending:
            raise RuntimeError(f"Callbacks still pending after {limit_ms}ms of virtual time")
        return self._now_ms - start


class RealtimeLoop(_HeapScheduler):
    """Single-threaded wall-clock loop."""

    def __init__(self, frame_interval_ms: float = 16.0) -> None:
        super().__init__(frame_interval_ms)
        self._origin = time.monotonic()

    def now_ms(self) -> float:
        return (time.monotonic() - self._origin) * 1000.0

    def run_until_idle(self) -> float:
        """Sleep and fire callbacks until nothing is pending. Returns ms elapsed."""
        start = self.now_ms()
        while (call := self._pop_due(None)) is not None:
            wait_ms = call.due_ms - self.now_ms()
            if wait_ms > 0:
                time.sleep(wait_ms / 1000.0)
            call.callback()
        return self.now_ms() - start
