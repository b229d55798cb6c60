"""
Cascade component port definitions.

The scheduler never touches a real clock. Tier reveals go through a
TimerPort and the counter animation through a FramePort; adapters decide
whether time is virtual (tests) or wall-clock (CLI).
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from .models import CascadeSnapshot


class TimerHandle(Protocol):
    """Opaque handle returned by a timer or frame request."""

    ...


class TimerPort(Protocol):
    """Delayed one-shot callbacks."""

    def now_ms(self) -> float:
        """Current time in milliseconds."""
        ...

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        """Run callback once after delay_ms."""
        ...

    def cancel(self, handle: TimerHandle) -> None:
        """Cancel a pending callback. Best effort."""
        ...


class FramePort(Protocol):
    """Per-frame callbacks, like a display refresh."""

    def request_frame(self, callback: Callable[[float], None]) -> TimerHandle:
        """Run callback on the next frame with the frame timestamp in ms."""
        ...

    def cancel_frame(self, handle: TimerHandle) -> None:
        """Cancel a pending frame callback. Best effort."""
        ...


class CascadeListener(Protocol):
    """View-layer subscriber notified after every state change."""

    def __call__(self, snapshot: CascadeSnapshot) -> None: ...
