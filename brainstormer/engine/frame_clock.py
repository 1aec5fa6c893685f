"""Frame callback scheduling.

The reel engine never talks to a timer directly; it asks a :class:`FrameClock`
for the next frame, the way a browser animation asks for the next repaint.
Handles are opaque integers and cancelling an unknown or already-fired handle
is a no-op.
"""

from __future__ import annotations

import itertools
from typing import Callable, Dict, Protocol

FrameCallback = Callable[[float], None]


class FrameClock(Protocol):
    """Source of frame callbacks; timestamps are milliseconds."""

    def now(self) -> float:
        ...

    def request_frame(self, callback: FrameCallback) -> int:
        ...

    def cancel_frame(self, handle: int) -> None:
        ...


class ManualFrameClock:
    """Deterministic clock driven by :meth:`advance`.

    Used by tests and the headless CLI. Each ``advance`` moves time forward and
    fires the callbacks that were pending at that moment exactly once;
    callbacks requested while firing wait for the next ``advance``.
    """

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now = float(start_ms)
        self._pending: Dict[int, FrameCallback] = {}
        self._firing: Dict[int, FrameCallback] = {}
        self._ids = itertools.count(1)

    def now(self) -> float:
        return self._now

    def request_frame(self, callback: FrameCallback) -> int:
        handle = next(self._ids)
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._pending.pop(handle, None)
        self._firing.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def advance(self, dt_ms: float) -> None:
        if dt_ms < 0:
            raise ValueError(f"dt_ms must be non-negative, got {dt_ms}")
        self._now += dt_ms
        self._firing, self._pending = self._pending, {}
        for handle in list(self._firing):
            callback = self._firing.pop(handle, None)
            if callback is not None:
                callback(self._now)

    def run_frames(self, *durations_ms: float) -> None:
        for dt in durations_ms:
            self.advance(dt)
