"""Qt-backed :class:`~brainstormer.engine.frame_clock.FrameClock`.

A single ~60 Hz ``QTimer`` serves every reel sharing the clock. The timer only
runs while at least one frame callback is pending, so idle reels cost nothing.
"""

from __future__ import annotations

import itertools
import time
from typing import Dict, Optional

from PyQt6.QtCore import QObject, Qt, QTimer

from ..engine.frame_clock import FrameCallback

FRAME_INTERVAL_MS = 16


class QtFrameClock(QObject):
    def __init__(self, interval_ms: int = FRAME_INTERVAL_MS, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._pending: Dict[int, FrameCallback] = {}
        self._firing: Dict[int, FrameCallback] = {}
        self._ids = itertools.count(1)
        self._timer = QTimer(self)
        self._timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._timer.setInterval(max(1, int(interval_ms)))
        self._timer.timeout.connect(self._on_tick)

    def now(self) -> float:
        return time.perf_counter() * 1000.0

    def request_frame(self, callback: FrameCallback) -> int:
        handle = next(self._ids)
        self._pending[handle] = callback
        if not self._timer.isActive():
            self._timer.start()
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._pending.pop(handle, None)
        self._firing.pop(handle, None)
        if not self._pending and not self._firing:
            self._timer.stop()

    @property
    def active(self) -> bool:
        return self._timer.isActive()

    def _on_tick(self) -> None:
        now = self.now()
        self._firing, self._pending = self._pending, {}
        for handle in list(self._firing):
            callback = self._firing.pop(handle, None)
            if callback is not None:
                callback(now)
        if not self._pending:
            self._timer.stop()
