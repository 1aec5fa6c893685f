"""Reel motion and concept composition."""

from .composer import ConceptField, ConceptSnapshot, compose
from .frame_clock import FrameClock, ManualFrameClock
from .reel import (
    BASE_CADENCE_MS,
    DRAG_CHUNK,
    WHEEL_STEP,
    ReelEngine,
    ReelRow,
    ReelState,
    ReelView,
    window_rows,
)

__all__ = [
    "BASE_CADENCE_MS",
    "ConceptField",
    "ConceptSnapshot",
    "DRAG_CHUNK",
    "FrameClock",
    "ManualFrameClock",
    "ReelEngine",
    "ReelRow",
    "ReelState",
    "ReelView",
    "WHEEL_STEP",
    "compose",
    "window_rows",
]
