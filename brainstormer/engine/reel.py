"""Reel engine: circular position, 3-row window, spin loop and input adapters.

One engine owns one item sequence. All motion goes through :meth:`ReelEngine.step`,
which moves the index by exactly one position and re-renders. Motion sources:

* :meth:`spin` - frame-driven loop, one step per elapsed cadence interval
* :meth:`wheel` - wheel deltas accumulated against ``WHEEL_STEP``
* :meth:`drag_move` - pointer drag bridged into :meth:`wheel` in ``DRAG_CHUNK`` units

Remainders are always carried forward so that neither frame jitter nor
partial input drops motion. ``spinning`` and ``locked`` are never both set.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence

from ..content.models import PLACEHOLDER_GLYPH, ConceptItem
from ..logging_utils import BurstSampler, is_perf_logging_enabled
from .frame_clock import FrameClock, ManualFrameClock

logger = logging.getLogger(__name__)

BASE_CADENCE_MS = 95.0
WHEEL_STEP = 100.0
DRAG_CHUNK = 14.0
WINDOW_SIZE = 3
# Float slack so frame chunks summing to k*cadence yield exactly k steps.
_CADENCE_EPSILON_MS = 1e-9


@dataclass(frozen=True, slots=True)
class ReelRow:
    item: ConceptItem
    focused: bool = False

    @property
    def text(self) -> str:
        return self.item.name


@dataclass(slots=True)
class ReelState:
    """Mutable per-reel state; owned by exactly one :class:`ReelEngine`."""
    index: int = 0
    locked: bool = False
    spinning: bool = False
    accumulator: float = 0.0
    drag_origin: Optional[float] = None
    drag_accumulator: float = 0.0
    frame_handle: Optional[int] = None
    cadence_ms: float = BASE_CADENCE_MS
    spin_elapsed_ms: float = 0.0
    last_frame_ms: float = 0.0


class ReelView(Protocol):
    """Render target for a reel."""

    def show_rows(self, rows: Sequence[ReelRow]) -> None:
        ...


def window_rows(items: Sequence[ConceptItem], center: int, size: int = WINDOW_SIZE) -> List[ReelRow]:
    """Rows ``center-half .. center+half`` (mod length), middle row focused."""
    if not items:
        placeholder = ConceptItem(PLACEHOLDER_GLYPH)
        return [ReelRow(placeholder, focused=(i == size // 2)) for i in range(size)]
    half = size // 2
    n = len(items)
    return [
        ReelRow(items[(center + offset) % n], focused=(offset == 0))
        for offset in range(-half, half + 1)
    ]


class ReelEngine:
    """Circular scroller over a non-empty item sequence."""

    def __init__(
        self,
        items: Sequence[ConceptItem],
        view: Optional[ReelView] = None,
        *,
        clock: Optional[FrameClock] = None,
        rng: Optional[random.Random] = None,
        name: str = "reel",
    ) -> None:
        if not items:
            raise ValueError("ReelEngine needs at least one item; substitute a placeholder")
        self.name = name
        self.view = view
        self.clock: FrameClock = clock if clock is not None else ManualFrameClock()
        self._items: List[ConceptItem] = list(items)
        self._rng = rng or random.Random()
        self.state = ReelState(index=self._rng.randrange(len(self._items)))
        self._step_sampler = BurstSampler(interval_s=2.0)
        self.render()

    # ---------------------------------------------------------- properties
    @property
    def items(self) -> tuple[ConceptItem, ...]:
        return tuple(self._items)

    @property
    def index(self) -> int:
        return self.state.index

    @property
    def value(self) -> ConceptItem:
        return self._items[self.state.index]

    @property
    def locked(self) -> bool:
        return self.state.locked

    @property
    def spinning(self) -> bool:
        return self.state.spinning

    # ------------------------------------------------------------ motion
    def step(self, direction: float = 1) -> None:
        """Move one position forward (``direction >= 0``) or back."""
        delta = 1 if direction >= 0 else -1
        self.state.index = (self.state.index + delta) % len(self._items)
        self.render()

    def render(self) -> List[ReelRow]:
        rows = window_rows(self._items, self.state.index)
        if self.view is not None:
            self.view.show_rows(rows)
        return rows

    def spin(self, speed: float = 1.0) -> None:
        """Start continuous forward motion at ``BASE_CADENCE_MS / speed``."""
        if self.state.locked:
            logger.debug("%s: spin ignored while locked", self.name)
            return
        if speed <= 0:
            raise ValueError(f"speed must be positive, got {speed}")
        self._cancel_frame()
        s = self.state
        s.spinning = True
        s.cadence_ms = BASE_CADENCE_MS / speed
        s.spin_elapsed_ms = 0.0
        s.last_frame_ms = self.clock.now()
        s.frame_handle = self.clock.request_frame(self._on_frame)
        logger.debug("%s: spin cadence=%.1fms", self.name, s.cadence_ms)

    def _on_frame(self, now_ms: float) -> None:
        s = self.state
        s.frame_handle = None
        if not s.spinning:
            return
        s.spin_elapsed_ms += max(0.0, now_ms - s.last_frame_ms)
        s.last_frame_ms = now_ms
        steps = 0
        while s.spinning and s.spin_elapsed_ms + _CADENCE_EPSILON_MS >= s.cadence_ms:
            self.step(+1)
            s.spin_elapsed_ms -= s.cadence_ms
            steps += 1
        if steps and is_perf_logging_enabled():
            total = self._step_sampler.record(steps)
            if total:
                logger.debug("%s: %d spin steps in the last window", self.name, total)
        if s.spinning:
            s.frame_handle = self.clock.request_frame(self._on_frame)

    def _cancel_frame(self) -> None:
        if self.state.frame_handle is not None:
            self.clock.cancel_frame(self.state.frame_handle)
            self.state.frame_handle = None

    def stop(self) -> None:
        """Cancel the spin loop. Safe to call on a stopped reel."""
        was_spinning = self.state.spinning
        self._cancel_frame()
        self.state.spinning = False
        if was_spinning:
            self._step_sampler.flush()
            logger.debug("%s: stopped at index %d", self.name, self.state.index)

    def lock(self, value: Optional[bool] = True) -> None:
        """Freeze (or with ``False`` release) the reel.

        Locking stops an in-progress spin first, so no pending frame can step
        a locked reel.
        """
        locked = True if value is None else bool(value)
        if locked:
            self.stop()
        s = self.state
        s.locked = locked
        s.accumulator = 0.0
        s.drag_origin = None
        s.drag_accumulator = 0.0
        set_locked = getattr(self.view, "set_locked", None)
        if callable(set_locked):
            set_locked(locked)
        logger.debug("%s: %s", self.name, "locked" if locked else "unlocked")

    def set_items(self, items: Sequence[ConceptItem]) -> None:
        """Replace the sequence; empty replacements are ignored."""
        if not items:
            return
        self._items = list(items)
        self.state.index = min(self.state.index, len(self._items) - 1)
        self.render()

    # ------------------------------------------------------------- input
    def _input_blocked(self) -> bool:
        return self.state.locked or self.state.spinning

    def wheel(self, delta: float) -> int:
        """Accumulate a wheel delta; return the number of steps emitted."""
        if self._input_blocked():
            return 0
        s = self.state
        s.accumulator += delta
        steps = 0
        while s.accumulator >= WHEEL_STEP:
            self.step(+1)
            s.accumulator -= WHEEL_STEP
            steps += 1
        while s.accumulator <= -WHEEL_STEP:
            self.step(-1)
            s.accumulator += WHEEL_STEP
            steps += 1
        return steps

    def drag_begin(self, y: float) -> None:
        if self.state.locked:
            return
        self.state.drag_origin = float(y)
        self.state.drag_accumulator = 0.0

    def drag_move(self, y: float) -> int:
        """Feed a pointer position; movement reaches :meth:`wheel` in chunks."""
        s = self.state
        if s.locked or s.drag_origin is None:
            return 0
        s.drag_accumulator += float(y) - s.drag_origin
        s.drag_origin = float(y)
        steps = 0
        while s.drag_accumulator >= DRAG_CHUNK:
            steps += self.wheel(DRAG_CHUNK)
            s.drag_accumulator -= DRAG_CHUNK
        while s.drag_accumulator <= -DRAG_CHUNK:
            steps += self.wheel(-DRAG_CHUNK)
            s.drag_accumulator += DRAG_CHUNK
        return steps

    def drag_end(self) -> None:
        self.state.drag_origin = None
        self.state.drag_accumulator = 0.0

    def __repr__(self) -> str:
        return (
            f"ReelEngine(name={self.name!r}, items={len(self._items)}, index={self.state.index}, "
            f"spinning={self.state.spinning}, locked={self.state.locked})"
        )
