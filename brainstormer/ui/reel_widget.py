"""Reel view: title, a 3-row viewport, wheel and drag input."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QMouseEvent, QWheelEvent
from PyQt6.QtWidgets import QFrame, QLabel, QSizePolicy, QVBoxLayout, QWidget

from ..engine.reel import WHEEL_STEP, WINDOW_SIZE, ReelEngine, ReelRow

logger = logging.getLogger(__name__)

# Qt reports 120 angle units per wheel notch; one notch maps to one step.
QT_WHEEL_NOTCH = 120


def wheel_delta(angle_y: int, pixel_y: int = 0) -> float:
    """Convert a Qt wheel event to a scroll delta where positive means "down".

    Qt angle deltas are positive when the wheel turns away from the user.
    """
    if angle_y:
        return -angle_y * WHEEL_STEP / QT_WHEEL_NOTCH
    return -float(pixel_y)


def _repolish(widget: QWidget) -> None:
    style = widget.style()
    if style is not None:
        style.unpolish(widget)
        style.polish(widget)


class ReelViewport(QFrame):
    """Row area of a reel; left-button drags here move the attached engine."""

    def __init__(self, owner: "ReelWidget") -> None:
        super().__init__(owner)
        self._owner = owner

    def mousePressEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        engine = self._owner.engine
        if engine is not None and event.button() == Qt.MouseButton.LeftButton:
            engine.drag_begin(event.position().y())
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        engine = self._owner.engine
        if engine is not None and event.buttons() & Qt.MouseButton.LeftButton:
            engine.drag_move(event.position().y())
            event.accept()
            return
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        engine = self._owner.engine
        if engine is not None and event.button() == Qt.MouseButton.LeftButton:
            engine.drag_end()
            event.accept()
            return
        super().mouseReleaseEvent(event)


class ReelWidget(QFrame):
    """Render target and input surface for one :class:`ReelEngine`."""

    def __init__(self, title: str = "", parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("reel")
        self.setProperty("locked", False)
        self.engine: Optional[ReelEngine] = None

        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 8, 8, 8)
        self.title = QLabel(title)
        self.title.setObjectName("reelTitle")
        self.title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.title)

        self.viewport = ReelViewport(self)
        self.viewport.setObjectName("reelViewport")
        self.viewport.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
        rows_layout = QVBoxLayout(self.viewport)
        rows_layout.setContentsMargins(4, 4, 4, 4)
        rows_layout.setSpacing(2)
        self.rows: List[QLabel] = []
        for i in range(WINDOW_SIZE):
            label = QLabel("")
            label.setObjectName("rowitem")
            label.setTextFormat(Qt.TextFormat.PlainText)
            label.setAlignment(Qt.AlignmentFlag.AlignCenter)
            label.setProperty("center", i == WINDOW_SIZE // 2)
            rows_layout.addWidget(label)
            self.rows.append(label)
        layout.addWidget(self.viewport)

    def attach(self, engine: ReelEngine) -> None:
        self.engine = engine
        engine.view = self
        engine.render()
        self.set_locked(engine.locked)

    # ReelView ------------------------------------------------------------
    def show_rows(self, rows: Sequence[ReelRow]) -> None:
        for label, row in zip(self.rows, rows):
            label.setText(row.text)
            label.setToolTip(row.item.desc)
            if bool(label.property("center")) != row.focused:
                label.setProperty("center", row.focused)
                _repolish(label)

    def set_locked(self, locked: bool) -> None:
        self.setProperty("locked", bool(locked))
        _repolish(self)

    def row_texts(self) -> List[str]:
        return [label.text() for label in self.rows]

    # Input ---------------------------------------------------------------
    def wheelEvent(self, event: QWheelEvent) -> None:  # type: ignore[override]
        if self.engine is None or self.engine.locked:
            # Let the surrounding page scroll instead.
            event.ignore()
            return
        self.engine.wheel(wheel_delta(event.angleDelta().y(), event.pixelDelta().y()))
        event.accept()
