"""Embeddable brainstormer widget: three reels, controls and the concept panel."""

from __future__ import annotations

import logging
import random
from typing import List, Optional, Sequence

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from ..config import BrainstormerConfig
from ..content.errors import StartupFailure
from ..content.loader import SourceLoader
from ..content.models import ConceptItem, ensure_items
from ..engine.composer import ConceptSnapshot, compose
from ..engine.frame_clock import FrameClock
from ..engine.reel import ReelEngine
from .concept_panel import ConceptPanel
from .frame_timer import QtFrameClock
from .reel_widget import ReelWidget

logger = logging.getLogger(__name__)

STATUS_LOADING = "Loading lists…"
STATUS_FAILED = "⚠️ Could not initialize."


class BrainstormerWidget(QWidget):
    """Top-level widget; call :meth:`start` once an event loop is running.

    ``concept_changed`` carries the share text of each new concept.
    """

    concept_changed = pyqtSignal(str)

    def __init__(
        self,
        config: Optional[BrainstormerConfig] = None,
        *,
        loader: Optional[SourceLoader] = None,
        clock: Optional[FrameClock] = None,
        rng: Optional[random.Random] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.setObjectName("brainstormerRoot")
        self.config = config or BrainstormerConfig.resolve()
        self.loader = loader or SourceLoader(timeout_s=self.config.fetch_timeout_s)
        self.clock: FrameClock = clock if clock is not None else QtFrameClock(parent=self)
        self._rng = rng or random.Random()
        self.engines: List[ReelEngine] = []
        self.snapshot: Optional[ConceptSnapshot] = None
        self.startup_error: Optional[StartupFailure] = None
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)

        self.status = QLabel("")
        self.status.setObjectName("status")
        self.status.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.status)

        reels_row = QHBoxLayout()
        self.reel_widgets = [ReelWidget(label) for label in self.config.labels]
        for reel in self.reel_widgets:
            reels_row.addWidget(reel)
        layout.addLayout(reels_row)

        controls = QHBoxLayout()
        self.btn_slow = QPushButton("Slow")
        self.btn_spin = QPushButton("Spin")
        self.btn_fast = QPushButton("Fast")
        self.btn_manual = QPushButton("Manual")
        self.btn_lock = QPushButton("Lock")
        self.btn_slow.clicked.connect(lambda: self.spin_all("slow"))
        self.btn_spin.clicked.connect(lambda: self.spin_all("spin"))
        self.btn_fast.clicked.connect(lambda: self.spin_all("fast"))
        self.btn_manual.clicked.connect(self.manual)
        self.btn_lock.clicked.connect(self.lock_all)
        self._buttons = [self.btn_slow, self.btn_spin, self.btn_fast, self.btn_manual, self.btn_lock]
        for btn in self._buttons:
            btn.setEnabled(False)
            controls.addWidget(btn)
        layout.addLayout(controls)

        self.concept_panel = ConceptPanel()
        layout.addWidget(self.concept_panel)

    def set_status(self, message: str = "") -> None:
        self.status.setText(message or "")

    # Startup ---------------------------------------------------------------
    async def start(self) -> bool:
        """Load all sources and build the reels. Returns ``False`` on failure."""
        try:
            await self._initialize()
        except Exception as exc:  # noqa: BLE001 - single user-visible failure point
            self.startup_error = StartupFailure(f"{type(exc).__name__}: {exc}")
            self.startup_error.__cause__ = exc
            logger.exception("brainstormer initialization failed")
            self.set_status(STATUS_FAILED)
            return False
        return True

    async def _initialize(self) -> None:
        self.set_status(STATUS_LOADING)
        lists = await self.loader.load_all(self.config.sources)
        self.set_status("")
        self.seed_reels(lists)
        for btn in self._buttons:
            btn.setEnabled(True)

    def seed_reels(self, lists: Sequence[Sequence[ConceptItem]]) -> None:
        """Create one engine per reel; empty lists get a placeholder item."""
        self.engines = []
        for widget, label, items in zip(self.reel_widgets, self.config.labels, lists):
            engine = ReelEngine(ensure_items(list(items)), clock=self.clock, rng=self._rng, name=label)
            widget.attach(engine)
            self.engines.append(engine)

    # Actions ---------------------------------------------------------------
    def stop_all(self) -> None:
        for engine in self.engines:
            engine.stop()

    def unlock_all(self) -> None:
        for engine in self.engines:
            engine.lock(False)

    def spin_all(self, speed_name: str) -> None:
        self.unlock_all()
        self.stop_all()
        speed = self.config.speed(speed_name)
        for engine in self.engines:
            engine.spin(speed)

    def manual(self) -> None:
        self.stop_all()
        self.unlock_all()

    def lock_all(self) -> Optional[ConceptSnapshot]:
        if not self.engines:
            return None
        self.stop_all()
        for engine in self.engines:
            engine.lock(True)
        values = [engine.value for engine in self.engines]
        self.snapshot = compose(self.config.labels, *values)
        self.concept_panel.show_snapshot(self.snapshot)
        self.set_status("")
        self.concept_changed.emit(self.snapshot.share_text)
        return self.snapshot
