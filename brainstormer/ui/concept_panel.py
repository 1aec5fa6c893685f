"""Concept display and share actions."""

from __future__ import annotations

import logging
from typing import List, Optional

from PyQt6.QtCore import QSysInfo, Qt, QUrl, pyqtSignal
from PyQt6.QtGui import QDesktopServices, QGuiApplication
from PyQt6.QtWidgets import QGroupBox, QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from ..engine.composer import ConceptSnapshot
from ..share import mailto_url, sms_url

logger = logging.getLogger(__name__)

_IOS_PRODUCTS = {"ios", "tvos", "watchos"}


class ConceptPanel(QGroupBox):
    """Field blocks for the locked concept plus Copy / Email / SMS buttons.

    ``shared`` is emitted with the channel name ("copy", "email", "sms")
    after each share action.
    """

    shared = pyqtSignal(str)

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__("Concept", parent)
        self.snapshot: Optional[ConceptSnapshot] = None

        layout = QVBoxLayout(self)
        self.fields_box = QVBoxLayout()
        layout.addLayout(self.fields_box)

        actions = QHBoxLayout()
        self.btn_copy = QPushButton("Copy")
        self.btn_email = QPushButton("Email")
        self.btn_sms = QPushButton("SMS")
        self.btn_copy.clicked.connect(self.copy_to_clipboard)
        self.btn_email.clicked.connect(self.open_email)
        self.btn_sms.clicked.connect(self.open_sms)
        actions.addStretch()
        actions.addWidget(self.btn_copy); actions.addWidget(self.btn_email); actions.addWidget(self.btn_sms)
        layout.addLayout(actions)

    def _clear_fields(self) -> None:
        while self.fields_box.count():
            item = self.fields_box.takeAt(0)
            widget = item.widget() if item is not None else None
            if widget is not None:
                widget.setParent(None)
                widget.deleteLater()

    def show_snapshot(self, snapshot: ConceptSnapshot) -> None:
        self._clear_fields()
        self.snapshot = snapshot
        for f in snapshot.fields:
            block = QWidget()
            block.setObjectName("field")
            block_layout = QVBoxLayout(block)
            block_layout.setContentsMargins(0, 0, 0, 4)
            for text, name in ((f.label, "fieldLabel"), (f.name, "fieldValue"), (f.desc, "fieldDesc")):
                if not text and name == "fieldDesc":
                    continue
                label = QLabel(text)
                label.setObjectName(name)
                label.setTextFormat(Qt.TextFormat.PlainText)
                label.setWordWrap(True)
                block_layout.addWidget(label)
            self.fields_box.addWidget(block)

    def visible_text(self) -> str:
        lines: List[str] = []
        for label in self.findChildren(QLabel):
            if label.text():
                lines.append(label.text())
        return "\n".join(lines).strip()

    def share_text(self) -> str:
        """Composed text, or whatever the panel shows before the first lock."""
        if self.snapshot is not None and self.snapshot.share_text:
            return self.snapshot.share_text
        return self.visible_text()

    # Share actions ---------------------------------------------------------
    def copy_to_clipboard(self) -> None:
        clipboard = QGuiApplication.clipboard()
        if clipboard is None:
            logger.warning("clipboard unavailable; cannot copy concept")
            return
        clipboard.setText(self.share_text())
        self.shared.emit("copy")

    def open_email(self) -> None:
        if not QDesktopServices.openUrl(QUrl(mailto_url(self.share_text()))):
            logger.warning("no handler for mailto: links")
        self.shared.emit("email")

    def open_sms(self) -> None:
        ios = QSysInfo.productType().lower() in _IOS_PRODUCTS
        if not QDesktopServices.openUrl(QUrl(sms_url(self.share_text(), ios=ios))):
            logger.warning("no handler for sms: links")
        self.shared.emit("sms")
