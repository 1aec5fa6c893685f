"""Tests for the concept display and share actions."""
import pytest

pytest.importorskip("PyQt6")

pytestmark = pytest.mark.gui

from PyQt6.QtGui import QDesktopServices, QGuiApplication

from brainstormer.content.models import ConceptItem
from brainstormer.engine.composer import compose
from brainstormer.ui.concept_panel import ConceptPanel


@pytest.fixture
def panel(qtbot):
    widget = ConceptPanel()
    qtbot.addWidget(widget)
    return widget


@pytest.fixture
def snapshot():
    return compose(["A", "B", "C"], ConceptItem("X", "ex"), ConceptItem("P"), ConceptItem("N"))


@pytest.fixture
def opened(monkeypatch):
    urls = []

    def fake_open(url):
        urls.append(url.toString())
        return True

    monkeypatch.setattr(QDesktopServices, "openUrl", fake_open)
    return urls


def test_empty_panel_shares_visible_text(panel):
    assert panel.share_text() == ""


def test_snapshot_fields_are_shown(panel, snapshot):
    panel.show_snapshot(snapshot)
    visible = panel.visible_text().splitlines()
    assert visible == ["A", "X", "ex", "B", "P", "C", "N"]
    assert panel.share_text() == "A: X\n  - ex\nB: P\nC: N"


def test_new_snapshot_replaces_fields(panel, snapshot):
    panel.show_snapshot(snapshot)
    panel.show_snapshot(compose(["A", "B", "C"], ConceptItem("1"), ConceptItem("2"), ConceptItem("3")))
    assert panel.visible_text().splitlines() == ["A", "1", "B", "2", "C", "3"]


def test_copy_puts_share_text_on_clipboard(panel, snapshot, qtbot):
    panel.show_snapshot(snapshot)
    with qtbot.waitSignal(panel.shared, timeout=1000) as blocker:
        panel.copy_to_clipboard()
    assert QGuiApplication.clipboard().text() == snapshot.share_text
    assert blocker.args == ["copy"]


def test_email_opens_mailto_link(panel, snapshot, opened):
    panel.show_snapshot(snapshot)
    panel.open_email()
    assert len(opened) == 1
    assert opened[0].startswith("mailto:?subject=Concept&body=")


def test_sms_opens_sms_link(panel, snapshot, opened, qtbot):
    panel.show_snapshot(snapshot)
    with qtbot.waitSignal(panel.shared, timeout=1000) as blocker:
        panel.open_sms()
    assert opened[0].startswith("sms:")
    assert blocker.args == ["sms"]
