"""Tests for the top-level brainstormer widget."""
import pytest

pytest.importorskip("PyQt6")

pytestmark = pytest.mark.gui

from brainstormer.config import BrainstormerConfig
from brainstormer.content.errors import StartupFailure
from brainstormer.content.loader import SourceLoader
from brainstormer.content.models import PLACEHOLDER_GLYPH, ConceptItem
from brainstormer.engine.frame_clock import ManualFrameClock
from brainstormer.engine.reel import BASE_CADENCE_MS
from brainstormer.ui.brainstormer_widget import STATUS_FAILED, BrainstormerWidget

from .helpers import FixedRng


class FakeLoader:
    def __init__(self, lists=None, error=None):
        self.lists = lists
        self.error = error
        self.requested = None

    async def load_all(self, sources):
        self.requested = list(sources)
        if self.error is not None:
            raise self.error
        return self.lists


LISTS = [
    [ConceptItem("X", "ex"), ConceptItem("Y")],
    [ConceptItem("P")],
    [ConceptItem("M"), ConceptItem("N"), ConceptItem("O")],
]


@pytest.fixture
def config():
    return BrainstormerConfig(labels=("A", "B", "C"), sources=("s1", "s2", "s3"))


@pytest.fixture
def make_widget(qtbot, config):
    def _make(loader):
        widget = BrainstormerWidget(config, loader=loader, clock=ManualFrameClock(), rng=FixedRng(0))
        qtbot.addWidget(widget)
        return widget
    return _make


def test_controls_disabled_until_started(make_widget):
    widget = make_widget(FakeLoader(LISTS))
    assert [r.title.text() for r in widget.reel_widgets] == ["A", "B", "C"]
    assert not widget.btn_spin.isEnabled()
    assert widget.lock_all() is None


@pytest.mark.asyncio
async def test_start_seeds_reels(make_widget):
    loader = FakeLoader(LISTS)
    widget = make_widget(loader)
    assert await widget.start() is True
    assert loader.requested == ["s1", "s2", "s3"]
    assert widget.status.text() == ""
    assert all(btn.isEnabled() for btn in (widget.btn_slow, widget.btn_spin, widget.btn_fast, widget.btn_manual, widget.btn_lock))
    assert widget.reel_widgets[0].row_texts() == ["Y", "X", "Y"]
    assert widget.reel_widgets[1].row_texts() == ["P", "P", "P"]


@pytest.mark.asyncio
async def test_empty_list_gets_placeholder(make_widget):
    widget = make_widget(FakeLoader([[], LISTS[1], LISTS[2]]))
    assert await widget.start()
    assert widget.reel_widgets[0].row_texts() == [PLACEHOLDER_GLYPH] * 3


@pytest.mark.asyncio
async def test_startup_failure_is_reported(make_widget):
    widget = make_widget(FakeLoader(error=RuntimeError("loop gone")))
    assert await widget.start() is False
    assert widget.status.text() == STATUS_FAILED
    assert isinstance(widget.startup_error, StartupFailure)
    assert "loop gone" in str(widget.startup_error)
    assert not widget.btn_lock.isEnabled()
    assert widget.engines == []


@pytest.mark.asyncio
async def test_spin_then_lock_composes_concept(make_widget, qtbot):
    widget = make_widget(FakeLoader(LISTS))
    await widget.start()
    widget.spin_all("fast")
    assert all(e.spinning for e in widget.engines)
    assert widget.engines[0].state.cadence_ms == pytest.approx(BASE_CADENCE_MS / 2.2)

    widget.clock.advance(BASE_CADENCE_MS / 2.2)
    with qtbot.waitSignal(widget.concept_changed, timeout=1000) as blocker:
        snapshot = widget.lock_all()
    assert all(e.locked and not e.spinning for e in widget.engines)
    assert snapshot.share_text == "A: Y\nB: P\nC: N"
    assert blocker.args == [snapshot.share_text]
    assert widget.concept_panel.share_text() == snapshot.share_text


@pytest.mark.asyncio
async def test_spin_unlocks_and_manual_stops(make_widget):
    widget = make_widget(FakeLoader(LISTS))
    await widget.start()
    widget.lock_all()
    widget.spin_all("slow")
    assert all(e.spinning and not e.locked for e in widget.engines)
    assert widget.engines[0].state.cadence_ms == pytest.approx(BASE_CADENCE_MS / 0.9)
    widget.manual()
    assert all(not e.spinning and not e.locked for e in widget.engines)
    assert widget.clock.pending == 0


@pytest.mark.asyncio
async def test_buttons_drive_actions(make_widget):
    widget = make_widget(FakeLoader(LISTS))
    await widget.start()
    widget.btn_spin.click()
    assert all(e.spinning for e in widget.engines)
    widget.btn_lock.click()
    assert widget.snapshot is not None
    assert widget.snapshot.share_text == "A: X\n  - ex\nB: P\nC: M"


@pytest.mark.asyncio
@pytest.mark.parametrize("bad_text", ["x²", "[" * 100000], ids=["superscript", "deep-nesting"])
async def test_unusable_source_leaves_other_reels_seeded(qtbot, list_file, bad_text):
    config = BrainstormerConfig(
        labels=("A", "B", "C"),
        sources=(list_file('["a1", "a2"]', "a.json"), list_file(bad_text, "b.js"), list_file("export default ['c'];", "c.js")),
    )
    widget = BrainstormerWidget(config, loader=SourceLoader(), clock=ManualFrameClock(), rng=FixedRng(0))
    qtbot.addWidget(widget)
    assert await widget.start() is True
    assert widget.startup_error is None
    assert widget.reel_widgets[0].row_texts() == ["a2", "a1", "a2"]
    assert widget.reel_widgets[1].row_texts() == [PLACEHOLDER_GLYPH] * 3
    assert widget.reel_widgets[2].row_texts() == ["c", "c", "c"]
    assert widget.btn_spin.isEnabled()
