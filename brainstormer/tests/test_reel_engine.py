"""Tests for reel positioning, locking and wheel/drag input."""

import pytest

from brainstormer.content.models import PLACEHOLDER_GLYPH, ConceptItem
from brainstormer.engine.frame_clock import ManualFrameClock
from brainstormer.engine.reel import ReelEngine, window_rows

from .helpers import FixedRng, RecordingView, items


def make(names="ABCDE", start=0, view=None):
    return ReelEngine(items(*names), view, clock=ManualFrameClock(), rng=FixedRng(start))


class TestWindow:
    def test_three_rows_around_center(self):
        rows = window_rows(items("A", "B", "C", "D"), 0)
        assert [r.text for r in rows] == ["D", "A", "B"]
        assert [r.focused for r in rows] == [False, True, False]

    def test_short_lists_repeat_items(self):
        assert [r.text for r in window_rows(items("X"), 0)] == ["X", "X", "X"]
        assert [r.text for r in window_rows(items("X", "Y"), 0)] == ["Y", "X", "Y"]

    def test_empty_sequence_renders_placeholders(self):
        rows = window_rows([], 0)
        assert [r.text for r in rows] == [PLACEHOLDER_GLYPH] * 3
        assert rows[1].focused


class TestConstruction:
    def test_empty_items_rejected(self):
        with pytest.raises(ValueError):
            ReelEngine([])

    def test_start_index_comes_from_rng_and_renders(self):
        view = RecordingView()
        engine = make(start=3, view=view)
        assert engine.index == 3
        assert engine.value == ConceptItem("D")
        assert view.last == ["C", "D", "E"]

    def test_default_rng_picks_valid_index(self):
        engine = ReelEngine(items("A", "B", "C"))
        assert 0 <= engine.index < 3
        assert not engine.spinning and not engine.locked


class TestStepping:
    def test_forward_steps_wrap(self):
        engine = make(start=3)
        for _ in range(7):
            engine.step(+1)
        assert engine.index == (3 + 7) % 5

    def test_step_back_restores_index_and_render(self):
        view = RecordingView()
        engine = make(start=0, view=view)
        before = list(view.last)
        engine.step(+1)
        engine.step(-1)
        assert engine.index == 0
        assert view.last == before

    def test_direction_is_normalized(self):
        engine = make(start=0)
        engine.step(0)
        assert engine.index == 1
        engine.step(-0.2)
        assert engine.index == 0
        engine.step(-5)
        assert engine.index == 4


class TestLocking:
    def test_locked_reel_ignores_spin_wheel_and_drag(self):
        view = RecordingView()
        engine = make(start=2, view=view)
        engine.lock(True)
        engine.spin(1.0)
        assert not engine.spinning
        assert engine.clock.pending == 0
        assert engine.wheel(500) == 0
        engine.drag_begin(0)
        assert engine.drag_move(200) == 0
        assert engine.index == 2
        assert view.locked_calls == [True]

    def test_unlock_restores_input(self):
        engine = make(start=0)
        engine.lock(True)
        engine.lock(False)
        assert not engine.locked
        assert engine.wheel(100) == 1
        assert engine.index == 1

    def test_lock_none_means_lock(self):
        engine = make()
        engine.lock(None)
        assert engine.locked

    def test_lock_stops_running_spin(self):
        engine = make(start=0)
        engine.spin(1.0)
        engine.clock.advance(95)
        assert engine.index == 1
        engine.lock(True)
        assert engine.locked and not engine.spinning
        assert engine.clock.pending == 0
        engine.clock.run_frames(95, 95, 95)
        assert engine.index == 1

    def test_lock_discards_partial_input(self):
        engine = make(start=0)
        engine.wheel(90)
        engine.lock(True)
        engine.lock(False)
        assert engine.wheel(20) == 0
        assert engine.index == 0


class TestSetItems:
    def test_index_clamped_to_new_length(self):
        view = RecordingView()
        engine = make(start=4, view=view)
        engine.set_items(items("P", "Q"))
        assert engine.index == 1
        assert engine.value == ConceptItem("Q")
        assert view.last == ["P", "Q", "P"]

    def test_empty_replacement_ignored(self):
        engine = make(start=1)
        engine.set_items([])
        assert engine.items == tuple(items(*"ABCDE"))
        assert engine.index == 1


class TestWheel:
    def test_partial_deltas_accumulate(self):
        engine = make(start=0)
        assert engine.wheel(60) == 0
        assert engine.wheel(60) == 1
        assert engine.index == 1
        assert engine.state.accumulator == pytest.approx(20)

    def test_negative_deltas_step_backwards_and_keep_remainder(self):
        engine = make(start=0)
        engine.wheel(20)
        assert engine.wheel(-250) == 2
        assert engine.index == 3
        assert engine.state.accumulator == pytest.approx(-30)

    def test_wheel_inert_while_spinning(self):
        engine = make(start=0)
        engine.spin(1.0)
        assert engine.wheel(1000) == 0
        assert engine.index == 0


class TestDrag:
    def test_drag_bridges_to_wheel_in_chunks(self):
        engine = make(start=0)
        engine.drag_begin(0)
        # 50px -> three 14px chunks (42 wheel units), 8px carried.
        assert engine.drag_move(50) == 0
        assert engine.state.drag_accumulator == pytest.approx(8)
        # +70px -> 78px carried -> five chunks; wheel crosses 100 once.
        assert engine.drag_move(120) == 1
        assert engine.index == 1
        assert engine.state.accumulator == pytest.approx(12)

    def test_upward_drag_moves_back(self):
        engine = make(start=0)
        engine.drag_begin(200)
        steps = engine.drag_move(200 - 14 * 8)
        assert steps == 1
        assert engine.index == 4

    def test_drag_end_discards_remainder(self):
        engine = make(start=0)
        engine.drag_begin(0)
        engine.drag_move(10)
        engine.drag_end()
        assert engine.state.drag_accumulator == 0
        assert engine.drag_move(100) == 0
        assert engine.index == 0

    def test_move_without_begin_is_ignored(self):
        engine = make(start=0)
        assert engine.drag_move(500) == 0
