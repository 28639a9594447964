"""Tests for click placement, drag gestures and numeric entry."""

import pytest

from .controller import InteractionController
from .session import EditorSession
from .types import EditorSettings

SOURCE = [
    {"id": 1, "name": "Al Olaya Towers", "x": 10, "y": 10},
    {"id": 2, "name": "Narjis Villas", "x": 50, "y": 50},
]


def _controller(**settings):
    session = EditorSession(SOURCE, settings=EditorSettings(**settings))
    ctl = InteractionController(session)
    # 1000 x 500 px map container whose top-left is at (100, 20)
    ctl.set_bounds(100, 20, 1000, 500)
    return ctl


def _xy(ctl, marker_id):
    m = ctl.session.registry.get(marker_id)
    return (m.x, m.y)


# ---------------------------------------------------------------------------
# Click-to-place
# ---------------------------------------------------------------------------


class TestClick:
    def test_snapped_placement(self):
        ctl = _controller(grid_size=10, snap_to_grid=True)
        ctl.session.select(1)
        assert ctl.click(100 + 600, 20 + 400)
        assert _xy(ctl, 1) == (60, 80)

    def test_snap_rounds_raw_click(self):
        ctl = _controller(grid_size=10, snap_to_grid=True)
        ctl.session.select(1)
        ctl.click(100 + 634, 20 + 391)
        assert _xy(ctl, 1) == (60, 80)

    def test_click_halfway_between_grid_lines(self):
        ctl = _controller(grid_size=10, snap_to_grid=True)
        ctl.session.select(1)
        ctl.click(100 + 250, 20 + 175)
        assert _xy(ctl, 1) == (30, 40)

    def test_unsnapped_placement(self):
        ctl = _controller(grid_size=10, snap_to_grid=False)
        ctl.session.select(1)
        ctl.click(100 + 634, 20 + 391)
        x, y = _xy(ctl, 1)
        assert x == pytest.approx(63.4)
        assert y == pytest.approx(78.2)

    def test_undo_restores_pre_click_position(self):
        ctl = _controller()
        ctl.session.select(1)
        ctl.click(600, 270)
        assert ctl.undo()
        assert _xy(ctl, 1) == (10, 10)

    def test_no_selection_is_noop(self):
        ctl = _controller()
        assert not ctl.click(600, 270)
        assert len(ctl.session.history) == 0

    def test_view_mode_ignores_clicks(self):
        ctl = _controller(edit_mode=False)
        ctl.session.select(1)
        assert not ctl.click(600, 270)
        assert _xy(ctl, 1) == (10, 10)

    def test_click_outside_container_clamps(self):
        ctl = _controller()
        ctl.session.select(2)
        ctl.click(0, 2000)
        assert _xy(ctl, 2) == (0.0, 100.0)

    def test_degenerate_bounds_ignored(self):
        ctl = _controller()
        ctl.set_bounds(0, 0, 0, 0)
        ctl.session.select(1)
        assert not ctl.click(10, 10)
        assert len(ctl.session.history) == 0

    def test_click_during_drag_ignored(self):
        ctl = _controller()
        ctl.begin_drag(2, 600, 270)
        assert not ctl.click(200, 100)
        assert _xy(ctl, 2) == (50, 50)


# ---------------------------------------------------------------------------
# Drag gestures
# ---------------------------------------------------------------------------


class TestDrag:
    def test_begin_selects_marker(self):
        ctl = _controller()
        ctl.session.select(2)
        assert ctl.begin_drag(1, 200, 70)
        assert ctl.is_dragging
        assert ctl.active_id == 1
        assert ctl.session.selected_id == 1

    def test_begin_unknown_marker(self):
        ctl = _controller()
        assert not ctl.begin_drag(99)
        assert not ctl.is_dragging

    def test_view_mode_blocks_drag(self):
        ctl = _controller(edit_mode=False)
        assert not ctl.begin_drag(1)

    def test_moves_write_through_without_history(self):
        ctl = _controller()
        ctl.begin_drag(1, 200, 70)
        ctl.update_drag(100, 50)  # +10%, +10%
        assert _xy(ctl, 1) == (pytest.approx(20), pytest.approx(20))
        assert len(ctl.session.history) == 0

    def test_whole_gesture_is_one_history_entry(self):
        ctl = _controller()
        ctl.begin_drag(1, 200, 70)
        for i in range(50):
            ctl.move_to(200 + (i + 1) * 4, 70 + (i + 1) * 2)
        assert len(ctl.session.history) == 0
        assert ctl.end_drag()
        assert len(ctl.session.history) == 1
        assert not ctl.is_dragging
        x, y = _xy(ctl, 1)
        assert x == pytest.approx(30.0)
        assert y == pytest.approx(30.0)

    def test_undo_reverts_whole_gesture(self):
        ctl = _controller()
        ctl.begin_drag(2, 0, 0)
        for _ in range(10):
            ctl.update_drag(-10, -5)
        ctl.end_drag()
        assert _xy(ctl, 2) == (pytest.approx(40), pytest.approx(40))
        assert ctl.undo()
        assert _xy(ctl, 2) == (50, 50)
        assert ctl.redo()
        assert _xy(ctl, 2) == (pytest.approx(40), pytest.approx(40))

    def test_drag_clamps_at_edges(self):
        ctl = _controller()
        ctl.begin_drag(1)
        ctl.update_drag(-5000, 9000)
        assert _xy(ctl, 1) == (0.0, 100.0)
        # Coming back from the edge starts from the clamped position
        ctl.update_drag(100, -100)
        assert _xy(ctl, 1) == (pytest.approx(10.0), pytest.approx(80.0))

    def test_small_moves_accumulate_with_snapping(self):
        ctl = _controller(grid_size=10, snap_to_grid=True)
        ctl.begin_drag(1)
        # 2 px = 0.2% per event; 30 events = 6% -> 16% raw -> snaps to 20
        for _ in range(30):
            ctl.update_drag(2, 0)
        assert _xy(ctl, 1) == (pytest.approx(20), 10)

    def test_drag_without_movement_records_nothing(self):
        ctl = _controller()
        ctl.begin_drag(1, 200, 70)
        ctl.move_to(200, 70)
        assert not ctl.end_drag()
        assert len(ctl.session.history) == 0

    def test_end_drag_idempotent(self):
        ctl = _controller()
        ctl.begin_drag(1)
        ctl.update_drag(10, 10)
        assert ctl.end_drag()
        assert not ctl.end_drag()
        assert len(ctl.session.history) == 1

    def test_update_without_gesture(self):
        ctl = _controller()
        assert not ctl.update_drag(10, 10)
        assert not ctl.move_to(10, 10)

    def test_cancel_restores_start(self):
        ctl = _controller()
        ctl.begin_drag(2)
        ctl.update_drag(300, 300)
        assert ctl.cancel_drag()
        assert _xy(ctl, 2) == (50, 50)
        assert len(ctl.session.history) == 0
        assert not ctl.cancel_drag()

    def test_pointer_left_terminates_gesture(self):
        ctl = _controller()
        ctl.begin_drag(1)
        ctl.update_drag(50, 0)
        ctl.pointer_left()
        assert not ctl.is_dragging
        assert len(ctl.session.history) == 1

    def test_new_gesture_commits_open_one(self):
        ctl = _controller()
        ctl.begin_drag(1)
        ctl.update_drag(100, 0)
        ctl.begin_drag(2)
        assert ctl.active_id == 2
        assert len(ctl.session.history) == 1

    def test_undo_mid_drag_commits_then_undoes(self):
        ctl = _controller()
        ctl.begin_drag(1)
        ctl.update_drag(100, 0)
        assert ctl.undo()
        assert not ctl.is_dragging
        assert _xy(ctl, 1) == (10, 10)


# ---------------------------------------------------------------------------
# Numeric entry
# ---------------------------------------------------------------------------


class TestNumeric:
    def test_both_axes(self):
        ctl = _controller()
        ctl.session.select(2)
        assert ctl.commit_numeric(12.3, 45.6)
        assert _xy(ctl, 2) == (12.3, 45.6)
        assert len(ctl.session.history) == 1

    def test_single_axis_keeps_other(self):
        ctl = _controller()
        ctl.session.select(2)
        ctl.commit_numeric(y=5)
        assert _xy(ctl, 2) == (50, 5)

    def test_out_of_range_clamped(self):
        ctl = _controller()
        ctl.session.select(1)
        ctl.commit_numeric(150, -1)
        assert _xy(ctl, 1) == (100.0, 0.0)

    def test_undo_restores_previous_value(self):
        ctl = _controller()
        ctl.session.select(1)
        ctl.commit_numeric(70, 70)
        ctl.undo()
        assert _xy(ctl, 1) == (10, 10)

    def test_requires_selection(self):
        ctl = _controller()
        assert not ctl.commit_numeric(1, 1)
