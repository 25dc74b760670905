"""Tests for the drag and resize gesture state machines."""

import pytest

from roomplan.controllers import DragController, Gesture, ResizeController
from roomplan.models import Axis, Room, find_item
from roomplan.undo import UndoManager

from conftest import make_item


def drag_setup(*items):
    history = UndoManager(tuple(items))
    return history, DragController(history)


class TestDrag:
    def test_clamped_to_room_without_commit(self):
        history, drag = drag_setup(make_item("a", x=0.0, y=0.0))
        drag.begin("a", Room(3.0, 3.0))
        staged = drag.move(-40, -40)
        assert (staged.x, staged.y) == (0.0, 0.0)
        assert drag.end() is False
        assert len(history) == 1

    def test_snaps_to_sibling_edge_and_commits(self):
        a = make_item("a", x=1.0, y=1.0)
        b = make_item("b", x=3.0, y=4.0)
        history, drag = drag_setup(a, b)
        drag.begin("b", Room(4.5, 5.0))
        staged = drag.move((2.03 - 3.0) * 80, 0)
        assert staged.x == pytest.approx(2.0)
        assert staged.y == pytest.approx(4.0)
        assert len(drag.guides) == 1
        guide = drag.guides[0]
        assert guide.axis == Axis.X
        assert guide.position == pytest.approx(2.0)
        assert (guide.start, guide.end) == (0.0, 5.0)

        assert drag.end() is True
        assert len(history) == 2
        assert find_item(history.current(), "b").x == pytest.approx(2.0)
        assert drag.guides == ()
        assert drag.state == Gesture.IDLE

    def test_history_untouched_while_dragging(self):
        history, drag = drag_setup(make_item("a", x=1.0, y=1.0))
        drag.begin("a", Room(4.5, 5.0))
        drag.move(80, 80)
        drag.move(160, 80)
        assert len(history) == 1
        assert find_item(history.current(), "a").x == 1.0

    def test_delta_is_cumulative_from_origin(self):
        history, drag = drag_setup(make_item("a", x=1.0, y=1.0))
        drag.begin("a", Room(4.5, 5.0))
        drag.move(80, 0)
        staged = drag.move(40, 0)
        assert staged.x == pytest.approx(1.5)

    def test_click_without_motion_commits_nothing(self):
        history, drag = drag_setup(make_item("a", x=1.0, y=1.0))
        drag.begin("a", Room(4.5, 5.0))
        assert drag.end() is False
        assert len(history) == 1

    def test_locked_item_is_not_staged(self):
        history, drag = drag_setup(make_item("a", x=1.0, y=1.0, locked=True))
        assert drag.begin("a", Room(4.5, 5.0)) is not None
        assert drag.active
        assert drag.move(80, 80) is None
        assert drag.end() is False
        assert len(history) == 1

    def test_unknown_item(self):
        _, drag = drag_setup(make_item("a"))
        assert drag.begin("zzz", Room(4.5, 5.0)) is None
        assert not drag.active


class TestResize:
    def test_floors_at_minimum_size(self):
        history = UndoManager((make_item("a", width=1.0, depth=1.0),))
        resize = ResizeController(history)
        assert resize.begin("a")
        staged = resize.move(2, -30)
        assert staged.width == pytest.approx(0.1)
        assert staged.depth == pytest.approx(0.1)

    def test_snaps_to_grid_and_commits(self):
        history = UndoManager((make_item("a", x=4.0, width=1.0, depth=1.0),))
        resize = ResizeController(history)
        resize.begin("a")
        staged = resize.move(1.52 * 80, 0.61 * 80)
        assert staged.width == pytest.approx(1.5)
        assert staged.depth == pytest.approx(0.6)
        # resizing never moves the item, even past the wall
        assert staged.x == 4.0
        assert resize.end() is True
        assert find_item(history.current(), "a").width == pytest.approx(1.5)

    def test_size_rounded_back_to_start_commits_nothing(self):
        history = UndoManager((make_item("a", width=1.0, depth=1.0),))
        resize = ResizeController(history)
        resize.begin("a")
        resize.move(80.5, 79.6)
        assert resize.end() is False
        assert len(history) == 1

    def test_locked_item_rejected(self):
        history = UndoManager((make_item("a", locked=True),))
        resize = ResizeController(history)
        assert resize.begin("a") is False
        assert resize.move(200, 200) is None
        assert resize.end() is False
        assert len(history) == 1

    def test_frozen_rejected(self):
        history = UndoManager((make_item("a"),))
        assert ResizeController(history).begin("a", frozen=True) is False
