"""Tests for grid quantization and edge/center object snapping."""

import pytest

from roomplan.models import Axis, Room
from roomplan.snapping import grid_snap_position, snap_axis, snap_position, snap_to_objects

from conftest import make_item

THRESHOLD = 10 / 80  # 10 px at 80 px/m
ROOM = Room(4.5, 5.0)


def test_grid_snap_rounds_to_step():
    x, y = grid_snap_position(1.03, 0.97, 0.05)
    assert x == pytest.approx(1.05)
    assert y == pytest.approx(0.95)


class TestThreshold:
    def setup_method(self):
        self.anchor = make_item("a", x=1.0, y=1.0)
        self.moving = make_item("b", x=3.0, y=4.0)

    def test_exactly_at_threshold_does_not_snap(self):
        result = snap_to_objects(self.moving, 2.125, 4.0, [self.anchor], THRESHOLD, ROOM)
        assert result.x == 2.125
        assert result.guides == ()

    def test_just_inside_threshold_snaps(self):
        result = snap_to_objects(self.moving, 2.12, 4.0, [self.anchor], THRESHOLD, ROOM)
        assert result.x == pytest.approx(2.0)
        assert [g.axis for g in result.guides] == [Axis.X]
        assert result.guides[0].position == 2.0


def test_center_to_center_alignment():
    anchor = make_item("a", x=1.0, y=0.0, width=2.0)        # center x = 2.0
    moving = make_item("b", x=0.0, y=3.0, width=1.0)
    new_x, hit = snap_axis(moving, Axis.X, 1.46, [anchor], THRESHOLD)
    assert hit == pytest.approx(2.0)
    assert new_x == pytest.approx(1.5)                       # its center lands on 2.0


def test_self_is_ignored():
    moving = make_item("b", x=1.0, y=1.0)
    result = snap_to_objects(moving, 1.05, 1.05, [moving], THRESHOLD, ROOM)
    assert (result.x, result.y) == (1.05, 1.05)
    assert result.guides == ()


def test_first_sibling_within_threshold_wins():
    far = make_item("far", x=2.1, y=0.0)        # left edge 0.1 away
    near = make_item("near", x=2.02, y=3.0)     # left edge 0.02 away, listed second
    moving = make_item("m", x=0.0, y=4.0)
    new_x, hit = snap_axis(moving, Axis.X, 2.0, [far, near], THRESHOLD)
    assert hit == pytest.approx(2.1)
    assert new_x == pytest.approx(2.1)


def test_rotated_sibling_uses_effective_footprint():
    # 2.0 x 0.5 turned a quarter: occupies x in [1.0, 1.5]
    sibling = make_item("s", x=1.0, y=0.0, width=2.0, depth=0.5, rotation=90)
    moving = make_item("m", x=3.0, y=4.0, width=0.5, depth=0.5)
    new_x, hit = snap_axis(moving, Axis.X, 1.55, [sibling], THRESHOLD)
    assert hit == pytest.approx(1.5)
    assert new_x == pytest.approx(1.5)


def test_independent_axes_snap_to_different_siblings():
    a = make_item("a", x=1.0, y=1.0)
    c = make_item("c", x=3.0, y=3.5, width=0.5, depth=0.5)
    moving = make_item("b", x=0.0, y=0.0)
    result = snap_to_objects(moving, 2.05, 3.45, [a, c], THRESHOLD, ROOM)
    assert result.x == pytest.approx(2.0)
    assert result.y == pytest.approx(3.5)
    assert len(result.guides) == 2
    vertical, horizontal = result.guides
    assert vertical.axis == Axis.X and vertical.position == pytest.approx(2.0)
    assert (vertical.start, vertical.end) == (0.0, ROOM.length)
    assert horizontal.axis == Axis.Y and horizontal.position == pytest.approx(3.5)
    assert (horizontal.start, horizontal.end) == (0.0, ROOM.width)


def test_object_snap_overrides_grid():
    anchor = make_item("a", x=1.0, y=1.0)
    moving = make_item("b", x=3.0, y=4.0)
    result = snap_position(moving, 2.03, 4.0, [anchor], THRESHOLD, ROOM, grid_step=0.05)
    assert result.x == pytest.approx(2.0)


def test_grid_only_when_nothing_near():
    moving = make_item("b", x=3.0, y=4.0)
    result = snap_position(moving, 2.03, 3.98, [], THRESHOLD, ROOM, grid_step=0.05)
    assert result.x == pytest.approx(2.05)
    assert result.y == pytest.approx(4.0)
    assert result.guides == ()
