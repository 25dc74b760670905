import pytest

from roomplan.measure import position_for_wall_distance, wall_distances
from roomplan.models import Room, Wall

from conftest import make_item

ROOM = Room(4.5, 5.0)


def test_distances_to_each_wall():
    item = make_item(x=1.0, y=1.5, width=1.5, depth=1.0)
    d = wall_distances(item, ROOM)
    assert d.top == 1.5
    assert d.left == 1.0
    assert d.bottom == pytest.approx(2.5)
    assert d.right == pytest.approx(2.0)
    assert d.as_dict() == {"top": 1.5, "bottom": d.bottom, "left": 1.0, "right": d.right}


def test_distances_ignore_rotation():
    plain = make_item(x=1.0, y=1.0, width=2.0, depth=0.5)
    turned = make_item(x=1.0, y=1.0, width=2.0, depth=0.5, rotation=90)
    assert wall_distances(plain, ROOM) == wall_distances(turned, ROOM)


@pytest.mark.parametrize("wall,expected", [
    (Wall.TOP, (1.0, 0.3)),
    (Wall.BOTTOM, (1.0, 3.5)),
    (Wall.LEFT, (0.3, 1.0)),
    (Wall.RIGHT, (3.0, 1.0)),
])
def test_write_back_inverts_formula(wall, expected):
    item = make_item(x=1.0, y=1.0, width=1.0, depth=1.0)
    distance = {Wall.TOP: 0.3, Wall.BOTTOM: 0.5, Wall.LEFT: 0.3, Wall.RIGHT: 0.5}[wall]
    assert position_for_wall_distance(item, ROOM, wall, distance) == pytest.approx(expected)


def test_write_back_round_trips_distance():
    item = make_item(x=0.7, y=2.2, width=1.2, depth=0.8)
    x, y = position_for_wall_distance(item, ROOM, Wall.RIGHT, 0.25)
    assert wall_distances(item.moved(x, y), ROOM).right == pytest.approx(0.25)


def test_write_back_is_clamped():
    item = make_item(x=1.0, y=1.0, width=1.0, depth=1.0)
    assert position_for_wall_distance(item, ROOM, Wall.LEFT, 10.0) == (3.5, 1.0)


def test_write_back_clamp_uses_rotated_footprint():
    item = make_item(x=1.0, y=1.0, width=2.0, depth=0.5, rotation=90)
    # turned footprint is 0.5 wide, so the far stop is 4.0
    assert position_for_wall_distance(item, ROOM, Wall.LEFT, 4.2) == (4.0, 1.0)


@pytest.mark.parametrize("distance", [-0.1, None])
def test_invalid_distance(distance):
    assert position_for_wall_distance(make_item(), ROOM, Wall.TOP, distance) is None


def test_locked_item_cannot_move():
    assert position_for_wall_distance(make_item(locked=True), ROOM, Wall.TOP, 0.5) is None


def test_unknown_wall():
    assert position_for_wall_distance(make_item(), ROOM, "ceiling", 0.5) is None
