from __future__ import annotations
from typing import Dict, NamedTuple, Optional, Tuple

from .geometry import clamp_position
from .models import FurnitureItem, Room, Wall


class WallDistances(NamedTuple):
    top: float
    bottom: float
    left: float
    right: float

    def as_dict(self) -> Dict[str, float]:
        return dict(zip(Wall.ALL, self))


def wall_distances(item: FurnitureItem, room: Room) -> WallDistances:
    # stored width/depth, rotation is ignored on purpose
    return WallDistances(
        top=item.y,
        bottom=room.length - (item.y + item.depth),
        left=item.x,
        right=room.width - (item.x + item.width),
    )


def position_for_wall_distance(item: FurnitureItem, room: Room, wall: str,
                               distance: float) -> Optional[Tuple[float, float]]:
    """Inverse of ``wall_distances`` for one wall, passed through the boundary clamp.

    Returns None for a locked item, an unknown wall or a negative distance.
    """
    if item.locked or distance is None or distance < 0:
        return None
    x, y = item.x, item.y
    if wall == Wall.TOP:
        y = distance
    elif wall == Wall.BOTTOM:
        y = room.length - item.depth - distance
    elif wall == Wall.LEFT:
        x = distance
    elif wall == Wall.RIGHT:
        x = room.width - item.width - distance
    else:
        return None
    return clamp_position(room, item, x, y)
