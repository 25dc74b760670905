"""Rotation-aware footprint helpers and the boundary clamp.

Only quarter turns are modelled: an item whose rotation is not a multiple of
180 degrees swaps width and depth, anything in between is treated the same.
"""
from __future__ import annotations
from typing import Optional, Tuple

from .models import Axis, FurnitureItem, Room
from .utils import clamp


def is_quarter_turned(rotation: float) -> bool:
    return rotation % 180 != 0


def effective_footprint(item: FurnitureItem) -> Tuple[float, float]:
    if is_quarter_turned(item.rotation):
        return item.depth, item.width
    return item.width, item.depth


def key_points(item: FurnitureItem, axis: str, origin: Optional[float] = None) -> Tuple[float, float, float]:
    """Near edge, center and far edge along ``axis``.

    ``origin`` overrides the item's own coordinate on that axis (used for a
    candidate position during a drag).
    """
    w, d = effective_footprint(item)
    if axis == Axis.X:
        start, span = (item.x if origin is None else origin), w
    else:
        start, span = (item.y if origin is None else origin), d
    return start, start + span / 2.0, start + span


def clamp_position(room: Room, item: FurnitureItem, x: float, y: float) -> Tuple[float, float]:
    """Keep the effective footprint inside the room.

    Footprints larger than the room end up at the minimum corner.
    """
    w, d = effective_footprint(item)
    return clamp(x, 0.0, room.width - w), clamp(y, 0.0, room.length - d)


def center(item: FurnitureItem) -> Tuple[float, float]:
    # stored (pre-rotation) size, matches the measurement overlay
    return item.x + item.width / 2.0, item.y + item.depth / 2.0
