from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .geometry import key_points
from .models import Axis, FurnitureItem, Guide, Room
from .utils import snap


@dataclass(frozen=True)
class SnapResult:
    x: float
    y: float
    guides: Tuple[Guide, ...] = ()


def grid_snap_position(x: float, y: float, step: float) -> Tuple[float, float]:
    return snap(x, step), snap(y, step)


def _nearest_pairing(moving: Tuple[float, float, float],
                     target: Tuple[float, float, float]) -> Tuple[float, int, float]:
    """(delta, moving index, target coordinate) of the closest 3x3 pairing; first wins ties."""
    best_delta = float("inf")
    best_i, best_pos = 0, 0.0
    for i, a in enumerate(moving):
        for b in target:
            delta = b - a
            if abs(delta) < abs(best_delta):
                best_delta, best_i, best_pos = delta, i, b
    return best_delta, best_i, best_pos


def snap_axis(item: FurnitureItem, axis: str, origin: float,
              siblings: Iterable[FurnitureItem], threshold: float) -> Tuple[float, Optional[float]]:
    """Snap one axis. Returns (new origin, matched sibling coordinate or None).

    Siblings are scanned in order and the first one whose closest pairing is
    strictly within ``threshold`` wins.
    """
    moving = key_points(item, axis, origin)
    for other in siblings:
        if other.id == item.id:
            continue
        delta, i, target = _nearest_pairing(moving, key_points(other, axis))
        if abs(delta) < threshold:
            # place the matched key point exactly on the target
            return target - (moving[i] - origin), target
    return origin, None


def snap_to_objects(item: FurnitureItem, x: float, y: float,
                    siblings: Iterable[FurnitureItem], threshold: float,
                    room: Room) -> SnapResult:
    siblings = list(siblings)
    guides: List[Guide] = []

    new_x, hit_x = snap_axis(item, Axis.X, x, siblings, threshold)
    if hit_x is not None:
        guides.append(Guide(Axis.X, hit_x, 0.0, room.length))

    new_y, hit_y = snap_axis(item, Axis.Y, y, siblings, threshold)
    if hit_y is not None:
        guides.append(Guide(Axis.Y, hit_y, 0.0, room.width))

    return SnapResult(new_x, new_y, tuple(guides))


def snap_position(item: FurnitureItem, x: float, y: float,
                  siblings: Iterable[FurnitureItem], threshold: float,
                  room: Room, grid_step: Optional[float] = None) -> SnapResult:
    """Grid quantization followed by object snapping, which may override it."""
    if grid_step:
        x, y = grid_snap_position(x, y, grid_step)
    return snap_to_objects(item, x, y, siblings, threshold, room)
