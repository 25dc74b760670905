from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Optional, Tuple


class Category:
    BED = "BED"
    TABLE = "TABLE"
    CHAIR = "CHAIR"
    SOFA = "SOFA"
    WARDROBE = "WARDROBE"
    DOOR = "DOOR"
    WINDOW = "WINDOW"
    LIGHT = "LIGHT"
    CUSTOM = "CUSTOM"

    ALL = (BED, TABLE, CHAIR, SOFA, WARDROBE, DOOR, WINDOW, LIGHT, CUSTOM)


class Mode:
    EDIT = "edit"
    VIEW = "view"


class Axis:
    X = "x"
    Y = "y"


class Wall:
    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"

    ALL = (TOP, BOTTOM, LEFT, RIGHT)


@dataclass(frozen=True)
class Room:
    width: float   # meters
    length: float  # meters

    def __post_init__(self):
        if not (self.width > 0 and self.length > 0):
            raise ValueError(f"room size must be positive, got {self.width}×{self.length}")


@dataclass(frozen=True)
class FurnitureItem:
    id: str
    name: str
    category: str
    x: float
    y: float
    width: float
    depth: float
    rotation: float = 0.0
    color: str = "#cbd5e1"
    locked: bool = False
    light_range: Optional[float] = None

    def __post_init__(self):
        if not (self.width > 0 and self.depth > 0):
            raise ValueError(f"item {self.id!r} size must be positive, got {self.width}×{self.depth}")

    def moved(self, x: float, y: float) -> "FurnitureItem":
        return replace(self, x=x, y=y)

    def resized(self, width: float, depth: float) -> "FurnitureItem":
        return replace(self, width=width, depth=depth)

    @property
    def is_light(self) -> bool:
        return self.category == Category.LIGHT


# Render order = sequence order; last wins on duplicate ids.
Layout = Tuple[FurnitureItem, ...]


@dataclass(frozen=True)
class Guide:
    """Full-span alignment line in room meters, valid for one gesture step."""
    axis: str        # Axis.X -> vertical line at x=position, Axis.Y -> horizontal line
    position: float
    start: float
    end: float


def find_item(layout: Layout, item_id: Optional[str]) -> Optional[FurnitureItem]:
    found = None
    for it in layout:
        if it.id == item_id:
            found = it
    return found


def replace_item(layout: Layout, item: FurnitureItem) -> Layout:
    return tuple(item if it.id == item.id else it for it in layout)
