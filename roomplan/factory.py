from __future__ import annotations
import uuid
from typing import Callable, Optional

from .catalog import Preset
from .models import Category, FurnitureItem, Room
from .utils import DEFAULT_ITEM_COLOR


class ItemFactory:
    def __init__(self, id_factory: Optional[Callable[[], str]] = None):
        self._new_id = id_factory or (lambda: str(uuid.uuid4()))

    def create(self, preset: Preset, room: Room) -> FurnitureItem:
        """New item from a catalog preset, centered in the room."""
        w = preset.width or 1.0
        d = preset.depth or 1.0
        return FurnitureItem(
            id=self._new_id(),
            name=preset.name or "New item",
            category=preset.category or Category.CUSTOM,
            x=room.width / 2 - w / 2,
            y=room.length / 2 - d / 2,
            width=w,
            depth=d,
            rotation=0.0,
            color=preset.color or DEFAULT_ITEM_COLOR,
            light_range=preset.light_range,
        )
