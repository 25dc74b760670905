"""Pointer gesture state machines.

A gesture works on a detached staged copy of one item; the history is only
touched on ``end()``, and only when the staged value differs from the item as
it was when the gesture started.
"""
from __future__ import annotations
import logging
from typing import Optional, Tuple

from .geometry import clamp_position
from .models import FurnitureItem, Guide, Room, find_item, replace_item
from .snapping import snap_position
from .undo import UndoManager
from .utils import EPS, EditorConfig, snap

logger = logging.getLogger(__name__)


class Gesture:
    IDLE = "idle"
    DRAGGING = "dragging"
    RESIZING = "resizing"


class _GestureController:
    ACTIVE = Gesture.IDLE
    FIELDS: Tuple[str, ...] = ()     # staged attributes that count as a change

    def __init__(self, history: UndoManager, config: Optional[EditorConfig] = None):
        self.history = history
        self.config = config or EditorConfig()
        self.state = Gesture.IDLE
        self.origin: Optional[FurnitureItem] = None
        self.staged: Optional[FurnitureItem] = None

    @property
    def active(self) -> bool:
        return self.state != Gesture.IDLE

    @property
    def item_id(self) -> Optional[str]:
        return self.origin.id if self.origin else None

    def _start(self, item: FurnitureItem, stage: bool):
        self.state = self.ACTIVE
        self.origin = item
        self.staged = item if stage else None

    def _changed(self) -> bool:
        return any(abs(getattr(self.staged, f) - getattr(self.origin, f)) > EPS
                   for f in self.FIELDS)

    def end(self) -> bool:
        """Finish the gesture; returns True when a new layout was committed."""
        committed = False
        if self.active and self.staged is not None and self._changed():
            self.history.commit(replace_item(self.history.current(), self.staged))
            committed = True
            logger.debug("%s %s committed", self.ACTIVE, self.origin.id)
        self._reset()
        return committed

    def _reset(self):
        self.state = Gesture.IDLE
        self.origin = None
        self.staged = None


class DragController(_GestureController):
    ACTIVE = Gesture.DRAGGING
    FIELDS = ("x", "y")

    def __init__(self, history: UndoManager, config: Optional[EditorConfig] = None):
        super().__init__(history, config)
        self.room: Optional[Room] = None
        self.guides: Tuple[Guide, ...] = ()

    def begin(self, item_id: str, room: Room, frozen: bool = False) -> Optional[FurnitureItem]:
        """Start a drag. Locked (or frozen) items are selected but never staged."""
        item = find_item(self.history.current(), item_id)
        if item is None:
            return None
        self.room = room
        self.guides = ()
        self._start(item, stage=not (item.locked or frozen))
        return item

    def move(self, dx_px: float, dy_px: float) -> Optional[FurnitureItem]:
        """Pointer moved by (dx_px, dy_px) screen pixels since the gesture started."""
        if self.state != Gesture.DRAGGING or self.staged is None:
            return None
        cfg = self.config
        x = self.origin.x + cfg.to_meters(dx_px)
        y = self.origin.y + cfg.to_meters(dy_px)

        result = snap_position(self.origin, x, y, self.history.current(),
                               cfg.snap_threshold, self.room, cfg.grid_step)
        x, y = clamp_position(self.room, self.origin, result.x, result.y)

        self.guides = result.guides
        self.staged = self.origin.moved(x, y)
        return self.staged

    def _reset(self):
        super()._reset()
        self.guides = ()
        self.room = None


class ResizeController(_GestureController):
    """Bottom-right handle; pointer position is absolute, relative to the item's origin corner."""
    ACTIVE = Gesture.RESIZING
    FIELDS = ("width", "depth")

    def begin(self, item_id: str, frozen: bool = False) -> bool:
        item = find_item(self.history.current(), item_id)
        if item is None or item.locked or frozen:
            return False
        self._start(item, stage=True)
        return True

    def move(self, px_x: float, px_y: float) -> Optional[FurnitureItem]:
        if self.state != Gesture.RESIZING:
            return None
        cfg = self.config
        width = max(cfg.min_item_size, cfg.to_meters(px_x))
        depth = max(cfg.min_item_size, cfg.to_meters(px_y))
        width = snap(width, cfg.grid_step)
        depth = snap(depth, cfg.grid_step)
        # no position clamp here; the item may extend past the walls
        self.staged = self.origin.resized(width, depth)
        return self.staged
