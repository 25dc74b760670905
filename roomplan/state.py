from __future__ import annotations
import logging
from dataclasses import replace
from typing import Callable, Optional, Tuple

from .catalog import Preset
from .controllers import DragController, ResizeController
from .factory import ItemFactory
from .geometry import clamp_position
from .measure import WallDistances, position_for_wall_distance, wall_distances
from .models import FurnitureItem, Guide, Layout, Mode, Room, find_item, replace_item
from .undo import UndoManager
from .utils import DEFAULT_ROOM, ROTATION_STEP, EditorConfig

logger = logging.getLogger(__name__)


class PlanState:
    """Editing session for one room: committed layouts, selection and gestures.

    Collaborator callbacks fire at commit points only, never while a gesture
    is in progress. Rejected edits (locked item, view mode, invalid value) are
    silent no-ops that return False/None.
    """

    def __init__(self, room: Room = DEFAULT_ROOM, layout: Layout = (),
                 config: Optional[EditorConfig] = None,
                 factory: Optional[ItemFactory] = None,
                 on_items_change: Optional[Callable[[Layout], None]] = None,
                 on_dimensions_change: Optional[Callable[[Room], None]] = None,
                 on_selection_change: Optional[Callable[[Optional[str]], None]] = None,
                 status_cb: Optional[Callable[[str], None]] = None):
        self.config = config or EditorConfig()
        self.factory = factory or ItemFactory()
        self.history = UndoManager(layout)
        self.drag = DragController(self.history, self.config)
        self.resize = ResizeController(self.history, self.config)
        self.mode = Mode.EDIT
        self._room = room
        self._selected_id: Optional[str] = None
        self.on_items_change = on_items_change
        self.on_dimensions_change = on_dimensions_change
        self.on_selection_change = on_selection_change
        self._status_cb = status_cb

    # ---------- read API ----------
    @property
    def room(self) -> Room:
        return self._room

    @property
    def layout(self) -> Layout:
        return self.history.current()

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    @property
    def selected_item(self) -> Optional[FurnitureItem]:
        return find_item(self.layout, self._selected_id)

    @property
    def editable(self) -> bool:
        return self.mode == Mode.EDIT

    @property
    def busy(self) -> bool:
        return self.drag.active or self.resize.active

    @property
    def guides(self) -> Tuple[Guide, ...]:
        return self.drag.guides

    @property
    def staged_item(self) -> Optional[FurnitureItem]:
        if self.drag.active:
            return self.drag.staged
        if self.resize.active:
            return self.resize.staged
        return None

    @property
    def history_position(self) -> Tuple[int, int]:
        return self.history.cursor, len(self.history)

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    def wall_distances(self) -> Optional[WallDistances]:
        item = self.selected_item
        return wall_distances(item, self._room) if item else None

    # ---------- session ----------
    def open(self, room: Room, layout: Layout):
        """Start over with a new room and a single seed snapshot."""
        self._room = room
        self.history.reset(layout)
        self._set_selection(None)
        if self.on_dimensions_change:
            self.on_dimensions_change(room)
        if self.on_items_change:
            self.on_items_change(self.layout)

    def set_mode(self, mode: str):
        self.mode = mode

    def select(self, item_id: Optional[str]) -> bool:
        if item_id is not None and find_item(self.layout, item_id) is None:
            return False
        self._set_selection(item_id)
        return True

    # ---------- gestures ----------
    def begin_drag(self, item_id: str) -> Optional[FurnitureItem]:
        if self.busy:
            return None
        item = self.drag.begin(item_id, self._room, frozen=not self.editable)
        if item is not None:
            self._set_selection(item.id)
        return item

    def drag_to(self, dx_px: float, dy_px: float) -> Optional[FurnitureItem]:
        return self.drag.move(dx_px, dy_px)

    def end_drag(self) -> bool:
        if not self.drag.active:
            return False
        label = self.drag.origin.name
        committed = self.drag.end()
        if committed:
            self._after_commit(f"move {label}")
        return committed

    def begin_resize(self, item_id: str) -> bool:
        if self.busy:
            return False
        ok = self.resize.begin(item_id, frozen=not self.editable)
        if ok:
            self._set_selection(item_id)
        return ok

    def resize_to(self, px_x: float, px_y: float) -> Optional[FurnitureItem]:
        return self.resize.move(px_x, px_y)

    def end_resize(self) -> bool:
        if not self.resize.active:
            return False
        label = self.resize.origin.name
        committed = self.resize.end()
        if committed:
            self._after_commit(f"resize {label}")
        return committed

    # ---------- direct edits ----------
    def nudge(self, dx: int, dy: int, fast: bool = False) -> bool:
        item = self._mutable(self._selected_id)
        if item is None:
            return False
        step = self.config.nudge_step_fast if fast else self.config.nudge_step
        x, y = clamp_position(self._room, item, item.x + dx * step, item.y + dy * step)
        if (x, y) == (item.x, item.y):
            return False
        self._commit(replace_item(self.layout, item.moved(x, y)), f"nudge {item.name}")
        return True

    def add_item(self, preset: Preset) -> Optional[FurnitureItem]:
        if not self._writable():
            return None
        item = self.factory.create(preset, self._room)
        # a preset larger than the room lands in the minimum corner
        item = item.moved(*clamp_position(self._room, item, item.x, item.y))
        self._commit(self.layout + (item,), f"add {item.name}")
        self._set_selection(item.id)
        return item

    def delete_item(self, item_id: Optional[str] = None) -> bool:
        item_id = item_id if item_id is not None else self._selected_id
        if not self._writable() or find_item(self.layout, item_id) is None:
            return False
        self._commit(tuple(it for it in self.layout if it.id != item_id), "delete")
        if self._selected_id == item_id:
            self._set_selection(None)
        return True

    def rename_item(self, item_id: str, name: str) -> bool:
        name = (name or "").strip()
        if not name:
            return False
        return self._edit_attrs(item_id, "rename", name=name)

    def recolor_item(self, item_id: str, color: str) -> bool:
        if not color:
            return False
        return self._edit_attrs(item_id, "color", color=color)

    def set_locked(self, item_id: str, locked: bool) -> bool:
        return self._edit_attrs(item_id, "lock" if locked else "unlock", locked=bool(locked))

    def toggle_lock(self, item_id: Optional[str] = None) -> bool:
        item = find_item(self.layout, item_id if item_id is not None else self._selected_id)
        if item is None:
            return False
        return self.set_locked(item.id, not item.locked)

    def rotate_item(self, item_id: Optional[str] = None, step: float = ROTATION_STEP) -> bool:
        item = self._mutable(item_id if item_id is not None else self._selected_id)
        if item is None:
            return False
        return self.set_rotation(item.id, (item.rotation + step) % 360)

    def set_rotation(self, item_id: str, degrees: Optional[float]) -> bool:
        item = self._mutable(item_id)
        if item is None or degrees is None or degrees == item.rotation:
            return False
        rotated = replace(item, rotation=float(degrees))
        # a quarter turn can push the swapped footprint through a wall
        x, y = clamp_position(self._room, rotated, rotated.x, rotated.y)
        self._commit(replace_item(self.layout, rotated.moved(x, y)), f"rotate {item.name}")
        return True

    def set_item_size(self, item_id: str, width: Optional[float] = None,
                      depth: Optional[float] = None) -> bool:
        item = self._mutable(item_id)
        if item is None:
            return False
        width = item.width if width is None else width
        depth = item.depth if depth is None else depth
        if not (width > 0 and depth > 0):
            logger.debug("size %r×%r rejected", width, depth)
            return False
        if (width, depth) == (item.width, item.depth):
            return False
        self._commit(replace_item(self.layout, item.resized(width, depth)), f"resize {item.name}")
        return True

    def set_light_range(self, item_id: str, meters: Optional[float]) -> bool:
        item = self._mutable(item_id)
        if item is None or not item.is_light or meters is None or meters <= 0:
            return False
        if meters == item.light_range:
            return False
        self._commit(replace_item(self.layout, replace(item, light_range=meters)), "light range")
        return True

    def set_wall_distance(self, wall: str, meters: Optional[float]) -> bool:
        item = self._mutable(self._selected_id)
        if item is None or meters is None:
            return False
        pos = position_for_wall_distance(item, self._room, wall, meters)
        if pos is None or pos == (item.x, item.y):
            return False
        self._commit(replace_item(self.layout, item.moved(*pos)), f"{wall} distance")
        return True

    def set_dimensions(self, width: Optional[float] = None, length: Optional[float] = None) -> bool:
        if not self._writable():
            return False
        width = self._room.width if width is None else width
        length = self._room.length if length is None else length
        if not (width > 0 and length > 0):
            logger.debug("room size %r×%r rejected", width, length)
            return False
        room = Room(width, length)
        if room == self._room:
            return False
        self._room = room
        if self.on_dimensions_change:
            self.on_dimensions_change(room)
        self._status(f"Room: {width:.3f} × {length:.3f} m")
        fitted = tuple(it.moved(*clamp_position(room, it, it.x, it.y)) for it in self.layout)
        if fitted != self.layout:
            # the room itself is not undoable, but pulling items back inside is
            self._commit(fitted, "fit to room")
        return True

    def replace_layout(self, layout: Layout) -> bool:
        """Commit a whole layout produced elsewhere (e.g. a suggested arrangement)."""
        if not self._writable():
            return False
        self._commit(tuple(layout), "replace layout")
        self._set_selection(None)
        return True

    # ---------- history ----------
    def undo(self) -> bool:
        if self.busy or self.history.undo() is None:
            return False
        self._after_history_move("undo")
        return True

    def redo(self) -> bool:
        if self.busy or self.history.redo() is None:
            return False
        self._after_history_move("redo")
        return True

    # ---------- internals ----------
    def _writable(self) -> bool:
        if not self.editable or self.busy:
            logger.debug("edit rejected: mode=%s busy=%s", self.mode, self.busy)
            return False
        return True

    def _mutable(self, item_id: Optional[str]) -> Optional[FurnitureItem]:
        """Item whose geometry may change, or None."""
        if not self._writable():
            return None
        item = find_item(self.layout, item_id)
        if item is None:
            return None
        if item.locked:
            logger.debug("item %s is locked", item.id)
            return None
        return item

    def _edit_attrs(self, item_id: str, label: str, **changes) -> bool:
        # name, color and lock stay editable on locked items
        if not self._writable():
            return False
        item = find_item(self.layout, item_id)
        if item is None:
            return False
        updated = replace(item, **changes)
        if updated == item:
            return False
        self._commit(replace_item(self.layout, updated), label)
        return True

    def _commit(self, layout: Layout, label: str):
        self.history.commit(layout)
        self._after_commit(label)

    def _after_commit(self, label: str):
        if self.on_items_change:
            self.on_items_change(self.layout)
        self._status(f"Saved action: {label}")

    def _after_history_move(self, label: str):
        if self._selected_id is not None and self.selected_item is None:
            self._set_selection(None)
        if self.on_items_change:
            self.on_items_change(self.layout)
        cursor, total = self.history_position
        self._status(f"{label.capitalize()}: {cursor + 1}/{total}")

    def _set_selection(self, item_id: Optional[str]):
        if item_id == self._selected_id:
            return
        self._selected_id = item_id
        if self.on_selection_change:
            self.on_selection_change(item_id)

    def _status(self, text: str):
        logger.debug(text)
        if self._status_cb:
            self._status_cb(text)
