from .models import Axis, Category, FurnitureItem, Guide, Layout, Mode, Room, Wall
from .utils import EditorConfig, PIXELS_PER_METER, DEFAULT_ROOM
from .geometry import effective_footprint, key_points, clamp_position
from .snapping import SnapResult, snap_position, snap_to_objects
from .undo import UndoManager
from .controllers import DragController, ResizeController, Gesture
from .measure import WallDistances, wall_distances, position_for_wall_distance
from .reconcile import LayoutEvent, diff_layouts
from .catalog import FURNITURE_PRESETS, Preset
from .factory import ItemFactory
from .state import PlanState

__all__ = [
    "Axis", "Category", "FurnitureItem", "Guide", "Layout", "Mode", "Room", "Wall",
    "EditorConfig", "PIXELS_PER_METER", "DEFAULT_ROOM",
    "effective_footprint", "key_points", "clamp_position",
    "SnapResult", "snap_position", "snap_to_objects",
    "UndoManager", "DragController", "ResizeController", "Gesture",
    "WallDistances", "wall_distances", "position_for_wall_distance",
    "LayoutEvent", "diff_layouts", "FURNITURE_PRESETS", "Preset",
    "ItemFactory", "PlanState",
]
