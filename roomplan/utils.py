from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Optional

from .models import Room

# ===== Scale / grid =====
PIXELS_PER_METER = 80.0
GRID_STEP = 0.05          # m
MINOR_GRID = 0.5          # m, canvas lines
SNAP_THRESHOLD_PX = 10.0
EPS = 1e-9

# ===== Editing =====
MIN_ITEM_SIZE = 0.1       # m
NUDGE_STEP = 0.01         # m
NUDGE_STEP_FAST = 0.1     # m
ROTATION_STEP = 90.0

DEFAULT_ROOM = Room(4.5, 5.0)
DEFAULT_ITEM_COLOR = "#cbd5e1"


@dataclass(frozen=True)
class EditorConfig:
    pixels_per_meter: float = PIXELS_PER_METER
    grid_step: float = GRID_STEP
    snap_threshold_px: float = SNAP_THRESHOLD_PX
    min_item_size: float = MIN_ITEM_SIZE
    nudge_step: float = NUDGE_STEP
    nudge_step_fast: float = NUDGE_STEP_FAST

    @property
    def snap_threshold(self) -> float:
        return self.snap_threshold_px / self.pixels_per_meter

    def to_meters(self, px: float) -> float:
        return px / self.pixels_per_meter


def snap(v: float, step: float) -> float:
    # 1.65 rather than 1.6500000000000001, so grid values compare equal
    return round(round(v / step) * step, 9)


def clamp(v: float, lo: float, hi: float) -> float:
    # lo wins when the range is empty
    return max(lo, min(v, hi))


def parse_number(text) -> Optional[float]:
    """Parse a non-negative finite number from user input, None if invalid."""
    if text is None:
        return None
    if isinstance(text, (int, float)):
        value = float(text)
    else:
        text = str(text).strip().replace(",", ".")
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    if not math.isfinite(value) or value < 0:
        return None
    return value


def parse_mm(text) -> Optional[float]:
    """Millimeter input -> meters."""
    value = parse_number(text)
    return None if value is None else value / 1000.0


def format_mm(meters: float) -> str:
    return f"{meters * 1000:.0f}"
