from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

from .models import Category


@dataclass(frozen=True)
class Preset:
    name: str
    category: str = Category.CUSTOM
    width: float = 1.0
    depth: float = 1.0
    color: Optional[str] = None
    light_range: Optional[float] = None


FURNITURE_PRESETS: Tuple[Preset, ...] = (
    Preset("Ceiling light", Category.LIGHT, 0.5, 0.5, "#fde047", light_range=3.0),
    Preset("Downlight", Category.LIGHT, 0.15, 0.15, "#fef08a", light_range=1.5),
    Preset("Floor lamp", Category.LIGHT, 0.4, 0.4, "#fef08a", light_range=2.0),
    Preset("Single bed", Category.BED, 1.0, 2.0, "#93c5fd"),
    Preset("Double bed", Category.BED, 1.5, 2.0, "#60a5fa"),
    Preset("Desk", Category.TABLE, 1.2, 0.6, "#d8b4fe"),
    Preset("Office chair", Category.CHAIR, 0.5, 0.5, "#fca5a5"),
    Preset("Three-seat sofa", Category.SOFA, 2.2, 0.9, "#86efac"),
    Preset("Wardrobe", Category.WARDROBE, 1.5, 0.6, "#fdba74"),
    Preset("Dining table", Category.TABLE, 1.8, 0.9, "#f0abfc"),
    Preset("Door", Category.DOOR, 0.9, 0.15, "#cbd5e1"),
    Preset("Window", Category.WINDOW, 1.2, 0.1, "#bae6fd"),
)

