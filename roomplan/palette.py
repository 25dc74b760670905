from __future__ import annotations
from typing import Iterable
from PySide6.QtCore import Qt, QRectF, QSize, Signal
from PySide6.QtGui import QIcon, QPixmap, QPainter, QPen, QColor
from PySide6.QtWidgets import QWidget, QVBoxLayout, QListWidget, QListWidgetItem, QLabel

from .catalog import FURNITURE_PRESETS, Preset
from .models import Category
from .utils import DEFAULT_ITEM_COLOR

ICON_SIZE = 40


def make_icon(preset: Preset, size: int = ICON_SIZE) -> QIcon:
    """Preset footprint drawn to scale inside a square tile."""
    pm = QPixmap(size, size); pm.fill(Qt.transparent)
    p = QPainter(pm); p.setRenderHint(QPainter.Antialiasing, True)
    k = (size - 6) / max(preset.width, preset.depth, 0.01)
    w, h = max(4.0, preset.width * k), max(4.0, preset.depth * k)
    r = QRectF((size - w) / 2, (size - h) / 2, w, h)
    p.setBrush(QColor(preset.color or DEFAULT_ITEM_COLOR)); p.setPen(QPen(QColor(70, 70, 70), 1))
    if preset.category == Category.LIGHT:
        p.drawEllipse(r)
    else:
        p.drawRoundedRect(r, 3, 3)
    p.end()
    return QIcon(pm)


class PalettePanel(QWidget):
    presetChosen = Signal(object)  # Preset

    def __init__(self, presets: Iterable[Preset] = FURNITURE_PRESETS, parent=None):
        super().__init__(parent)
        lay = QVBoxLayout(self)
        lay.setContentsMargins(8, 8, 8, 8)
        hint = QLabel("Double-click to add to the room")
        hint.setStyleSheet("color:#667085;")
        lay.addWidget(hint)

        self.list = QListWidget()
        self.list.setIconSize(QSize(ICON_SIZE, ICON_SIZE))
        self.list.setSpacing(2)
        for preset in presets:
            li = QListWidgetItem(make_icon(preset), f"{preset.name}\n{preset.width * 1000:.0f} × {preset.depth * 1000:.0f} mm")
            li.setData(Qt.UserRole, preset)
            li.setToolTip(preset.category)
            self.list.addItem(li)
        self.list.itemActivated.connect(self._emit)
        lay.addWidget(self.list, 1)

    def set_enabled(self, enabled: bool):
        self.list.setEnabled(enabled)

    def _emit(self, li: QListWidgetItem):
        preset = li.data(Qt.UserRole)
        if isinstance(preset, Preset):
            self.presetChosen.emit(preset)
