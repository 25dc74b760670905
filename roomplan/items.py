from __future__ import annotations
from typing import Optional
from PySide6.QtCore import Qt, QRectF, QPointF
from PySide6.QtGui import QBrush, QColor, QPainter, QPen, QFont
from PySide6.QtWidgets import QGraphicsRectItem, QGraphicsItem

from .geometry import effective_footprint
from .models import Category, FurnitureItem
from .utils import PIXELS_PER_METER

BORDER        = QColor("#94a3b8")
BORDER_LOCKED = QColor("#cbd5e1")
BORDER_SEL    = QColor("#2563eb")
TEXT_COLOR    = QColor("#1e293b")
LIGHT_DECO    = QColor(0, 0, 0, 76)
RANGE_FILL    = QColor(253, 224, 71, 38)
RANGE_BORDER  = QColor(234, 179, 8, 128)

SMALL_LIGHT = 0.3   # m, no label below this width


class ResizeHandle(QGraphicsRectItem):
    """Bottom-right grip; the scene drives the resize gesture, the handle only marks the spot."""
    SIZE = 12.0

    def __init__(self, owner: "FurnitureGraphic"):
        super().__init__(-self.SIZE / 2, -self.SIZE / 2, self.SIZE, self.SIZE, owner)
        self.owner = owner
        self.setZValue(1000)
        self.setBrush(BORDER_SEL)
        self.setPen(QPen(QColor(255, 255, 255), 2))
        self.setCursor(Qt.SizeFDiagCursor)
        self.setAcceptedMouseButtons(Qt.NoButton)

    def update_pos(self, cx: float, cy: float):
        self.setPos(cx, cy)

    def paint(self, painter: QPainter, option, widget=None):
        painter.setRenderHint(QPainter.Antialiasing, True)
        painter.setPen(self.pen())
        painter.setBrush(self.brush())
        painter.drawEllipse(self.rect())


class FurnitureGraphic(QGraphicsRectItem):
    """View of one committed (or staged) FurnitureItem, in scene pixels."""

    def __init__(self, item: FurnitureItem, ppm: float = PIXELS_PER_METER):
        super().__init__()
        self.ppm = ppm
        self.item: FurnitureItem = item
        self.selected = False
        self.editable = True
        self.setAcceptHoverEvents(True)
        self.setAcceptedMouseButtons(Qt.NoButton)   # gestures are routed by the scene
        self.setFlag(QGraphicsItem.ItemIsSelectable, False)
        self.setFlag(QGraphicsItem.ItemIsMovable, False)
        self.handle = ResizeHandle(self)
        self.set_item(item)

    @property
    def item_id(self) -> str:
        return self.item.id

    def set_item(self, item: FurnitureItem, selected: Optional[bool] = None):
        self.prepareGeometryChange()
        self.item = item
        if selected is not None:
            self.selected = selected
        w, d = item.width * self.ppm, item.depth * self.ppm
        super().setRect(QRectF(0, 0, w, d))
        # rotate around the center so the rotated box starts at (x, y)
        ew, ed = effective_footprint(item)
        self.setTransformOriginPoint(w / 2, d / 2)
        self.setRotation(item.rotation)
        self.setPos(QPointF(item.x * self.ppm + (ew * self.ppm - w) / 2,
                            item.y * self.ppm + (ed * self.ppm - d) / 2))
        self.handle.update_pos(w, d)
        self.handle.setVisible(self.selected and self.editable and not item.locked)
        self.setCursor(Qt.ForbiddenCursor if item.locked else Qt.SizeAllCursor)
        self.update_tooltip()
        self.update()

    def set_selected(self, selected: bool):
        if selected != self.selected:
            self.set_item(self.item, selected)

    def update_tooltip(self):
        it = self.item
        self.setToolTip(
            f"{it.name}\n"
            f"Size: {it.width * 1000:.0f} × {it.depth * 1000:.0f} mm\n"
            f"Rotation: {it.rotation:g}°" + ("\nLocked" if it.locked else "")
        )

    def _range_radius(self) -> float:
        if self.selected and self.item.is_light and self.item.light_range:
            return self.item.light_range * self.ppm
        return 0.0

    def boundingRect(self) -> QRectF:
        r = self.rect().adjusted(-2, -2, 2, 2)
        radius = self._range_radius()
        if radius:
            c = self.rect().center()
            r = r.united(QRectF(c.x() - radius, c.y() - radius, 2 * radius, 2 * radius))
        return r

    def paint(self, painter: QPainter, option, widget=None):
        painter.setRenderHint(QPainter.Antialiasing, True)
        it = self.item
        r = self.rect()

        radius = self._range_radius()
        if radius:
            painter.setPen(QPen(RANGE_BORDER, 1, Qt.DashLine))
            painter.setBrush(QBrush(RANGE_FILL))
            painter.drawEllipse(r.center(), radius, radius)

        if self.selected:
            pen = QPen(BORDER_SEL, 2)
        else:
            pen = QPen(BORDER_LOCKED if it.locked else BORDER, 1)
        if it.category == Category.DOOR or it.locked:
            pen.setStyle(Qt.DashLine)
        fill = QColor(it.color)
        fill.setAlphaF(0.8)
        painter.setPen(pen)
        painter.setBrush(QBrush(fill))
        if it.is_light:
            painter.drawEllipse(r)
            self._paint_light_deco(painter, r)
        else:
            painter.drawRoundedRect(r, 4, 4)

        if not (it.is_light and it.width < SMALL_LIGHT):
            painter.setPen(TEXT_COLOR)
            painter.setFont(QFont("", 8))
            painter.drawText(r, Qt.AlignCenter, it.name)

        if it.locked:
            painter.setFont(QFont("", 9))
            painter.drawText(r.adjusted(0, 2, -2, 0), Qt.AlignRight | Qt.AlignTop, "🔒")

    def _paint_light_deco(self, painter: QPainter, r: QRectF):
        painter.setPen(QPen(LIGHT_DECO, 1))
        painter.setBrush(Qt.NoBrush)
        c = r.center()
        if self.item.width < SMALL_LIGHT:
            # downlight: concentric ring
            painter.drawEllipse(c, r.width() / 4, r.height() / 4)
        else:
            painter.drawLine(QPointF(r.left(), c.y()), QPointF(r.right(), c.y()))
            painter.drawLine(QPointF(c.x(), r.top()), QPointF(c.x(), r.bottom()))
