from __future__ import annotations
import logging
from typing import Dict, Optional

from PySide6.QtCore import Qt, QRectF, QPointF, Signal
from PySide6.QtGui import QPainter, QPen, QColor, QFont, QTransform, QWheelEvent
from PySide6.QtWidgets import QGraphicsScene, QGraphicsView, QApplication, QInputDialog

from .geometry import center
from .items import FurnitureGraphic, ResizeHandle
from .measure import wall_distances
from .models import Axis, Layout, Mode, Room, Wall
from .reconcile import CREATED, DELETED, diff_layouts
from .state import PlanState
from .utils import MINOR_GRID, format_mm, parse_mm

logger = logging.getLogger(__name__)

BG_COLOR     = QColor("#f1f5f9")
ROOM_FILL    = QColor("#ffffff")
ROOM_BORDER  = QColor("#111827")
GRID_MINOR   = QColor("#f1f5f9")
GRID_MAJOR   = QColor("#cbd5e1")
GUIDE_COLOR  = QColor("#f43f5e")
MEASURE_LINE = QColor(148, 163, 184, 128)
LABEL_BORDER = QColor("#cbd5e1")
LABEL_TEXT   = QColor("#475569")

MARGIN = 40.0
LABEL_W, LABEL_H = 52.0, 24.0

WALL_TITLES = {
    Wall.TOP: "Distance to top wall",
    Wall.BOTTOM: "Distance to bottom wall",
    Wall.LEFT: "Distance to left wall",
    Wall.RIGHT: "Distance to right wall",
}


class PlanScene(QGraphicsScene):
    """Renders a PlanState and routes pointer gestures into it."""
    itemsChanged = Signal(object)        # Layout
    dimensionsChanged = Signal(object)   # Room
    selectionChangedTo = Signal(object)  # id | None

    def __init__(self, state: PlanState, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.state = state
        self.ppm = state.config.pixels_per_meter
        self.show_measurements = True
        self.setItemIndexMethod(QGraphicsScene.NoIndex)
        self._graphics: Dict[str, FurnitureGraphic] = {}
        self._shown: Layout = ()
        self._press_pos: Optional[QPointF] = None
        self._resize_frame: Optional[QTransform] = None
        self._measure_labels: Dict[str, QRectF] = {}

        state.on_items_change = self._on_items_change
        state.on_dimensions_change = self._on_dimensions_change
        state.on_selection_change = self._on_selection_change
        self._update_scene_rect()
        self.sync()

    # ---- state -> graphics ----
    def sync(self):
        self._apply_layout(self.state.layout)

    def _apply_layout(self, layout: Layout):
        sel = self.state.selected_id
        for ev in diff_layouts(self._shown, layout):
            if ev.kind == DELETED:
                g = self._graphics.pop(ev.item_id)
                self.removeItem(g)
            elif ev.kind == CREATED:
                g = FurnitureGraphic(ev.item, self.ppm)
                g.editable = self.state.editable
                self.addItem(g)
                self._graphics[ev.item_id] = g
            g = self._graphics.get(ev.item_id)
            if g is not None:
                g.set_item(ev.item, ev.item_id == sel)
        for z, it in enumerate(layout):
            self._graphics[it.id].setZValue(z)
        self._shown = layout
        self.update()

    def _show_staged(self):
        staged = self.state.staged_item
        if staged is not None and staged.id in self._graphics:
            self._graphics[staged.id].set_item(staged)
        self.update()

    def _on_items_change(self, layout: Layout):
        self._apply_layout(layout)
        self.itemsChanged.emit(layout)

    def _on_dimensions_change(self, room: Room):
        self._update_scene_rect()
        self.update()
        self.dimensionsChanged.emit(room)

    def _on_selection_change(self, item_id: Optional[str]):
        for key, g in self._graphics.items():
            g.set_selected(key == item_id)
        self.update()
        self.selectionChangedTo.emit(item_id)

    def set_editable(self, editable: bool):
        """VIEW mode: gestures only select, handles are hidden."""
        self.state.set_mode(Mode.EDIT if editable else Mode.VIEW)
        for g in self._graphics.values():
            g.editable = editable
            g.set_item(g.item)
        self.update()

    def _update_scene_rect(self):
        room = self.state.room
        self.setSceneRect(-MARGIN, -MARGIN,
                          room.width * self.ppm + 2 * MARGIN, room.length * self.ppm + 2 * MARGIN)

    def room_rect(self) -> QRectF:
        room = self.state.room
        return QRectF(0, 0, room.width * self.ppm, room.length * self.ppm)

    # ---- painting ----
    def drawBackground(self, painter: QPainter, rect: QRectF):
        painter.fillRect(rect, BG_COLOR)
        room = self.room_rect()
        painter.fillRect(room, ROOM_FILL)
        step = MINOR_GRID * self.ppm
        per_meter = round(1.0 / MINOR_GRID)
        i = 0; x = 0.0
        while x <= room.right() + 0.5:
            painter.setPen(QPen(GRID_MAJOR if i % per_meter == 0 else GRID_MINOR, 1))
            painter.drawLine(QPointF(x, 0), QPointF(x, room.bottom()))
            x += step; i += 1
        j = 0; y = 0.0
        while y <= room.bottom() + 0.5:
            painter.setPen(QPen(GRID_MAJOR if j % per_meter == 0 else GRID_MINOR, 1))
            painter.drawLine(QPointF(0, y), QPointF(room.right(), y))
            y += step; j += 1
        painter.setPen(QPen(ROOM_BORDER, 2)); painter.setBrush(Qt.NoBrush); painter.drawRect(room)
        self._draw_room_size(painter, room)

    def _draw_room_size(self, painter: QPainter, room: QRectF):
        painter.setPen(LABEL_TEXT)
        painter.setFont(QFont("monospace", 8))
        r = self.state.room
        painter.drawText(QRectF(room.left(), -MARGIN, room.width(), MARGIN),
                         Qt.AlignCenter, f"{format_mm(r.width)}mm")
        painter.save()
        painter.translate(-MARGIN / 2, room.center().y())
        painter.rotate(-90)
        painter.drawText(QRectF(-room.height() / 2, -MARGIN / 2, room.height(), MARGIN),
                         Qt.AlignCenter, f"{format_mm(r.length)}mm")
        painter.restore()

    def drawForeground(self, painter: QPainter, rect: QRectF):
        painter.setRenderHint(QPainter.Antialiasing, True)
        pen = QPen(GUIDE_COLOR, 1, Qt.DashLine)
        painter.setPen(pen)
        for g in self.state.guides:
            p = g.position * self.ppm
            if g.axis == Axis.X:
                painter.drawLine(QPointF(p, g.start * self.ppm), QPointF(p, g.end * self.ppm))
            else:
                painter.drawLine(QPointF(g.start * self.ppm, p), QPointF(g.end * self.ppm, p))
        self._draw_measurements(painter)

    def _draw_measurements(self, painter: QPainter):
        self._measure_labels.clear()
        if not self.show_measurements:
            return
        item = self.state.staged_item or self.state.selected_item
        if item is None:
            return
        dist = wall_distances(item, self.state.room).as_dict()
        cx, cy = (v * self.ppm for v in center(item))
        room = self.room_rect()
        ends = {
            Wall.TOP: QPointF(cx, 0), Wall.BOTTOM: QPointF(cx, room.bottom()),
            Wall.LEFT: QPointF(0, cy), Wall.RIGHT: QPointF(room.right(), cy),
        }
        painter.setFont(QFont("monospace", 8, QFont.Bold))
        for wall, end in ends.items():
            painter.setPen(QPen(MEASURE_LINE, 1, Qt.DashLine))
            painter.drawLine(QPointF(cx, cy), end)
            mid = QPointF((cx + end.x()) / 2, (cy + end.y()) / 2)
            label = QRectF(mid.x() - LABEL_W / 2, mid.y() - LABEL_H / 2, LABEL_W, LABEL_H)
            painter.setPen(QPen(LABEL_BORDER, 1))
            painter.setBrush(QColor("#ffffff"))
            painter.drawRoundedRect(label, 6, 6)
            painter.setPen(LABEL_TEXT)
            painter.drawText(label, Qt.AlignCenter, format_mm(dist[wall]))
            self._measure_labels[wall] = label

    # ---- gestures ----
    def _hit(self, scene_pos: QPointF):
        for it in self.items(scene_pos):
            if isinstance(it, (ResizeHandle, FurnitureGraphic)):
                return it
        return None

    def _label_at(self, scene_pos: QPointF) -> Optional[str]:
        for wall, r in self._measure_labels.items():
            if r.contains(scene_pos):
                return wall
        return None

    def mousePressEvent(self, event):
        if event.button() != Qt.LeftButton:
            super().mousePressEvent(event); return
        pos = event.scenePos()
        if self._label_at(pos):
            event.accept(); return
        hit = self._hit(pos)
        if isinstance(hit, ResizeHandle):
            g = hit.owner
            if self.state.begin_resize(g.item_id):
                self._resize_frame = g.sceneTransform().inverted()[0]
        elif isinstance(hit, FurnitureGraphic):
            if self.state.begin_drag(hit.item_id) is not None:
                self._press_pos = pos
        else:
            self.state.select(None)
        event.accept()

    def mouseMoveEvent(self, event):
        pos = event.scenePos()
        if self.state.drag.active and self._press_pos is not None:
            d = pos - self._press_pos
            if self.state.drag_to(d.x(), d.y()) is not None:
                self._show_staged()
        elif self.state.resize.active and self._resize_frame is not None:
            local = self._resize_frame.map(pos)
            if self.state.resize_to(local.x(), local.y()) is not None:
                self._show_staged()
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.LeftButton:
            if self.state.drag.active:
                committed = self.state.end_drag()
                self._press_pos = None
                if not committed:
                    self._restore()
            elif self.state.resize.active:
                committed = self.state.end_resize()
                self._resize_frame = None
                if not committed:
                    self._restore()
        super().mouseReleaseEvent(event)

    def _restore(self):
        # nothing was committed; drop the staged look
        for it in self.state.layout:
            g = self._graphics.get(it.id)
            if g is not None and g.item != it:
                g.set_item(it)
        self.update()

    def mouseDoubleClickEvent(self, event):
        wall = self._label_at(event.scenePos())
        if wall is None:
            super().mouseDoubleClickEvent(event); return
        event.accept()
        self.edit_wall_distance(wall)

    def edit_wall_distance(self, wall: str):
        item = self.state.selected_item
        if item is None or item.locked:
            return
        views = self.views()
        parent = views[0] if views else None
        current = self.state.wall_distances().as_dict()[wall]
        text, ok = QInputDialog.getText(parent, WALL_TITLES[wall], "Value, mm:", text=format_mm(current))
        if not ok:
            return
        meters = parse_mm(text)
        if meters is None:
            logger.debug("ignored wall distance input %r", text)
            return
        self.state.set_wall_distance(wall, meters)


ARROWS = {
    Qt.Key_Left: (-1, 0), Qt.Key_Right: (1, 0),
    Qt.Key_Up: (0, -1), Qt.Key_Down: (0, 1),
}


class PlanView(QGraphicsView):
    scaleChanged = Signal(float)

    def __init__(self, scene: PlanScene):
        super().__init__(scene)
        self.setRenderHint(QPainter.Antialiasing, True)
        self.setViewportUpdateMode(QGraphicsView.FullViewportUpdate)
        self.setTransformationAnchor(QGraphicsView.AnchorUnderMouse)
        self.setResizeAnchor(QGraphicsView.AnchorUnderMouse)
        self.setMouseTracking(True)
        self._space_down = False

    def wheelEvent(self, event: QWheelEvent):
        if QApplication.keyboardModifiers() & Qt.ControlModifier:
            angle = event.angleDelta().y()
            factor = 1.15 if angle > 0 else 1.0 / 1.15
            self.scale(factor, factor)
            self.scaleChanged.emit(self.transform().m11())
            event.accept()
            return
        super().wheelEvent(event)

    def keyPressEvent(self, event):
        # nudges and delete commit directly, outside any gesture
        state = self.scene().state
        if event.key() in ARROWS:
            dx, dy = ARROWS[event.key()]
            state.nudge(dx, dy, fast=bool(event.modifiers() & Qt.ShiftModifier))
            event.accept()
            return
        if event.key() in (Qt.Key_Delete, Qt.Key_Backspace):
            state.delete_item()
            event.accept()
            return
        if event.key() == Qt.Key_Space and not event.isAutoRepeat() and not self._space_down:
            self._space_down = True
            self.setInteractive(False)
            self.setDragMode(QGraphicsView.ScrollHandDrag)
            event.accept()
            return
        super().keyPressEvent(event)

    def keyReleaseEvent(self, event):
        if event.key() == Qt.Key_Space and not event.isAutoRepeat() and self._space_down:
            self._space_down = False
            self.setDragMode(QGraphicsView.NoDrag)
            self.setInteractive(True)
            event.accept()
            return
        super().keyReleaseEvent(event)


def fit_zoom(view: PlanView, scene: PlanScene):
    view.fitInView(scene.sceneRect(), Qt.KeepAspectRatio)
    view.scaleChanged.emit(view.transform().m11())
