from __future__ import annotations
from typing import Optional
from PySide6.QtCore import Qt
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QFormLayout, QLineEdit, QLabel, QHBoxLayout, QPushButton,
    QGroupBox, QColorDialog
)

from .models import FurnitureItem
from .scene import PlanScene
from .utils import format_mm, parse_mm, parse_number


class PropertyPanel(QWidget):
    """Room size and selected-item fields. Invalid text reverts to the stored value."""

    def __init__(self, scene: PlanScene, parent=None):
        super().__init__(parent)
        self.scene = scene
        self.state = scene.state
        self._current: Optional[FurnitureItem] = None

        self.setMinimumWidth(280)
        root = QVBoxLayout(self)
        root.setContentsMargins(8, 8, 8, 8)
        root.setSpacing(10)

        # ------- Room -------
        self.grp_room = QGroupBox("Room")
        fr = QFormLayout(self.grp_room)
        fr.setLabelAlignment(Qt.AlignRight)
        self.ed_room_w = QLineEdit(); self.ed_room_l = QLineEdit()
        fr.addRow("Width, mm:", self.ed_room_w)
        fr.addRow("Length, mm:", self.ed_room_l)
        self.ed_room_w.editingFinished.connect(self._apply_room_size)
        self.ed_room_l.editingFinished.connect(self._apply_room_size)
        root.addWidget(self.grp_room)

        # ------- Item -------
        self.lbl_title = QLabel("Nothing selected")
        self.lbl_title.setStyleSheet("font-weight: 600;")
        root.addWidget(self.lbl_title)

        self.frm_item = QWidget()
        fi = QFormLayout(self.frm_item)
        fi.setLabelAlignment(Qt.AlignRight)

        self.ed_name = QLineEdit()
        self.btn_color = QPushButton()
        self.ed_w = QLineEdit(); self.ed_d = QLineEdit()
        self.ed_rot = QLineEdit()
        self.btn_rot = QPushButton("+90°")
        rot_row = QHBoxLayout(); rot_row.addWidget(self.ed_rot, 1); rot_row.addWidget(self.btn_rot)
        self.ed_range = QLineEdit()
        self.lbl_range = QLabel("Light range, m:")
        self.btn_lock = QPushButton(); self.btn_lock.setCheckable(True)
        self.btn_delete = QPushButton("Delete")

        fi.addRow("Name:", self.ed_name)
        fi.addRow("Color:", self.btn_color)
        fi.addRow("Width, mm:", self.ed_w)
        fi.addRow("Depth, mm:", self.ed_d)
        fi.addRow("Rotation, °:", rot_row)
        fi.addRow(self.lbl_range, self.ed_range)
        fi.addRow(self.btn_lock)
        fi.addRow(self.btn_delete)

        self.ed_name.editingFinished.connect(self._apply_name)
        self.btn_color.clicked.connect(self._pick_color)
        self.ed_w.editingFinished.connect(self._apply_size)
        self.ed_d.editingFinished.connect(self._apply_size)
        self.ed_rot.editingFinished.connect(self._apply_rotation)
        self.btn_rot.clicked.connect(lambda *_: self._current and self.state.rotate_item(self._current.id))
        self.ed_range.editingFinished.connect(self._apply_range)
        self.btn_lock.clicked.connect(lambda *_: self._current and self.state.toggle_lock(self._current.id))
        self.btn_delete.clicked.connect(lambda *_: self._current and self.state.delete_item(self._current.id))

        root.addWidget(self.frm_item)
        root.addStretch(1)

        scene.itemsChanged.connect(lambda _: self.refresh())
        scene.selectionChangedTo.connect(lambda _: self.refresh())
        scene.dimensionsChanged.connect(lambda _: self.load_room())
        self.load_room()
        self.refresh()

    # ---------- API ----------
    def refresh(self):
        self.load_item(self.state.selected_item)

    def load_room(self):
        room = self.state.room
        self.ed_room_w.setText(format_mm(room.width))
        self.ed_room_l.setText(format_mm(room.length))
        editable = self.state.editable
        self.ed_room_w.setReadOnly(not editable)
        self.ed_room_l.setReadOnly(not editable)

    def load_item(self, item: Optional[FurnitureItem]):
        self._current = item
        if item is None:
            self.lbl_title.setText("Nothing selected")
            self.frm_item.setVisible(False)
            return
        self.lbl_title.setText(f"Item: {item.name}" + ("  (locked)" if item.locked else ""))
        self.frm_item.setVisible(True)

        self.ed_name.setText(item.name)
        self.btn_color.setText(item.color)
        self.btn_color.setStyleSheet(f"background:{item.color};")
        self.ed_w.setText(format_mm(item.width))
        self.ed_d.setText(format_mm(item.depth))
        self.ed_rot.setText(f"{item.rotation:g}")
        self.lbl_range.setVisible(item.is_light)
        self.ed_range.setVisible(item.is_light)
        if item.is_light:
            self.ed_range.setText(f"{item.light_range or 0:g}")
        self.btn_lock.setChecked(item.locked)
        self.btn_lock.setText("Unlock position" if item.locked else "Lock position")

        editable = self.state.editable
        geometry = editable and not item.locked
        for ed in (self.ed_w, self.ed_d, self.ed_rot, self.ed_range):
            ed.setReadOnly(not geometry)
        self.btn_rot.setEnabled(geometry)
        self.ed_name.setReadOnly(not editable)
        for btn in (self.btn_color, self.btn_lock, self.btn_delete):
            btn.setEnabled(editable)

    # ---------- apply handlers ----------
    def _apply_room_size(self):
        w = parse_mm(self.ed_room_w.text())
        l = parse_mm(self.ed_room_l.text())
        if w and l:
            self.state.set_dimensions(w, l)
        self.load_room()

    def _apply_name(self):
        if self._current is None: return
        if not self.state.rename_item(self._current.id, self.ed_name.text()):
            self.refresh()

    def _pick_color(self):
        if self._current is None: return
        color = QColorDialog.getColor(QColor(self._current.color), self, "Item color")
        if color.isValid():
            self.state.recolor_item(self._current.id, color.name())

    def _apply_size(self):
        if self._current is None: return
        w = parse_mm(self.ed_w.text())
        d = parse_mm(self.ed_d.text())
        if w is None or d is None or not self.state.set_item_size(self._current.id, w, d):
            self.refresh()

    def _apply_rotation(self):
        if self._current is None: return
        deg = parse_number(self.ed_rot.text())
        if not self.state.set_rotation(self._current.id, deg):
            self.refresh()

    def _apply_range(self):
        if self._current is None: return
        if not self.state.set_light_range(self._current.id, parse_number(self.ed_range.text())):
            self.refresh()
