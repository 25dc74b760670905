#!/usr/bin/env python3
# -*- coding: utf-8 -*-
from __future__ import annotations
import logging
import sys
from PySide6.QtCore import Qt, QSettings, QSize
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import (
    QApplication, QMainWindow, QToolBar, QStatusBar, QDockWidget, QStyle
)

from roomplan import PlanState, DEFAULT_ROOM
from roomplan.palette import PalettePanel
from roomplan.properties import PropertyPanel
from roomplan.scene import PlanScene, PlanView, fit_zoom

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, state: PlanState | None = None):
        super().__init__()
        self.setWindowTitle("Room Plan Editor")
        self.resize(1280, 860)
        self.settings = QSettings("roomplan", "editor")

        # 1) State / scene / view
        self.state = state or PlanState(DEFAULT_ROOM, (), status_cb=self._status)
        self.scene = PlanScene(self.state)
        self.scene.show_measurements = self.settings.value("show_measurements", True, type=bool)
        self.view = PlanView(self.scene)
        self.view.setFocusPolicy(Qt.StrongFocus)
        self.setCentralWidget(self.view)

        # 2) Properties
        self.props_panel = PropertyPanel(self.scene, self)
        self.props_dock = QDockWidget("Properties", self)
        self.props_dock.setWidget(self.props_panel)
        self.props_dock.setAllowedAreas(Qt.LeftDockWidgetArea | Qt.RightDockWidgetArea)
        self.props_dock.setMinimumWidth(280)
        self.addDockWidget(Qt.RightDockWidgetArea, self.props_dock)

        # 3) Palette
        self.palette = PalettePanel()
        self.palette_dock = QDockWidget("Furniture", self)
        self.palette_dock.setWidget(self.palette)
        self.palette_dock.setAllowedAreas(Qt.LeftDockWidgetArea | Qt.RightDockWidgetArea)
        self.palette_dock.setMinimumWidth(220)
        self.addDockWidget(Qt.LeftDockWidgetArea, self.palette_dock)
        self.palette.presetChosen.connect(lambda preset: self.state.add_item(preset))

        # 4) Toolbar / status
        self._build_toolbar()
        self.setStatusBar(QStatusBar(self))
        self.scene.itemsChanged.connect(lambda _: self._update_status())
        self.view.scaleChanged.connect(lambda _: self._update_status())

        geometry = self.settings.value("geometry")
        if geometry is not None:
            self.restoreGeometry(geometry)
        self._update_status()

    def _build_toolbar(self):
        tb = QToolBar("Edit", self)
        tb.setMovable(False)
        tb.setIconSize(QSize(18, 18))
        tb.setToolButtonStyle(Qt.ToolButtonTextBesideIcon)
        self.addToolBar(Qt.TopToolBarArea, tb)
        style = self.style()

        self.act_undo = QAction(style.standardIcon(QStyle.SP_ArrowBack), "Undo", self)
        self.act_undo.setShortcut(QKeySequence("Ctrl+Z"))
        self.act_undo.triggered.connect(lambda *_: self.state.undo())

        self.act_redo = QAction(style.standardIcon(QStyle.SP_ArrowForward), "Redo", self)
        self.act_redo.setShortcuts([QKeySequence("Ctrl+Y"), QKeySequence("Ctrl+Shift+Z")])
        self.act_redo.triggered.connect(lambda *_: self.state.redo())

        self.act_viewmode = QAction(style.standardIcon(QStyle.SP_DesktopIcon), "View only", self, checkable=True)
        self.act_viewmode.toggled.connect(self._toggle_viewmode)

        self.act_measure = QAction(style.standardIcon(QStyle.SP_FileDialogDetailedView), "Measurements",
                                   self, checkable=True)
        self.act_measure.setChecked(self.scene.show_measurements)
        self.act_measure.toggled.connect(self._toggle_measurements)

        self.act_fit = QAction(style.standardIcon(QStyle.SP_TitleBarMaxButton), "Fit", self)
        self.act_fit.triggered.connect(lambda *_: fit_zoom(self.view, self.scene))

        for act in (self.act_undo, self.act_redo):
            tb.addAction(act)
        tb.addSeparator()
        for act in (self.act_viewmode, self.act_measure, self.act_fit):
            tb.addAction(act)

    def _toggle_viewmode(self, on: bool):
        self.scene.set_editable(not on)
        self.palette.set_enabled(not on)
        self.props_panel.load_room()
        self.props_panel.refresh()
        self._update_status()

    def _toggle_measurements(self, on: bool):
        self.scene.show_measurements = on
        self.settings.setValue("show_measurements", on)
        self.scene.update()

    def _status(self, text: str):
        self.statusBar().showMessage(text, 3000)

    def _update_status(self):
        cursor, total = self.state.history_position
        self.act_undo.setEnabled(self.state.can_undo())
        self.act_redo.setEnabled(self.state.can_redo())
        room = self.state.room
        self.statusBar().showMessage(
            f"Mode: {'View' if not self.state.editable else 'Edit'} | "
            f"Room: {room.width * 1000:.0f}×{room.length * 1000:.0f} mm | "
            f"History: {cursor + 1}/{total} | "
            f"Zoom: {int(self.view.transform().m11() * 100)}%"
        )

    def closeEvent(self, event):
        self.settings.setValue("geometry", self.saveGeometry())
        super().closeEvent(event)


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    app = QApplication(sys.argv)
    win = MainWindow()
    logger.info("editor started, room %.2f×%.2f m", win.state.room.width, win.state.room.length)
    win.show()
    fit_zoom(win.view, win.scene)
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
