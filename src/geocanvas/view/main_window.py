"""
Main Application Window
=======================
The primary GUI container that holds the tool bar, the canvas and the status
bar.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects tool buttons and the Clear action to the canvas and
   reflects the controller state (prompt, entity counts) after every event.
"""
from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QActionGroup
from PySide6.QtWidgets import QLabel, QMainWindow, QToolBar

from geocanvas.config import VISIBLE_APP_NAME
from geocanvas.controller.interaction import InteractionController, Tool
from geocanvas.view.widgets.canvas import CanvasWidget

TOOL_LABELS = {
    Tool.POINT: "Point",
    Tool.LINE: "Line",
    Tool.ANGLE: "Angle",
    Tool.CIRCLE: "Circle",
}

TOOL_SHORTCUTS = {
    Tool.POINT: "P",
    Tool.LINE: "L",
    Tool.ANGLE: "A",
    Tool.CIRCLE: "C",
}


class MainWindow(QMainWindow):
    def __init__(self, controller: InteractionController) -> None:
        super().__init__()
        self.controller = controller

        self.setWindowTitle(VISIBLE_APP_NAME)

        # --- CENTRAL: Canvas ---
        self.canvas = CanvasWidget(controller, self)
        self.setCentralWidget(self.canvas)

        # --- ACTIONS & TOOL BAR ---
        self._create_actions()
        self._create_toolbar()

        # --- STATUS BAR ---
        self.counts_label = QLabel()
        self.statusBar().addPermanentWidget(self.counts_label)

        # --- SIGNAL CONNECTIONS ---
        self.canvas.scene_changed.connect(self.refresh_status)

        self.refresh_status()
        self.adjustSize()

    def _create_actions(self) -> None:
        self.tool_group = QActionGroup(self)
        self.tool_group.setExclusive(True)
        self.tool_actions: dict[Tool, QAction] = {}

        for tool, text in TOOL_LABELS.items():
            action = QAction(text, self)
            action.setCheckable(True)
            action.setShortcut(TOOL_SHORTCUTS[tool])
            action.setChecked(tool is self.controller.tool)
            action.triggered.connect(lambda _checked=False, t=tool: self.on_tool_selected(t))
            self.tool_group.addAction(action)
            self.tool_actions[tool] = action

        self.act_clear = QAction("Clear", self)
        self.act_clear.setShortcut("Ctrl+N")
        self.act_clear.triggered.connect(self.on_clear)

    def _create_toolbar(self) -> None:
        toolbar = QToolBar("Tools", self)
        toolbar.setMovable(False)
        toolbar.setToolButtonStyle(Qt.ToolButtonTextOnly)
        for action in self.tool_actions.values():
            toolbar.addAction(action)
        toolbar.addSeparator()
        toolbar.addAction(self.act_clear)
        self.addToolBar(Qt.TopToolBarArea, toolbar)

    # ------------------------------------------------------------------
    # Slots
    # ------------------------------------------------------------------

    def on_tool_selected(self, tool: Tool) -> None:
        self.canvas.set_tool(tool)

    def on_clear(self) -> None:
        self.canvas.clear_scene()

    def refresh_status(self) -> None:
        self.statusBar().showMessage(self.controller.status_text())

        counts = self.controller.scene.counts()
        text = (
            f"Points: {counts['points']}  Lines: {counts['lines']}  "
            f"Angles: {counts['angles']}  Circles: {counts['circles']}"
        )
        animation = self.controller.animation
        if animation.active and animation.selected_line_id is not None:
            text += f"  |  Animating line #{animation.selected_line_id}"
        if self.controller.pointer is not None:
            x, y = self.controller.pointer
            text += f"  |  ({x:.0f}, {y:.0f})"
        self.counts_label.setText(text)
