"""
Drawing Canvas
Hosts the interaction controller inside a QWidget and paints the render
adapter's commands with QPainter.
"""
from __future__ import annotations

import logging
import math
import re
from typing import Optional, Union

from PySide6.QtCore import Qt, QPointF, QRectF, QTimer, Signal
from PySide6.QtGui import QBrush, QColor, QFont, QMouseEvent, QPainter, QPaintEvent, QPen
from PySide6.QtWidgets import QWidget

from geocanvas.config import ANIMATION, CANVAS
from geocanvas.controller.interaction import InteractionController, Tool
from geocanvas.view.render import (
    DrawCommand, DrawText, FillDisc, FULL_TURN, StrokeArc, StrokeSegment, build_draw_commands
)

logger = logging.getLogger(__name__)

_RGBA_RE = re.compile(r"rgba?\(\s*([\d.]+)\s*,\s*([\d.]+)\s*,\s*([\d.]+)\s*(?:,\s*([\d.]+)\s*)?\)")


def to_qcolor(spec: str) -> QColor:
    """QColor from '#rrggbb', an SVG name or a CSS 'rgba(r, g, b, a)' string."""
    match = _RGBA_RE.fullmatch(spec.strip())
    if match:
        r, g, b, a = match.groups()
        color = QColor(int(float(r)), int(float(g)), int(float(b)))
        color.setAlphaF(float(a) if a is not None else 1.0)
        return color
    return QColor(spec)


class CanvasWidget(QWidget):
    """
    Forwards Qt mouse events to the controller as normalized core events:
      - mouse move -> pointer_move(x, y),
      - left press -> pointer_down(),
      - left release -> pointer_up() followed by click(x, y),
      - leave -> pointer_leave().

    A frame timer drives ``tick()`` while a line is animating.
    """
    scene_changed = Signal()

    def __init__(self, controller: InteractionController, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent=parent)
        self.controller = controller

        self.setMouseTracking(True)
        self.setMinimumSize(CANVAS.width, CANVAS.height)
        self.setCursor(Qt.CrossCursor)

        # init frame clock
        self._frame_timer = QTimer(self)
        self._frame_timer.setInterval(ANIMATION.frame_interval_ms)
        self._frame_timer.timeout.connect(self._on_frame)

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def set_tool(self, tool: Union[str, Tool]) -> None:
        self.controller.tool_change(tool)
        self._after_event()

    def clear_scene(self) -> None:
        self.controller.clear()
        self._after_event()

    # ------------------------------------------------------------------------------
    # Qt events
    # ------------------------------------------------------------------------------

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        pos = event.position()
        self.controller.pointer_move(pos.x(), pos.y())
        self._after_event()
        super().mouseMoveEvent(event)

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.LeftButton:
            self.controller.pointer_down()
            self._after_event()
        super().mousePressEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.LeftButton:
            pos = event.position()
            self.controller.pointer_up()
            if self.rect().contains(pos.toPoint()):
                self.controller.click(pos.x(), pos.y())
            self._after_event()
        super().mouseReleaseEvent(event)

    def leaveEvent(self, event) -> None:
        self.controller.pointer_leave()
        self._after_event()
        super().leaveEvent(event)

    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.Antialiasing)
            painter.fillRect(self.rect(), to_qcolor(CANVAS.background))

            commands = build_draw_commands(
                self.controller.scene,
                self.controller.snapshot(),
                canvas_size=(self.width(), self.height()),
            )
            for command in commands:
                self._paint_command(painter, command)
        finally:
            painter.end()

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _after_event(self) -> None:
        self._sync_frame_timer()
        self.update()
        self.scene_changed.emit()

    def _sync_frame_timer(self) -> None:
        """Run the frame clock only while something animates."""
        active = self.controller.animation.active
        if active and not self._frame_timer.isActive():
            self._frame_timer.start()
        elif not active and self._frame_timer.isActive():
            self._frame_timer.stop()

    def _on_frame(self) -> None:
        if not self.controller.animation.active:
            self._frame_timer.stop()
            return
        self.controller.tick()
        self.update()

    # ---- QPainter backend ----

    @staticmethod
    def _make_pen(color: str, width: float, dash: tuple[float, ...] = (), dash_offset: float = 0.0) -> QPen:
        pen = QPen(to_qcolor(color))
        pen.setWidthF(width)
        if dash:
            # Qt dash patterns are in units of the pen width
            w = max(width, 1.0)
            pen.setDashPattern([d / w for d in dash])
            pen.setDashOffset(dash_offset / w)
        return pen

    def _paint_command(self, painter: QPainter, command: DrawCommand) -> None:
        match command:
            case StrokeSegment():
                painter.setPen(self._make_pen(command.color, command.width, command.dash, command.dash_offset))
                painter.drawLine(QPointF(command.x1, command.y1), QPointF(command.x2, command.y2))

            case StrokeArc():
                r = command.radius
                rect = QRectF(command.cx - r, command.cy - r, 2 * r, 2 * r)
                painter.setPen(self._make_pen(command.color, command.width, command.dash))
                full = math.isclose(command.end_angle - command.start_angle, FULL_TURN)
                if full:
                    brush = QBrush(to_qcolor(command.fill_color)) if command.fill_color else Qt.NoBrush
                    painter.setBrush(brush)
                    painter.drawEllipse(rect)
                    painter.setBrush(Qt.NoBrush)
                else:
                    # screen angles run clockwise, Qt arcs counter-clockwise in 1/16 degree
                    start = -math.degrees(command.start_angle) * 16
                    span = -math.degrees(command.end_angle - command.start_angle) * 16
                    painter.drawArc(rect, int(round(start)), int(round(span)))

            case FillDisc():
                painter.setPen(Qt.NoPen)
                painter.setBrush(QBrush(to_qcolor(command.color)))
                painter.drawEllipse(QPointF(command.cx, command.cy), command.radius, command.radius)
                painter.setBrush(Qt.NoBrush)

            case DrawText():
                font = QFont("Arial")
                font.setPixelSize(command.font_size)
                painter.setFont(font)
                painter.setPen(to_qcolor(command.color))
                painter.drawText(QPointF(command.x, command.y), command.text)

            case _:
                logger.warning("Unknown draw command %r.", command)
