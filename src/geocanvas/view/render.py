"""
Render Adapter
==============
Converts the scene plus the transient interaction state into an ordered list
of backend-neutral draw commands.

Why is this file needed?
------------------------
1. Testability: The output is plain data, so what gets drawn can be checked
   without a display.
2. Decoupling: The canvas widget only knows how to paint four command types
   with QPainter; it never inspects the scene itself.

Coordinates are canvas pixels with y growing downwards; angles are radians
measured the same way (positive = clockwise on screen).
"""
from __future__ import annotations

from dataclasses import dataclass, replace
import math
from typing import Optional, Union

from geocanvas.config import CANVAS, PREVIEW, PreviewStyle
from geocanvas.controller.interaction import Tool, TransientState
from geocanvas.model.geometry_primitives import Angle, Circle, Line, Point, Vector
from geocanvas.model.geometry_utils import angle_between_rays, distance, polar_offset, ray_direction
from geocanvas.model.labels import calculate_best_label_position
from geocanvas.model.state import SceneState

# -------------------------------------------------------------------------------
# Draw commands
# -------------------------------------------------------------------------------


@dataclass(frozen=True)
class StrokeSegment:
    x1: float
    y1: float
    x2: float
    y2: float
    color: str
    width: float
    dash: tuple[float, ...] = ()
    dash_offset: float = 0.0


@dataclass(frozen=True)
class StrokeArc:
    """Arc (or full ring) around (cx, cy) from ``start_angle`` to ``end_angle``."""
    cx: float
    cy: float
    radius: float
    start_angle: float
    end_angle: float
    color: str
    width: float
    dash: tuple[float, ...] = ()
    fill_color: Optional[str] = None


@dataclass(frozen=True)
class FillDisc:
    cx: float
    cy: float
    radius: float
    color: str


@dataclass(frozen=True)
class DrawText:
    x: float
    y: float
    text: str
    color: str
    font_size: int


DrawCommand = Union[StrokeSegment, StrokeArc, FillDisc, DrawText]

FULL_TURN = 2.0 * math.pi

# -------------------------------------------------------------------------------
# Scene entities
# -------------------------------------------------------------------------------


def _dash_for(style_name: str, style: PreviewStyle) -> tuple[float, ...]:
    return tuple(style.dash_patterns.get(style_name, ()))


def point_commands(
    point: Point,
    scene: SceneState,
    hovered: bool,
    canvas_size: tuple[float, float],
    style: PreviewStyle = PREVIEW
) -> list[DrawCommand]:
    radius = point.size * style.hover_scale if hovered else point.size
    color = style.hover_color if hovered else point.color
    commands: list[DrawCommand] = [FillDisc(point.x, point.y, radius, color)]

    if point.show_label:
        x, y = calculate_best_label_position(point, scene, canvas_size)
        commands.append(DrawText(x, y, point.label or str(point.id), style.text_color, style.label_font_size))
    return commands


def line_commands(line: Line, phase: int, style: PreviewStyle = PREVIEW) -> list[DrawCommand]:
    """Stroke of a line. A line flagged ``animated`` gets a second, faster dash layer on top."""
    animated = line.animated
    dash = _dash_for(line.style.value, style)
    commands: list[DrawCommand] = [
        StrokeSegment(
            line.start.x, line.start.y, line.end.x, line.end.y,
            line.color, line.width, dash,
            dash_offset=-float(phase) if animated else 0.0,
        )
    ]
    if animated:
        commands.append(
            StrokeSegment(
                line.start.x, line.start.y, line.end.x, line.end.y,
                style.animation_color, line.width * 0.8, (4.0, 12.0),
                dash_offset=-phase * 1.5,
            )
        )

    if line.show_label:
        mid_x, mid_y = line.midpoint
        commands.append(DrawText(mid_x + 5, mid_y - 5, line.label or str(line.id), style.text_color, style.label_font_size))
    return commands


def angle_commands(angle: Angle, style: PreviewStyle = PREVIEW) -> list[DrawCommand]:
    vertex = angle.vertex
    commands: list[DrawCommand] = [
        StrokeSegment(vertex.x, vertex.y, angle.point1.x, angle.point1.y, angle.color, 2.0),
        StrokeSegment(vertex.x, vertex.y, angle.point2.x, angle.point2.y, angle.color, 2.0),
    ]

    a1, a2 = angle.start_direction, angle.end_direction
    if angle.show_arc:
        commands.append(StrokeArc(vertex.x, vertex.y, angle.radius, min(a1, a2), max(a1, a2), angle.color, 2.0))

    if angle.show_degree:
        x, y = polar_offset(vertex, angle.radius + 10, angle.bisector_direction)
        commands.append(DrawText(x, y, f"{angle.degrees:.1f}°", style.text_color, style.value_font_size))

    if angle.show_label:
        x, y = angle.label_anchor()
        commands.append(DrawText(x, y, angle.label or str(angle.id), style.text_color, style.label_font_size))
    return commands


def circle_commands(circle: Circle, style: PreviewStyle = PREVIEW) -> list[DrawCommand]:
    commands: list[DrawCommand] = [
        StrokeArc(
            circle.center.x, circle.center.y, circle.radius, 0.0, FULL_TURN,
            circle.color, circle.width, _dash_for(circle.style.value, style),
            fill_color=circle.fill_color if circle.fill else None,
        )
    ]
    if circle.show_label:
        commands.append(
            DrawText(
                circle.center.x + circle.radius + 5, circle.center.y,
                circle.label or str(circle.id), style.text_color, style.label_font_size,
            )
        )
    return commands

# -------------------------------------------------------------------------------
# In-progress constructions
# -------------------------------------------------------------------------------


def preview_commands(transient: TransientState, style: PreviewStyle = PREVIEW) -> list[DrawCommand]:
    """Rubber-band feedback for the active tool's temp points."""
    if transient.pointer is None or not transient.temp_points:
        return []

    cursor = Vector(*transient.pointer)
    temp = transient.temp_points

    match transient.tool:
        case Tool.LINE:
            return [_rubber_band(temp[0], cursor, style.line_color, style)]

        case Tool.ANGLE if len(temp) == 1:
            return [_rubber_band(temp[0], cursor, style.angle_color, style)]

        case Tool.ANGLE:
            point1, vertex = temp[0], temp[1]
            a1 = ray_direction(vertex, point1)
            a2 = ray_direction(vertex, cursor)
            radius = style.angle_preview_radius
            text_x, text_y = polar_offset(vertex, radius + 10, (a1 + a2) / 2)
            return [
                StrokeSegment(vertex.x, vertex.y, point1.x, point1.y, style.angle_color, 2.0),
                _rubber_band(vertex, cursor, style.angle_color, style),
                StrokeArc(vertex.x, vertex.y, radius, min(a1, a2), max(a1, a2),
                          style.angle_arc_color, 2.0, style.fine_dash),
                DrawText(text_x, text_y, f"{angle_between_rays(vertex, point1, cursor):.1f}°",
                         style.text_color, style.value_font_size),
            ]

        case Tool.CIRCLE:
            center = temp[0]
            radius = distance(center, cursor)
            return [
                StrokeArc(center.x, center.y, radius, 0.0, FULL_TURN, style.circle_color, 2.0, style.dash),
                StrokeSegment(center.x, center.y, cursor.x, cursor.y, style.circle_color, 1.0, style.fine_dash),
                DrawText((center.x + cursor.x) / 2, (center.y + cursor.y) / 2 - 5, f"r = {radius:.1f}",
                         style.text_color, style.value_font_size),
            ]

    return []


def _rubber_band(origin: Point, cursor: Vector, color: str, style: PreviewStyle) -> StrokeSegment:
    return StrokeSegment(origin.x, origin.y, cursor.x, cursor.y, color, 2.0, style.dash)

# -------------------------------------------------------------------------------
# Entry point
# -------------------------------------------------------------------------------


def build_draw_commands(
    scene: SceneState,
    transient: TransientState,
    canvas_size: tuple[float, float] = (CANVAS.width, CANVAS.height),
    style: PreviewStyle = PREVIEW
) -> list[DrawCommand]:
    """
    Draw commands for one frame.

    Order: circles, lines, angles, points (so points stay on top), then the
    preview of the construction in progress.
    """
    commands: list[DrawCommand] = []

    for circle in scene.circles:
        commands.extend(circle_commands(circle, style))

    for line in scene.lines:
        # animation state is stamped on a per-frame copy, the scene line keeps animated=False
        animated = transient.animation_active and line.id == transient.selected_line_id
        commands.extend(line_commands(replace(line, animated=animated), transient.animation_phase, style))

    for angle in scene.angles:
        commands.extend(angle_commands(angle, style))

    for point in scene.points:
        commands.extend(point_commands(point, scene, point.id == transient.hovered_point_id, canvas_size, style))

    commands.extend(preview_commands(transient, style))
    return commands
