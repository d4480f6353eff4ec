"""
Interaction State Machine
=========================
Turns normalized input events into scene edits.

Why is this file needed?
------------------------
1. Sequencing: Lines, angles and circles are built from several clicks. The
   clicks collected so far live here as temp points until the construction
   completes or the tool changes.
2. Dragging & hover: Pointer movement either hovers points or drags the
   hovered one, depending on the drag state.
3. Decoupling: It knows nothing about Qt. The canvas widget forwards
   ``pointer_move``, ``pointer_down``, ``pointer_up``, ``pointer_leave``,
   ``click``, ``tool_change``, ``clear`` and ``tick`` and repaints afterwards.

Classes:
    Tool: The drawing tools.
    DragState: Drag lifecycle of a single point.
    TransientState: Immutable snapshot handed to the render adapter.
    InteractionController: The state machine.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from typing import Optional, Union

from geocanvas.config import HIT_TEST, HitTestConfig
from geocanvas.controller.animation import LineAnimation
from geocanvas.model.geometry_primitives import Point, Vector
from geocanvas.model.hit_testing import find_existing_point, find_line_near_point
from geocanvas.model.state import SceneState

logger = logging.getLogger(__name__)


class Tool(str, Enum):
    POINT = "point"
    LINE = "line"
    ANGLE = "angle"
    CIRCLE = "circle"

    @classmethod
    def from_name(cls, name: Union[str, Tool]) -> Tool:
        if isinstance(name, Tool):
            return name
        try:
            return cls(name.lower())
        except ValueError:
            raise ValueError(f"Unknown tool '{name}'.") from None


@dataclass
class DragState:
    active: bool = False
    point_id: Optional[int] = None
    moved: bool = False


@dataclass(frozen=True)
class TransientState:
    """Everything the render adapter needs besides the scene itself."""
    tool: Tool = Tool.POINT
    temp_points: tuple[Point, ...] = ()
    hovered_point_id: Optional[int] = None
    dragging: bool = False
    dragged_point_id: Optional[int] = None
    pointer: Optional[tuple[float, float]] = None
    selected_line_id: Optional[int] = None
    animation_active: bool = False
    animation_phase: int = 0


class InteractionController:
    def __init__(
        self,
        scene: SceneState,
        animation: Optional[LineAnimation] = None,
        hit_test: HitTestConfig = HIT_TEST
    ) -> None:
        self.scene = scene
        self.animation = animation or LineAnimation()
        self.hit_test = hit_test

        self.tool: Tool = Tool.POINT
        self.temp_points: list[Point] = []
        self.hovered_point_id: Optional[int] = None
        self.pointer: Optional[tuple[float, float]] = None
        self.drag = DragState()

        # set when a drag that moved a point ends, eats the release click
        self._suppress_click: bool = False

    # ------------------------------------------------------------------
    # Pointer events
    # ------------------------------------------------------------------

    def pointer_move(self, x: float, y: float) -> None:
        self.pointer = (x, y)

        if self.drag.active and self.drag.point_id is not None:
            if self.scene.move_point(self.drag.point_id, x, y):
                self.drag.moved = True
            else:
                self._end_drag()
            return

        hovered = self._find_point(x, y)
        self.hovered_point_id = hovered.id if hovered else None

    def pointer_down(self) -> None:
        self._suppress_click = False
        if self.hovered_point_id is None:
            return

        point = self.scene.get_point(self.hovered_point_id)
        if point is None or not point.movable:
            return

        self.drag = DragState(active=True, point_id=point.id)
        logger.debug("Started dragging point %d.", point.id)

    def pointer_up(self) -> None:
        if self.drag.active:
            self._suppress_click = self.drag.moved
            self._end_drag()

    def pointer_leave(self) -> None:
        self.pointer = None
        self.hovered_point_id = None
        self._suppress_click = False
        if self.drag.active:
            self._end_drag()

    def click(self, x: float, y: float) -> None:
        """Run the active tool's step for a click at (x, y)."""
        if self.drag.active:
            return
        if self._suppress_click:
            self._suppress_click = False
            return

        existing = self._find_point(x, y)

        if self.tool is Tool.POINT and existing is None:
            line = find_line_near_point(x, y, self.scene.lines, self.hit_test.line_tolerance)
            if line is not None:
                self.animation.toggle(line.id)
                return

        match self.tool:
            case Tool.POINT:
                if existing is None:
                    self.scene.add_point(x, y)
            case Tool.LINE:
                self._line_step(x, y, existing)
            case Tool.ANGLE:
                self._angle_step(x, y, existing)
            case Tool.CIRCLE:
                self._circle_step(x, y, existing)

    # ------------------------------------------------------------------
    # Discrete commands
    # ------------------------------------------------------------------

    def tool_change(self, tool: Union[str, Tool]) -> None:
        """Switch tools. Any half-built construction is discarded."""
        self.tool = Tool.from_name(tool)
        self.temp_points = []
        logger.info("Tool changed to %s.", self.tool.value)

    def clear(self) -> None:
        self.scene.clear()
        self.temp_points = []
        self.hovered_point_id = None
        self.drag = DragState()
        self._suppress_click = False
        self.animation.reset()

    def tick(self) -> None:
        """One frame of the animation clock."""
        self.animation.tick()

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def is_dragging(self) -> bool:
        return self.drag.active

    def snapshot(self) -> TransientState:
        return TransientState(
            tool=self.tool,
            temp_points=tuple(self.temp_points),
            hovered_point_id=self.hovered_point_id,
            dragging=self.drag.active,
            dragged_point_id=self.drag.point_id,
            pointer=self.pointer,
            selected_line_id=self.animation.selected_line_id,
            animation_active=self.animation.active,
            animation_phase=self.animation.phase,
        )

    def status_text(self) -> str:
        """Prompt for the next step of the active tool."""
        if self.drag.active and self.drag.point_id is not None:
            point = self.scene.get_point(self.drag.point_id)
            return f"Dragging point {point.label if point else self.drag.point_id}"

        labels = [p.label for p in self.temp_points]
        match self.tool, len(labels):
            case Tool.POINT, _:
                return "Point: click the canvas to add a point, or click a line to toggle its animation"
            case Tool.LINE, 0:
                return "Line: click an existing point or the canvas for the start point"
            case Tool.LINE, _:
                return f"Line: from point {labels[0]}, click an existing point or the canvas for the end point"
            case Tool.ANGLE, 0:
                return "Angle: click an existing point or the canvas for the first point"
            case Tool.ANGLE, 1:
                return f"Angle: from point {labels[0]}, click an existing point or the canvas for the vertex"
            case Tool.ANGLE, _:
                return (
                    f"Angle: from point {labels[0]} through vertex {labels[1]}, "
                    "click an existing point or the canvas for the third point"
                )
            case Tool.CIRCLE, 0:
                return "Circle: click an existing point or the canvas for the center"
            case _:
                return f"Circle: center {labels[0]}, click to set the radius"

    # ------------------------------------------------------------------
    # Tool steps
    # ------------------------------------------------------------------

    def _line_step(self, x: float, y: float, existing: Optional[Point]) -> None:
        if not self.temp_points:
            self.temp_points = [existing or self.scene.add_point(x, y)]
            return

        start = self.temp_points[0]
        if existing is not None and existing.id == start.id:
            return

        end = existing or self.scene.add_point(x, y)
        self.scene.add_line(start, end)
        self.temp_points = []

    def _angle_step(self, x: float, y: float, existing: Optional[Point]) -> None:
        if not self.temp_points:
            self.temp_points = [existing or self.scene.add_point(x, y)]
            return

        point1 = self.temp_points[0]
        if len(self.temp_points) == 1:
            if existing is not None and existing.id == point1.id:
                return
            self.temp_points = [point1, existing or self.scene.add_point(x, y)]
            return

        vertex = self.temp_points[1]
        if existing is not None and existing.id in (point1.id, vertex.id):
            return

        point2 = existing or self.scene.add_point(x, y)
        line1 = self.scene.add_line(vertex, point1)
        line2 = self.scene.add_line(vertex, point2)
        if line1 is not None and line2 is not None:
            self.scene.add_angle(vertex, line1, line2)
        self.temp_points = []

    def _circle_step(self, x: float, y: float, existing: Optional[Point]) -> None:
        if not self.temp_points:
            self.temp_points = [existing or self.scene.add_point(x, y)]
            return

        center = self.temp_points[0]
        # the radius handle is only a position, it does not become a scene point
        edge = existing if existing is not None else Vector(x, y)
        self.scene.add_circle(center, edge)
        self.temp_points = []

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _find_point(self, x: float, y: float) -> Optional[Point]:
        return find_existing_point(x, y, self.scene.points, self.hit_test.point_tolerance)

    def _end_drag(self) -> None:
        logger.debug("Stopped dragging point %s.", self.drag.point_id)
        self.drag = DragState()
