"""
Geometric Primitives of the drawing scene.

Lines, angles and circles never hold references to the scene's points. They
carry value copies (id + coordinate snapshot) and are kept in sync by
:meth:`geocanvas.model.state.SceneState.move_point`.
"""
from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional
import math

from geocanvas.model.geometry_utils import angle_between_rays


class StrokeStyle(str, Enum):
    SOLID = "solid"
    DASHED = "dashed"
    DOTTED = "dotted"


@dataclass
class Vector:
    """A 2D vector or bare position in canvas space."""
    x: float
    y: float

    @property
    def heading(self) -> float:
        """Direction in radians, measured with atan2 in canvas space."""
        return math.atan2(self.y, self.x)


@dataclass
class Point:
    """A user-placed point. ``epoch`` is the scene epoch that issued the id."""
    id: int
    x: float
    y: float
    label: str = ""
    size: float = 5.0
    color: str = "#3498db"
    show_label: bool = True
    movable: bool = True
    epoch: int = 0

    def __post_init__(self) -> None:
        if not self.label:
            self.label = f"P{self.id}"

    def __sub__(self, other: Point) -> Vector:
        # Point - Point = Vector (Direction)
        if isinstance(other, Point):
            return Vector(self.x - other.x, self.y - other.y)
        raise TypeError("Can only subtract a Point from a Point.")

    def copy(self) -> Point:
        return replace(self)


@dataclass
class Line:
    """A segment between two point snapshots."""
    id: int
    start: Point
    end: Point
    color: str = "#2c3e50"
    width: float = 2.0
    style: StrokeStyle = StrokeStyle.SOLID
    label: str = ""
    show_label: bool = True
    animated: bool = False
    epoch: int = 0

    def __post_init__(self) -> None:
        if not self.label:
            self.label = f"L{self.id}"

    def copy(self) -> Line:
        return replace(self, start=self.start.copy(), end=self.end.copy())

    def reverse(self) -> Line:
        return replace(self, start=self.end.copy(), end=self.start.copy())

    def has_endpoint(self, point_id: int) -> bool:
        return point_id in (self.start.id, self.end.id)

    def other_end(self, point_id: int) -> Optional[Point]:
        """The endpoint opposite to ``point_id``, or None if it is not an endpoint."""
        if self.start.id == point_id:
            return self.end
        if self.end.id == point_id:
            return self.start
        return None

    @property
    def midpoint(self) -> tuple[float, float]:
        return (self.start.x + self.end.x) / 2, (self.start.y + self.end.y) / 2


@dataclass
class Angle:
    """
    An angle at ``vertex`` between two legs.

    Both legs are embedded line copies that start at the vertex, so
    ``line1.end`` and ``line2.end`` are the two arm points.
    """
    id: int
    vertex: Point
    line1: Line
    line2: Line
    color: str = "#e74c3c"
    radius: float = 20.0
    show_arc: bool = True
    show_degree: bool = True
    label: str = ""
    show_label: bool = True
    epoch: int = 0

    def __post_init__(self) -> None:
        if not self.label:
            self.label = f"A{self.id}"

    @property
    def point1(self) -> Point:
        return self.line1.end

    @property
    def point2(self) -> Point:
        return self.line2.end

    @property
    def start_direction(self) -> float:
        return (self.point1 - self.vertex).heading

    @property
    def end_direction(self) -> float:
        return (self.point2 - self.vertex).heading

    @property
    def bisector_direction(self) -> float:
        """Mean of the two ray directions, used to anchor the degree text and label."""
        return (self.start_direction + self.end_direction) / 2

    @property
    def degrees(self) -> float:
        return angle_between_rays(self.vertex, self.point1, self.point2)

    def label_anchor(self, extra: float = 20.0) -> tuple[float, float]:
        theta = self.bisector_direction
        r = self.radius + extra
        return self.vertex.x + r * math.cos(theta), self.vertex.y + r * math.sin(theta)


@dataclass
class Circle:
    """A circle with a frozen radius around a center snapshot."""
    id: int
    center: Point
    radius: float
    color: str = "#9b59b6"
    width: float = 2.0
    style: StrokeStyle = StrokeStyle.SOLID
    fill: bool = False
    fill_color: str = "rgba(155, 89, 182, 0.2)"
    label: str = ""
    show_label: bool = True
    epoch: int = 0

    def __post_init__(self) -> None:
        if self.radius < 0.0:
            raise ValueError(f"Circle radius must be non-negative, got {self.radius}.")
        if not self.label:
            self.label = f"C{self.id}"
