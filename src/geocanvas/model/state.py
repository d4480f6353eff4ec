"""
Scene State (Data Model)
========================
This module defines the central data structure of the drawing surface.

Why is this file needed?
------------------------
1. Ownership: It is the only owner of points, lines, angles and circles, and
   the only place where identifiers are issued.
2. Consistency: Derived entities store coordinate copies of their points.
   ``move_point`` rewrites all of those copies before it returns, so a reader
   never sees a half-updated scene.
3. Decoupling: The controller writes to this object; the render adapter only
   reads from it.

Classes:
    SceneState: The scene store.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Optional

from geocanvas.model.geometry_primitives import Point, Line, Angle, Circle
from geocanvas.model.geometry_utils import SupportsXY, distance

logger = logging.getLogger(__name__)


@dataclass
class SceneState:
    """
    Points, lines, angles and circles plus the id counter.

    All entity kinds share one id sequence. ``clear()`` restarts it at 1 and
    opens a new ``epoch``; entities remember the epoch that issued their id so
    references that survived a clear can be told apart from fresh ones.
    """
    points: list[Point] = field(default_factory=list)
    lines: list[Line] = field(default_factory=list)
    angles: list[Angle] = field(default_factory=list)
    circles: list[Circle] = field(default_factory=list)

    next_id: int = 1
    epoch: int = 0

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_point(self, point_id: int) -> Optional[Point]:
        for point in self.points:
            if point.id == point_id:
                return point
        return None

    def owns(self, point: Point) -> bool:
        """True if ``point`` was issued in the current epoch and is still in the scene."""
        return point.epoch == self.epoch and self.get_point(point.id) is not None

    def dependents_of(self, point_id: int) -> tuple[list[Line], list[Angle], list[Circle]]:
        """Lines, angles and circles whose stored coordinates come from ``point_id``."""
        lines = [line for line in self.lines if line.has_endpoint(point_id)]
        angles = [
            angle for angle in self.angles
            if angle.vertex.id == point_id
            or angle.line1.has_endpoint(point_id)
            or angle.line2.has_endpoint(point_id)
        ]
        circles = [circle for circle in self.circles if circle.center.id == point_id]
        return lines, angles, circles

    def counts(self) -> dict[str, int]:
        return {
            "points": len(self.points),
            "lines": len(self.lines),
            "angles": len(self.angles),
            "circles": len(self.circles),
        }

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def _allocate_id(self) -> int:
        new_id = self.next_id
        self.next_id += 1
        return new_id

    def add_point(self, x: float, y: float) -> Point:
        point = Point(id=self._allocate_id(), x=float(x), y=float(y), epoch=self.epoch)
        self.points.append(point)
        logger.debug("Added point %s at (%.1f, %.1f).", point.label, point.x, point.y)
        return point

    def add_line(self, start: Point, end: Point) -> Optional[Line]:
        """
        Connect two scene points.

        Returns:
            The new line, or None if both ends are the same point or either
            end is not a live point of this scene.
        """
        if start.id == end.id:
            logger.debug("Rejected degenerate line on point %d.", start.id)
            return None
        if not (self.owns(start) and self.owns(end)):
            logger.debug("Rejected line with stale endpoints %d, %d.", start.id, end.id)
            return None

        line = Line(
            id=self._allocate_id(),
            start=self._snapshot(start),
            end=self._snapshot(end),
            epoch=self.epoch,
        )
        self.lines.append(line)
        logger.debug("Added line %s (%d -> %d).", line.label, start.id, end.id)
        return line

    def add_angle(self, vertex: Point, line1: Line, line2: Line) -> Optional[Angle]:
        """
        Build an angle from two lines sharing ``vertex``.

        The legs are stored as copies oriented away from the vertex. The angle
        is rejected if the vertex is not an endpoint of both lines or if the
        arm points coincide with each other or with the vertex.
        """
        if not self.owns(vertex):
            logger.debug("Rejected angle at stale vertex %d.", vertex.id)
            return None

        point1 = line1.other_end(vertex.id)
        point2 = line2.other_end(vertex.id)
        if point1 is None or point2 is None:
            logger.debug("Rejected angle: vertex %d is not shared by both legs.", vertex.id)
            return None
        if len({point1.id, vertex.id, point2.id}) != 3:
            logger.debug("Rejected angle with repeated points (%d, %d, %d).", point1.id, vertex.id, point2.id)
            return None
        if not (self.owns(point1) and self.owns(point2)):
            logger.debug("Rejected angle with stale arm points.")
            return None

        leg1 = line1.copy() if line1.start.id == vertex.id else line1.reverse()
        leg2 = line2.copy() if line2.start.id == vertex.id else line2.reverse()
        # legs carry live coordinates even if the passed lines were out of date
        for leg in (leg1, leg2):
            leg.start = self._snapshot(self.get_point(leg.start.id))
            leg.end = self._snapshot(self.get_point(leg.end.id))

        angle = Angle(
            id=self._allocate_id(),
            vertex=self._snapshot(vertex),
            line1=leg1,
            line2=leg2,
            epoch=self.epoch,
        )
        self.angles.append(angle)
        logger.debug("Added angle %s (%d, %d, %d).", angle.label, point1.id, vertex.id, point2.id)
        return angle

    def add_circle(self, center: Point, edge_point: SupportsXY) -> Optional[Circle]:
        """
        Add a circle through ``edge_point``.

        The radius is measured once here and is not tied to ``edge_point``
        afterwards. A zero radius is allowed.
        """
        if not self.owns(center):
            logger.debug("Rejected circle around stale center %d.", center.id)
            return None

        circle = Circle(
            id=self._allocate_id(),
            center=self._snapshot(center),
            radius=distance(center, edge_point),
            epoch=self.epoch,
        )
        self.circles.append(circle)
        logger.debug("Added circle %s (r = %.1f).", circle.label, circle.radius)
        return circle

    def move_point(self, point_id: int, x: float, y: float) -> bool:
        """
        Move a point and propagate the new position to every dependent copy.

        Returns:
            False if no point with this id exists, True otherwise.
        """
        point = self.get_point(point_id)
        if point is None:
            logger.debug("Ignored move of unknown point %d.", point_id)
            return False

        x, y = float(x), float(y)
        point.x, point.y = x, y

        for line in self.lines:
            self._move_line_endpoint(line, point_id, x, y)

        for angle in self.angles:
            if angle.vertex.id == point_id:
                angle.vertex.x, angle.vertex.y = x, y
            self._move_line_endpoint(angle.line1, point_id, x, y)
            self._move_line_endpoint(angle.line2, point_id, x, y)

        for circle in self.circles:
            if circle.center.id == point_id:
                circle.center.x, circle.center.y = x, y

        return True

    def clear(self) -> None:
        """Remove everything and start a new id epoch."""
        self.points = []
        self.lines = []
        self.angles = []
        self.circles = []
        self.next_id = 1
        self.epoch += 1
        logger.info("Scene cleared (epoch %d).", self.epoch)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _snapshot(point: Point) -> Point:
        return point.copy()

    @staticmethod
    def _move_line_endpoint(line: Line, point_id: int, x: float, y: float) -> None:
        if line.start.id == point_id:
            line.start.x, line.start.y = x, y
        if line.end.id == point_id:
            line.end.x, line.end.y = x, y
