"""
Picking of scene entities under the cursor.

Both searches scan in insertion order and return the first match, so among
overlapping candidates the earliest created entity wins.
"""
from __future__ import annotations

from typing import Iterable, Optional

from geocanvas.config import HIT_TEST
from geocanvas.model.geometry_primitives import Point, Line, Vector
from geocanvas.model.geometry_utils import distance, point_to_segment_distance


def find_existing_point(
    x: float,
    y: float,
    points: Iterable[Point],
    tolerance: float = HIT_TEST.point_tolerance
) -> Optional[Point]:
    """Return the first point within ``tolerance`` (inclusive) of (x, y)."""
    cursor = Vector(x, y)
    for point in points:
        if distance(point, cursor) <= tolerance:
            return point
    return None


def find_line_near_point(
    x: float,
    y: float,
    lines: Iterable[Line],
    tolerance: float = HIT_TEST.line_tolerance
) -> Optional[Line]:
    """Return the first line closer than ``tolerance`` (exclusive) to (x, y)."""
    cursor = Vector(x, y)
    for line in lines:
        if point_to_segment_distance(cursor, line.start, line.end) < tolerance:
            return line
    return None
