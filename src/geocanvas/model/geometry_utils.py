from __future__ import annotations

from typing import Protocol, TYPE_CHECKING

from math import atan2, cos, sin, degrees, hypot
import numpy as np

if TYPE_CHECKING:
    from numpy import typing as npt


class SupportsXY(Protocol):
    x: float
    y: float


def distance(a: SupportsXY, b: SupportsXY) -> float:
    """Euclidean distance between two positions."""
    return hypot(b.x - a.x, b.y - a.y)


def point_to_segment_distance(
    p: SupportsXY,
    seg_start: SupportsXY,
    seg_end: SupportsXY
) -> float:
    """
    Distance from a point to a line segment.

    The projection parameter is clamped to [0, 1], so beyond either end the
    distance to the nearest endpoint is returned.

    Args:
        p: The query position.
        seg_start: First endpoint of the segment.
        seg_end: Second endpoint of the segment.

    Returns:
        The shortest distance. A zero-length segment degrades to
        ``distance(p, seg_start)``.
    """
    dx = seg_end.x - seg_start.x
    dy = seg_end.y - seg_start.y
    len_sq = dx * dx + dy * dy

    if len_sq == 0.0:
        return distance(p, seg_start)

    t = ((p.x - seg_start.x) * dx + (p.y - seg_start.y) * dy) / len_sq
    t = min(1.0, max(0.0, t))

    return hypot(p.x - (seg_start.x + t * dx), p.y - (seg_start.y + t * dy))


def ray_direction(vertex: SupportsXY, p: SupportsXY) -> float:
    """Direction of the ray vertex -> p in radians."""
    return atan2(p.y - vertex.y, p.x - vertex.x)


def angle_between_rays(vertex: SupportsXY, p1: SupportsXY, p2: SupportsXY) -> float:
    """
    Non-reflex angle between the rays vertex -> p1 and vertex -> p2.

    Returns:
        Degrees in [0, 180].
    """
    diff = abs(ray_direction(vertex, p1) - ray_direction(vertex, p2))
    diff_deg = degrees(diff)
    if diff_deg > 180.0:
        diff_deg = 360.0 - diff_deg
    return diff_deg


def polar_offset(origin: SupportsXY, radius: float, theta: float) -> tuple[float, float]:
    """Position at ``radius`` from ``origin`` in direction ``theta`` (radians)."""
    return origin.x + radius * cos(theta), origin.y + radius * sin(theta)


def segment_distances(
    points: npt.NDArray[np.float64],
    starts: npt.NDArray[np.float64],
    ends: npt.NDArray[np.float64]
) -> npt.NDArray[np.float64]:
    """
    Vectorized :func:`point_to_segment_distance`.

    Args:
        points: (N, 2) query positions.
        starts: (M, 2) segment start points.
        ends: (M, 2) segment end points.

    Returns:
        An (N, M) array of distances from every point to every segment.
    """
    points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    starts = np.asarray(starts, dtype=np.float64).reshape(-1, 2)
    ends = np.asarray(ends, dtype=np.float64).reshape(-1, 2)

    d = ends - starts                              # (M, 2)
    len_sq = np.einsum("ij,ij->i", d, d)           # (M,)
    rel = points[:, None, :] - starts[None, :, :]  # (N, M, 2)

    # zero-length segments keep t = 0, i.e. distance to the start point
    safe = np.where(len_sq > 0.0, len_sq, 1.0)
    t = np.einsum("nmk,mk->nm", rel, d) / safe
    t = np.clip(np.where(len_sq > 0.0, t, 0.0), 0.0, 1.0)

    closest = starts[None, :, :] + t[:, :, None] * d[None, :, :]
    return np.linalg.norm(points[:, None, :] - closest, axis=2)
