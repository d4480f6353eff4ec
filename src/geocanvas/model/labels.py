"""
Point label placement.

A greedy heuristic: every candidate offset around the point is scored by how
close it gets to other scene content, and the cheapest one wins. Labels are
placed one at a time; interactions between labels are not considered.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from geocanvas.config import CANVAS, LABEL_PLACEMENT, LabelPlacementConfig
from geocanvas.model.geometry_primitives import Point
from geocanvas.model.geometry_utils import segment_distances

if TYPE_CHECKING:
    import numpy.typing as npt
    from geocanvas.model.state import SceneState


def label_candidates(point: Point, config: LabelPlacementConfig = LABEL_PLACEMENT) -> npt.NDArray[np.float64]:
    """(8, 2) array of candidate label positions in enumeration order."""
    offsets = np.asarray(config.candidates, dtype=np.float64)
    return offsets + np.array([point.x, point.y])


def _proximity_penalty(distances: npt.NDArray[np.float64], threshold: float) -> npt.NDArray[np.float64]:
    """Sum of max(0, threshold - d) over the last axis."""
    if distances.size == 0:
        return np.zeros(distances.shape[0])
    return np.maximum(0.0, threshold - distances).sum(axis=1)


def score_label_candidates(
    point: Point,
    scene: SceneState,
    canvas_size: tuple[float, float] = (CANVAS.width, CANVAS.height),
    config: LabelPlacementConfig = LABEL_PLACEMENT
) -> npt.NDArray[np.float64]:
    """
    Penalty of every candidate label position of ``point``.

    Args:
        point: The point being labelled. It is excluded from the neighbours.
        scene: Scene supplying points, lines, angles and circles.
        canvas_size: (width, height) of the drawing surface in pixels.
        config: Thresholds and penalties.

    Returns:
        Array with one score per candidate, lower is better.
    """
    candidates = label_candidates(point, config)
    scores = np.zeros(len(candidates))

    others = np.array([[p.x, p.y] for p in scene.points if p.id != point.id]).reshape(-1, 2)
    if len(others):
        d = np.linalg.norm(candidates[:, None, :] - others[None, :, :], axis=2)
        scores += _proximity_penalty(d, config.point_threshold)

    if scene.lines:
        starts = np.array([[ln.start.x, ln.start.y] for ln in scene.lines])
        ends = np.array([[ln.end.x, ln.end.y] for ln in scene.lines])
        d = segment_distances(candidates, starts, ends)
        scores += _proximity_penalty(d, config.line_threshold)

    if scene.angles:
        anchors = np.array([angle.label_anchor() for angle in scene.angles])
        d = np.linalg.norm(candidates[:, None, :] - anchors[None, :, :], axis=2)
        scores += _proximity_penalty(d, config.angle_label_threshold)

    if scene.circles:
        centers = np.array([[c.center.x, c.center.y] for c in scene.circles])
        radii = np.array([c.radius for c in scene.circles])
        d = np.linalg.norm(candidates[:, None, :] - centers[None, :, :], axis=2)
        scores += _proximity_penalty(d, config.circle_center_threshold)
        scores += _proximity_penalty(np.abs(d - radii[None, :]), config.circle_boundary_threshold)

    width, height = canvas_size
    margin = config.edge_margin
    xs, ys = candidates[:, 0], candidates[:, 1]
    scores += np.where((xs < margin) | (xs > width - margin), config.edge_penalty, 0.0)
    scores += np.where((ys < margin) | (ys > height - margin), config.edge_penalty, 0.0)

    return scores


def calculate_best_label_position(
    point: Point,
    scene: SceneState,
    canvas_size: tuple[float, float] = (CANVAS.width, CANVAS.height),
    config: LabelPlacementConfig = LABEL_PLACEMENT
) -> tuple[float, float]:
    """
    Cheapest label position for ``point``.

    Ties go to the earliest candidate in the order right-up, right-down,
    left-up, left-down, right, left, up, down.
    """
    scores = score_label_candidates(point, scene, canvas_size, config)
    best = int(np.argmin(scores))  # first occurrence on ties
    x, y = label_candidates(point, config)[best]
    return float(x), float(y)
