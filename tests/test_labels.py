import numpy as np
import pytest

from geocanvas.config import LABEL_PLACEMENT, LabelPlacementConfig
from geocanvas.model.geometry_primitives import Point
from geocanvas.model.labels import (
    calculate_best_label_position,
    label_candidates,
    score_label_candidates,
)


def test_isolated_point_gets_upper_right_label(scene):
    p = scene.add_point(400, 300)

    assert calculate_best_label_position(p, scene) == (410.0, 290.0)


def test_candidates_follow_enumeration_order():
    candidates = label_candidates(Point(id=1, x=0, y=0))

    right_up, right_down, left_up, left_down, right, left, up, down = candidates
    assert right_up[0] > 0 > right_up[1]
    assert right_down[0] > 0 and right_down[1] > 0
    assert left_up[0] < 0 and left_up[1] < 0
    assert left_down[0] < 0 < left_down[1]
    assert right[0] > 0 and left[0] < 0
    assert up[1] < 0 < down[1]
    assert len(candidates) == 8


def test_neighbour_point_pushes_label_away(scene):
    p = scene.add_point(400, 300)
    scene.add_point(410, 290)  # sits exactly on the upper-right candidate

    assert calculate_best_label_position(p, scene) == (410.0, 315.0)


def test_line_pushes_label_away(scene):
    p = scene.add_point(400, 300)
    a = scene.add_point(200, 290)
    b = scene.add_point(600, 290)
    scene.add_line(a, b)

    scores = score_label_candidates(p, scene)
    assert scores[0] == pytest.approx(15.0)
    assert calculate_best_label_position(p, scene) == (410.0, 315.0)


def test_circle_boundary_pushes_label_away(scene):
    p = scene.add_point(400, 300)
    center = scene.add_point(410, 340)
    scene.add_circle(center, Point(id=0, x=410, y=290))  # radius 50 through the upper-right candidate

    scores = score_label_candidates(p, scene)
    assert scores[0] == pytest.approx(LABEL_PLACEMENT.circle_boundary_threshold)
    assert calculate_best_label_position(p, scene) == (410.0, 315.0)


def test_angle_label_anchor_is_penalised(scene):
    a = scene.add_point(300, 200)
    v = scene.add_point(200, 200)
    b = scene.add_point(200, 300)
    angle = scene.add_angle(v, scene.add_line(v, a), scene.add_line(v, b))
    ax, ay = angle.label_anchor()

    probe = Point(id=99, x=ax - 10, y=ay + 10)
    scores = score_label_candidates(probe, scene)

    assert scores[0] == pytest.approx(LABEL_PLACEMENT.angle_label_threshold)


def test_canvas_edges_are_avoided(scene):
    p = scene.add_point(5, 5)

    # upper-right would be at y = -5, right-down at (15, 20) clears both margins
    assert calculate_best_label_position(p, scene) == (15.0, 20.0)


def test_edge_penalty_applies_per_axis(scene):
    p = scene.add_point(795, 595)

    scores = score_label_candidates(p, scene, canvas_size=(800, 600))

    # right-down leaves the canvas on both axes
    assert scores[1] == pytest.approx(2 * LABEL_PLACEMENT.edge_penalty)


def test_weights_are_configurable(scene):
    p = scene.add_point(400, 300)
    scene.add_point(410, 290)
    lenient = LabelPlacementConfig(point_threshold=0.0)

    assert calculate_best_label_position(p, scene, config=lenient) == (410.0, 290.0)


def test_ties_resolve_to_first_candidate(scene):
    p = scene.add_point(400, 300)
    scores = score_label_candidates(p, scene)

    assert np.all(scores == 0.0)
    assert calculate_best_label_position(p, scene) == tuple(label_candidates(p)[0])
