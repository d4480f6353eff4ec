"""
Configuration & Tuned Constants
===============================
This module serves as the central registry for the tolerances, weights and
styles used across the application.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (click radius, label penalties,
   animation speed) scattered throughout the model and view code.
2. Tuning: The label-placement weights are empirical. Keeping them in one
   frozen dataclass lets them be swapped for a different profile without
   touching the scoring code.

Exports:
    CANVAS, HIT_TEST, LABEL_PLACEMENT, ANIMATION, PREVIEW: default profiles.
"""
from __future__ import annotations

from dataclasses import dataclass, field

APP_NAME: str = "geocanvas"
VISIBLE_APP_NAME: str = "Geometry Canvas"


@dataclass(frozen=True)
class CanvasConfig:
    width: int = 800
    height: int = 600
    background: str = "#ffffff"


@dataclass(frozen=True)
class HitTestConfig:
    """Pixel tolerances for picking entities under the cursor."""
    point_tolerance: float = 10.0  # inclusive
    line_tolerance: float = 5.0    # exclusive


@dataclass(frozen=True)
class LabelPlacementConfig:
    """
    Weights of the greedy label-placement heuristic.

    Candidate offsets are relative to the point in screen coordinates (y grows
    downwards). Their order is the tie-break order.
    """
    candidates: tuple[tuple[float, float], ...] = (
        (10.0, -10.0),   # right-up
        (10.0, 15.0),    # right-down
        (-20.0, -10.0),  # left-up
        (-20.0, 15.0),   # left-down
        (12.0, 4.0),     # right
        (-22.0, 4.0),    # left
        (-4.0, -14.0),   # up
        (-4.0, 20.0),    # down
    )
    point_threshold: float = 20.0
    line_threshold: float = 15.0
    angle_label_threshold: float = 20.0
    circle_center_threshold: float = 20.0
    circle_boundary_threshold: float = 10.0
    edge_margin: float = 15.0
    edge_penalty: float = 30.0


@dataclass(frozen=True)
class AnimationConfig:
    """Marching-ants phase clock."""
    step: int = 2
    period: int = 16
    frame_interval_ms: int = 16


@dataclass(frozen=True)
class PreviewStyle:
    """Colours of hover feedback and in-progress constructions."""
    hover_color: str = "#ff9800"
    hover_scale: float = 1.2
    line_color: str = "#2ecc71"
    angle_color: str = "#e74c3c"
    angle_arc_color: str = "#f39c12"
    angle_preview_radius: float = 20.0
    circle_color: str = "#9b59b6"
    animation_color: str = "#3498db"
    text_color: str = "#000000"
    dash: tuple[float, ...] = (5.0, 3.0)
    fine_dash: tuple[float, ...] = (3.0, 2.0)
    label_font_size: int = 10
    value_font_size: int = 12
    dash_patterns: dict[str, tuple[float, ...]] = field(default_factory=lambda: {
        "solid": (),
        "dashed": (8.0, 4.0),
        "dotted": (2.0, 2.0),
    })


# Global defaults
CANVAS = CanvasConfig()
HIT_TEST = HitTestConfig()
LABEL_PLACEMENT = LabelPlacementConfig()
ANIMATION = AnimationConfig()
PREVIEW = PreviewStyle()
