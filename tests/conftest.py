import pytest

from geocanvas.controller.interaction import InteractionController
from geocanvas.model.state import SceneState


@pytest.fixture
def scene():
    return SceneState()


@pytest.fixture
def controller(scene):
    return InteractionController(scene)


@pytest.fixture
def segment_scene(scene):
    """Two points joined by a horizontal line: P1 (0, 0) - P2 (100, 0), line id 3."""
    p1 = scene.add_point(0, 0)
    p2 = scene.add_point(100, 0)
    scene.add_line(p1, p2)
    return scene
