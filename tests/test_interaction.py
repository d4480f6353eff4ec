import pytest

from geocanvas.controller.interaction import InteractionController, Tool


def test_starts_with_point_tool(controller):
    state = controller.snapshot()

    assert state.tool is Tool.POINT
    assert state.temp_points == ()
    assert state.hovered_point_id is None
    assert not state.dragging


def test_unknown_tool_name_raises(controller):
    with pytest.raises(ValueError):
        controller.tool_change('polygon')


def test_point_tool_adds_points_but_not_on_top_of_existing(controller, scene):
    controller.click(10, 10)
    controller.click(100, 10)
    controller.click(12, 12)  # hits P1

    assert [p.id for p in scene.points] == [1, 2]


def test_line_tool_builds_line_from_two_clicks(controller, scene):
    controller.tool_change(Tool.LINE)
    controller.click(0, 0)

    assert [p.id for p in controller.temp_points] == [1]

    controller.click(100, 0)

    assert controller.temp_points == []
    assert len(scene.lines) == 1
    line = scene.lines[0]
    assert (line.id, line.start.id, line.end.id) == (3, 1, 2)


def test_line_tool_reuses_existing_points(controller, scene):
    a = scene.add_point(0, 0)
    b = scene.add_point(100, 0)
    controller.tool_change('line')

    controller.click(3, 3)
    controller.click(97, 2)

    assert len(scene.points) == 2
    assert (scene.lines[0].start.id, scene.lines[0].end.id) == (a.id, b.id)


def test_line_tool_ignores_second_click_on_start_point(controller, scene):
    controller.tool_change('line')
    controller.click(0, 0)
    controller.click(0, 0)

    assert scene.lines == []
    assert [p.id for p in scene.points] == [1]
    assert [p.id for p in controller.temp_points] == [1]


def test_angle_tool_builds_two_legs_and_an_angle(controller, scene):
    controller.tool_change('angle')
    controller.click(100, 0)   # point1
    controller.click(0, 0)     # vertex
    controller.click(0, 100)   # point2

    assert controller.temp_points == []
    assert [line.id for line in scene.lines] == [4, 5]
    angle = scene.angles[0]
    assert angle.id == 6
    assert angle.vertex.id == 2
    assert angle.line1.start.id == angle.line2.start.id == 2
    assert (angle.point1.id, angle.point2.id) == (1, 3)
    assert angle.degrees == pytest.approx(90.0)


def test_angle_tool_rejects_repeated_points(controller, scene):
    controller.tool_change('angle')
    controller.click(100, 0)
    controller.click(100, 0)   # same as point1

    assert len(controller.temp_points) == 1

    controller.click(0, 0)
    controller.click(0, 0)     # same as vertex
    controller.click(100, 0)   # same as point1

    assert [p.id for p in controller.temp_points] == [1, 2]
    assert scene.angles == []
    assert scene.lines == []


def test_circle_tool_center_then_radius(controller, scene):
    controller.tool_change('circle')
    controller.click(0, 0)

    assert [p.id for p in scene.points] == [1]

    controller.click(30, 0)

    circle = scene.circles[0]
    assert circle.id == 2
    assert circle.radius == pytest.approx(30.0)
    assert (circle.center.x, circle.center.y) == (0, 0)
    assert controller.temp_points == []


def test_circle_tool_radius_from_existing_point(controller, scene):
    scene.add_point(0, 0)
    edge = scene.add_point(0, 40)
    controller.tool_change('circle')

    controller.click(1, 1)
    controller.click(2, 38)

    assert len(scene.points) == 2
    assert scene.circles[0].radius == pytest.approx(edge.y)


def test_tool_change_discards_temp_points(controller, scene):
    controller.tool_change('angle')
    controller.click(100, 0)
    controller.click(0, 0)

    controller.tool_change('line')

    assert controller.temp_points == []
    assert len(scene.points) == 2  # committed points survive


def test_point_tool_click_on_line_toggles_animation(controller, segment_scene):
    line = segment_scene.lines[0]

    controller.click(50, 2)

    state = controller.snapshot()
    assert state.selected_line_id == line.id
    assert state.animation_active
    assert len(segment_scene.points) == 2

    controller.click(50, -2)

    state = controller.snapshot()
    assert state.selected_line_id is None
    assert not state.animation_active


def test_selecting_another_line_switches_animation(controller, segment_scene):
    p3 = segment_scene.add_point(0, 200)
    p4 = segment_scene.add_point(100, 200)
    other = segment_scene.add_line(p3, p4)

    controller.click(50, 0)
    controller.click(50, 200)

    assert controller.animation.selected_line_id == other.id
    assert controller.animation.active


def test_point_hit_takes_precedence_over_line(controller, segment_scene):
    controller.click(1, 1)

    assert controller.animation.selected_line_id is None
    assert len(segment_scene.points) == 2


def test_line_toggle_only_with_point_tool(controller, segment_scene):
    controller.tool_change('line')
    controller.click(50, 2)

    assert controller.animation.selected_line_id is None
    assert len(controller.temp_points) == 1


def test_hover_follows_pointer(controller, scene):
    scene.add_point(50, 50)

    controller.pointer_move(55, 50)
    assert controller.hovered_point_id == 1

    controller.pointer_move(80, 80)
    assert controller.hovered_point_id is None


def test_drag_moves_point_and_dependents(controller, segment_scene):
    line = segment_scene.lines[0]

    controller.pointer_move(2, 2)
    controller.pointer_down()
    assert controller.is_dragging

    controller.pointer_move(30, 40)

    assert (segment_scene.points[0].x, segment_scene.points[0].y) == (30, 40)
    assert (line.start.x, line.start.y) == (30, 40)

    controller.pointer_up()
    assert not controller.is_dragging


def test_pointer_down_without_hover_does_not_drag(controller, scene):
    scene.add_point(50, 50)
    controller.pointer_move(200, 200)
    controller.pointer_down()

    assert not controller.is_dragging


def test_immovable_point_is_not_dragged(controller, scene):
    p = scene.add_point(50, 50)
    p.movable = False

    controller.pointer_move(50, 50)
    controller.pointer_down()

    assert not controller.is_dragging


def test_release_click_after_drag_is_suppressed(controller, scene):
    scene.add_point(50, 50)
    controller.tool_change('line')

    controller.pointer_move(50, 50)
    controller.pointer_down()
    controller.pointer_move(120, 80)
    controller.pointer_up()
    controller.click(120, 80)

    assert controller.temp_points == []

    # the next ordinary click works again
    controller.click(120, 80)
    assert [p.id for p in controller.temp_points] == [1]


def test_press_and_release_without_motion_still_clicks(controller, scene):
    scene.add_point(50, 50)
    controller.tool_change('line')

    controller.pointer_move(50, 50)
    controller.pointer_down()
    controller.pointer_up()
    controller.click(50, 50)

    assert [p.id for p in controller.temp_points] == [1]


def test_clicks_are_ignored_while_dragging(controller, scene):
    scene.add_point(50, 50)
    controller.pointer_move(50, 50)
    controller.pointer_down()

    controller.click(300, 300)

    assert len(scene.points) == 1


def test_pointer_leave_ends_drag_and_hover(controller, scene):
    scene.add_point(50, 50)
    controller.pointer_move(50, 50)
    controller.pointer_down()

    controller.pointer_leave()

    state = controller.snapshot()
    assert not state.dragging
    assert state.hovered_point_id is None
    assert state.pointer is None


def test_drag_of_point_removed_by_clear_is_dropped(controller, scene):
    scene.add_point(50, 50)
    controller.pointer_move(50, 50)
    controller.pointer_down()

    scene.clear()
    controller.pointer_move(60, 60)

    assert not controller.is_dragging
    assert scene.points == []


def test_clear_resets_scene_and_transient_state(controller, scene):
    controller.tool_change('line')
    controller.click(0, 0)
    controller.click(100, 0)
    controller.tool_change('point')
    controller.click(50, 1)  # animate the line
    controller.tool_change('line')
    controller.click(0, 0)
    controller.pointer_move(0, 0)

    controller.clear()

    state = controller.snapshot()
    assert scene.counts() == {'points': 0, 'lines': 0, 'angles': 0, 'circles': 0}
    assert state.temp_points == ()
    assert state.hovered_point_id is None
    assert state.selected_line_id is None
    assert not state.animation_active

    controller.tool_change('point')
    controller.click(10, 10)
    assert scene.points[0].id == 1


def test_tick_advances_phase_only_while_animating(controller, segment_scene):
    controller.tick()
    assert controller.animation.phase == 0

    controller.click(50, 0)
    controller.tick()
    controller.tick()
    assert controller.snapshot().animation_phase == 4

    for _ in range(6):
        controller.tick()
    assert controller.animation.phase == 0  # wrapped at 16


@pytest.mark.parametrize(
    'tool, clicks, expected',
    [
        ('point', [], 'Point:'),
        ('line', [], 'start point'),
        ('line', [(0, 0)], 'from point P1'),
        ('angle', [(0, 0)], 'for the vertex'),
        ('angle', [(0, 0), (100, 0)], 'through vertex P2'),
        ('circle', [], 'for the center'),
        ('circle', [(0, 0)], 'center P1'),
    ],
)
def test_status_text_describes_next_step(scene, tool, clicks, expected):
    controller = InteractionController(scene)
    controller.tool_change(tool)
    for x, y in clicks:
        controller.click(x, y)

    assert expected in controller.status_text()


def test_status_text_while_dragging(controller, scene):
    scene.add_point(50, 50)
    controller.pointer_move(50, 50)
    controller.pointer_down()

    assert controller.status_text() == 'Dragging point P1'
