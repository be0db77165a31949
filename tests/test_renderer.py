import pygame
import pytest

import constants
from convection import build_frame
import renderer as renderer_module
from renderer import Renderer, arrow_points, interpolate_color, to_rgba


@pytest.fixture
def screen():
    pygame.font.init()
    yield pygame.Surface((constants.WIDTH, constants.HEIGHT))
    pygame.font.quit()


def test_interpolate_color_between_and_outside_keyframes() -> None:
    keyframes = [(0.0, (0, 0, 0)), (1.0, (255, 255, 255))]
    assert interpolate_color(keyframes, 0.0) == (0, 0, 0)
    assert interpolate_color(keyframes, 0.5) == (127, 127, 127)
    assert interpolate_color(keyframes, 1.0) == (255, 255, 255)
    assert interpolate_color(keyframes, -0.2) == (0, 0, 0)
    assert interpolate_color(keyframes, 1.2) == (255, 255, 255)


def test_to_rgba_clamps_out_of_range_channels() -> None:
    assert to_rgba((-25, 300, 10.7, 0.8)) == (0, 255, 10, 204)
    assert to_rgba((127.5, 50.0, 127.5, 0.6)) == (127, 50, 127, 153)


def test_arrow_points_follow_rotation() -> None:
    tip = arrow_points((100, 100), 0)[1]
    assert tip == pytest.approx((112, 100))

    # Positive rotation turns clockwise on screen (y grows downward).
    tip = arrow_points((100, 100), 90)[1]
    assert tip == pytest.approx((100, 112))


def test_field_mapping_covers_outer_core(screen) -> None:
    renderer = Renderer(screen)
    field = renderer.outer_core_rect
    assert renderer.field_to_local(0, 0) == (field.left, field.top)
    assert renderer.field_to_local(100, 100) == pytest.approx((field.right, field.bottom))
    assert renderer.field_to_local(50, 50) == pytest.approx(field.center)


@pytest.mark.parametrize("phase", [0, 90, 270])
def test_draw_full_frame(screen, phase: int) -> None:
    renderer = Renderer(screen)
    renderer.draw(build_frame(phase))

    diagram = renderer.diagram_rect
    # Outside the rounded bottom of the cross-section the dark backdrop shows.
    corner = screen.get_at((10, diagram.bottom - 3))
    assert tuple(corner)[:3] == constants.BACKGROUND

    # The inner core at the bottom center is drawn in red tones.
    r, g, b, _ = screen.get_at((diagram.centerx, diagram.bottom - 5))
    assert r > g and r > b

    # Title strip keeps the card color.
    assert tuple(screen.get_at((constants.WIDTH - 2, 2)))[:3] == constants.CARD


def test_plate_offset_moves_the_ridge(screen) -> None:
    renderer = Renderer(screen)
    renderer.draw(build_frame(0))
    closed = pygame.surfarray.array3d(screen)
    renderer.draw(build_frame(90))
    opened = pygame.surfarray.array3d(screen)

    # Compare only the crust strip, where the ridge halves sit.
    crust_top = renderer.diagram_rect.top
    crust_bottom = crust_top + renderer.crust_rect.height
    assert (closed[:, crust_top:crust_bottom] != opened[:, crust_top:crust_bottom]).any()


def _pixel_at_field(screen, renderer, x_percent: float, y_percent: float):
    local_x, local_y = renderer.field_to_local(x_percent, y_percent)
    left, top = renderer.diagram_rect.topleft
    return tuple(screen.get_at((left + int(local_x), top + int(local_y))))


def test_particles_are_drawn(screen) -> None:
    renderer = Renderer(screen)
    frame = build_frame(0)._replace(flow_indicators=[])

    renderer.draw(frame._replace(particles=[]))
    backdrop = _pixel_at_field(screen, renderer, 40, 65)
    renderer.draw(frame)
    drawn = _pixel_at_field(screen, renderer, 40, 65)

    # The left bottom particle sits at (40%, 65%) in its warm color.
    assert drawn != backdrop
    assert drawn[0] > drawn[2]


def test_flow_indicators_are_drawn(screen) -> None:
    renderer = Renderer(screen)
    frame = build_frame(0)._replace(particles=[])

    renderer.draw(frame._replace(flow_indicators=[]))
    backdrop = _pixel_at_field(screen, renderer, 45, 50)
    renderer.draw(frame)
    drawn = _pixel_at_field(screen, renderer, 45, 50)

    assert drawn != backdrop


def test_legend_and_temperature_scale_are_drawn(screen) -> None:
    renderer = Renderer(screen)
    renderer.draw(build_frame(0))

    swatch = screen.get_at((24, renderer.diagram_rect.bottom + 24))
    assert tuple(swatch)[:3] == constants.LEGEND_ENTRIES[0][0]

    scale = renderer.scale_rect
    assert tuple(screen.get_at((scale.centerx, scale.top)))[:3] == constants.STONE_600
    assert tuple(screen.get_at((scale.centerx, scale.bottom - 1)))[:3] == constants.RED_900


def test_temperature_scale_is_not_redrawn_per_frame(screen, monkeypatch) -> None:
    renderer = Renderer(screen)
    calls = []
    monkeypatch.setattr(renderer_module, "draw_vertical_gradient", lambda *args: calls.append(args))

    renderer.draw(build_frame(0))
    renderer.draw(build_frame(1))
    assert calls == []
