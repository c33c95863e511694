import pygame
import pytest

from tspviz.app import (
    FAST_SPEED,
    SLOW_SPEED,
    BACKGROUND,
    Visualizer,
    draw_salesman,
)
from tspviz.city import City
from tspviz.panel import to_screen


def _city(x, y):
    return City(x=x, y=y, orig_x=x, orig_y=y)


def _square():
    return [_city(100, 100), _city(700, 100), _city(700, 500), _city(100, 500)]


@pytest.fixture
def font():
    pygame.font.init()
    return pygame.font.Font(None, 18)


def _solved():
    vis = Visualizer(_square(), 800, 600)
    vis.solve()
    return vis


def _at_final(vis):
    vis.current_index = len(vis.steps) - 1
    return vis


def test_solve_ends_with_final_tour():
    vis = _solved()
    assert vis.current_index == 0
    assert vis.steps[-1].is_final_tour
    assert sorted(vis.steps[-1].subtours[0]) == [0, 1, 2, 3]


def test_solve_with_one_city_keeps_no_steps():
    vis = Visualizer([_city(10, 10)])
    vis.solve()
    assert vis.steps == []
    assert vis.current_step is None


def test_next_and_previous_stay_in_range():
    vis = _solved()
    for _ in range(len(vis.steps) + 3):
        vis.next_step()
    assert vis.current_index == len(vis.steps) - 1
    for _ in range(len(vis.steps) + 3):
        vis.previous_step()
    assert vis.current_index == 0


def test_add_city_resets_solution():
    vis = _solved()
    city = vis.add_city(42, 24)
    assert city.name == "City4"
    assert (city.orig_x, city.orig_y) == (42.0, 24.0)
    assert vis.steps == []
    assert vis.current_index == -1
    assert vis.animating is False


def test_toggle_matrix():
    vis = Visualizer()
    vis.toggle_matrix()
    assert vis.show_matrix is False
    vis.toggle_matrix()
    assert vis.show_matrix is True


def test_animation_only_on_final_tour():
    vis = Visualizer(_square())
    vis.toggle_animation()
    assert vis.animating is False
    vis = _at_final(_solved())
    vis.toggle_animation()
    assert vis.animating is True
    vis.toggle_animation()
    assert vis.animating is False


def test_speed_toggles_only_while_animating():
    vis = _at_final(_solved())
    vis.toggle_speed()
    assert vis.animation_speed == SLOW_SPEED
    vis.toggle_animation()
    vis.toggle_speed()
    assert vis.fast_mode is True
    assert vis.animation_speed == FAST_SPEED
    vis.toggle_speed()
    assert vis.animation_speed == SLOW_SPEED


def test_tick_advances_and_wraps_edges():
    vis = _at_final(_solved())
    vis.tick()
    assert vis.salesman_progress == 0.0
    vis.toggle_animation()
    vis.tick()
    assert vis.salesman_progress == pytest.approx(SLOW_SPEED)
    seen = set()
    for _ in range(5000):
        vis.tick()
        seen.add(vis.salesman_edge)
        assert 0 <= vis.salesman_edge < 4
        assert 0.0 <= vis.salesman_progress < 1.0
    assert seen == {0, 1, 2, 3}


def test_salesman_position_starts_at_first_tour_city():
    vis = _at_final(_solved())
    assert vis.salesman_position() is None
    vis.toggle_animation()
    tour = vis.current_step.subtours[0]
    first = vis.cities[tour[0]]
    x, y = vis.salesman_position()
    assert x == pytest.approx(first.x / 800 * 2 - 1)
    assert y == pytest.approx(1 - first.y / 600 * 2)


def test_salesman_position_center_of_window():
    vis = Visualizer([_city(400, 300), _city(800, 600)], 800, 600)
    vis.solve()
    _at_final(vis)
    vis.toggle_animation()
    start = vis.cities[vis.current_step.subtours[0][0]]
    x, y = vis.salesman_position()
    expected = (start.x / 800 * 2 - 1, 1 - start.y / 600 * 2)
    assert (x, y) == pytest.approx(expected)


def test_handle_key_dispatch_and_quit():
    vis = Visualizer(_square())
    assert vis.handle_key("S") is True
    assert vis.current_index == 0
    assert vis.handle_key("m") is True
    assert vis.show_matrix is False
    assert vis.handle_key("q") is False
    assert vis.handle_key("\x1b") is False


def test_resize_changes_positions():
    vis = _at_final(_solved())
    vis.toggle_animation()
    before = vis.salesman_position()
    vis.resize(1600, 1200)
    after = vis.salesman_position()
    assert (vis.width, vis.height) == (1600, 1200)
    assert after != pytest.approx(before)


def test_draw_salesman_covers_its_position():
    surface = pygame.Surface((400, 300))
    surface.fill((0, 0, 0))
    rect = draw_salesman(surface, 0.0, 0.0)
    assert rect.collidepoint(to_screen(0.0, 0.0, 400, 300))
    assert surface.get_at(to_screen(0.0, 0.0, 400, 300))[:3] != (0, 0, 0)


def test_draw_paints_cities(font):
    vis = _solved()
    surface = pygame.Surface((800, 600))
    vis.draw(surface, font)
    assert surface.get_at((10, 10))[:3] == BACKGROUND
    assert surface.get_at((100, 100))[:3] != BACKGROUND
    _at_final(vis)
    vis.toggle_animation()
    vis.draw(surface, font)
    px, py = to_screen(*vis.salesman_position(), 800, 600)
    assert surface.get_at((px, py))[:3] != BACKGROUND