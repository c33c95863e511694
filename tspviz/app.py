"""Interactive window for solving and animating the travelling salesman tour."""

from __future__ import annotations

import argparse
import logging
from typing import Sequence

import pygame

from tspviz.city import City, load_cities
from tspviz.panel import SUBTOUR_COLORS, draw_panel, draw_text, to_screen
from tspviz.solver import TSPStep, solve_with_hungarian, tour_length

logger = logging.getLogger(__name__)

BACKGROUND = (25, 25, 25)
CITY_COLOR = (0, 0, 255)
LABEL_COLOR = (255, 255, 255)
HINT_COLOR = (178, 178, 178)
ACTIVE_COLOR = (0, 255, 0)

SLOW_SPEED = 0.005
FAST_SPEED = 0.03
DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600
FRAME_RATE = 60

INSTRUCTIONS = (
    "N: Next | P: Previous | S: Solve | M: Matrix | A: Animate | F: Fast | Click: Add"
)
CONTROLS = (
    "Controls:",
    "  S - Solve TSP using Hungarian Algorithm",
    "  N - Next step in animation",
    "  P - Previous step",
    "  M - Toggle matrix display",
    "  A - Animate traveling salesman (on final tour)",
    "  Click - Add new city",
    "  Q/ESC - Quit",
)

_SALESMAN_PIXEL = 0.008
_SALESMAN_DOT = 5


def _rgb(r: float, g: float, b: float) -> tuple[int, int, int]:
    return (int(r * 255), int(g * 255), int(b * 255))


_SKIN = _rgb(0.96, 0.80, 0.65)
_BLACK = _rgb(0.0, 0.0, 0.0)
_HAT = _rgb(0.3, 0.2, 0.1)
_SHIRT = _rgb(0.95, 0.95, 0.95)
_TIE = _rgb(0.8, 0.1, 0.1)
_JACKET = _rgb(0.1, 0.15, 0.35)
_CASE = _rgb(0.55, 0.35, 0.20)
_DARK = _rgb(0.1, 0.1, 0.1)
_PANTS = _rgb(0.25, 0.25, 0.30)

# Sprite dots as (colour, offsets in sprite pixels), drawn in this order.
_SALESMAN_SPRITE: tuple[tuple[tuple[int, int, int], tuple[tuple[float, float], ...]], ...] = (
    (_SKIN, ((0, 5), (-1, 5), (1, 5), (0, 4))),
    (_BLACK, ((-0.7, 5), (0.7, 5))),
    (_HAT, ((-1.5, 6), (-0.5, 6), (0.5, 6), (1.5, 6), (0, 7))),
    (_SHIRT, ((0, 3),)),
    (_TIE, ((0, 2), (0, 1))),
    (_SHIRT, ((-1, 2), (1, 2))),
    (_JACKET, ((-2, 2), (2, 2), (-2, 1), (2, 1), (-2, 0), (2, 0))),
    (_JACKET, ((-3, 2), (-3, 1), (-3, 0))),
    (_SKIN, ((-3, -1),)),
    (_JACKET, ((3, 2), (3, 1), (3, 0))),
    (_SKIN, ((3, -1),)),
    (_CASE, ((3.5, -1), (4, -1), (3.5, -2), (4, -2), (3.5, -3), (4, -3))),
    (_DARK, ((3.7, 0),)),
    (_PANTS, ((-1, -1), (1, -1), (-1, -2), (1, -2),
              (-1, -3), (-1, -4), (1, -3), (1, -4))),
    (_DARK, ((-1.5, -5), (-0.5, -5), (0.5, -5), (1.5, -5))),
)


def draw_salesman(surface, x: float, y: float) -> pygame.Rect:
    """Draw the pixel-art salesman at (x, y) in device coordinates.

    Returns the rectangle covering every dot drawn.
    """
    width, height = surface.get_width(), surface.get_height()
    half = _SALESMAN_DOT // 2
    rects = []
    for color, offsets in _SALESMAN_SPRITE:
        for dx, dy in offsets:
            px, py = to_screen(x + dx * _SALESMAN_PIXEL, y + dy * _SALESMAN_PIXEL,
                               width, height)
            rect = pygame.Rect(px - half, py - half, _SALESMAN_DOT, _SALESMAN_DOT)
            surface.fill(color, rect)
            rects.append(rect)
    return rects[0].unionall(rects[1:])


class Visualizer:
    """State of the interactive solver: cities, solver steps and animation."""

    def __init__(self, cities: Sequence[City] | None = None,
                 width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT) -> None:
        self.cities: list[City] = list(cities or [])
        self.steps: list[TSPStep] = []
        self.current_index = -1
        self.show_matrix = True
        self.width = width
        self.height = height
        self.salesman_progress = 0.0
        self.salesman_edge = 0
        self.animating = False
        self.animation_speed = SLOW_SPEED
        self.fast_mode = False

    @property
    def current_step(self) -> TSPStep | None:
        """The step being shown, or None before solving."""
        if 0 <= self.current_index < len(self.steps):
            return self.steps[self.current_index]
        return None

    def _to_device(self, city: City) -> tuple[float, float]:
        return (city.x / self.width * 2.0 - 1.0, 1.0 - city.y / self.height * 2.0)

    def solve(self) -> None:
        """Solve the tour for the current cities and show the first step."""
        if len(self.cities) < 2:
            logger.warning("Need at least 2 cities to solve TSP")
            return
        self.steps = solve_with_hungarian(self.cities)
        self.current_index = 0
        logger.info("Solution complete: %d steps generated", len(self.steps))
        self.animating = False
        self.salesman_progress = 0.0
        self.salesman_edge = 0

    def next_step(self) -> None:
        """Move to the next solver step, if there is one."""
        if self.current_index < len(self.steps) - 1:
            self.current_index += 1
            self.animating = False

    def previous_step(self) -> None:
        """Move to the previous solver step, if there is one."""
        if self.current_index > 0:
            self.current_index -= 1
            self.animating = False

    def toggle_matrix(self) -> None:
        """Show or hide the assignment panel."""
        self.show_matrix = not self.show_matrix

    def toggle_animation(self) -> None:
        """Start or stop the salesman; only possible on the final tour."""
        step = self.current_step
        if step is None or not step.is_final_tour:
            return
        self.animating = not self.animating
        if self.animating:
            self.salesman_progress = 0.0
            self.salesman_edge = 0

    def toggle_speed(self) -> None:
        """Switch between slow and fast travel while animating."""
        if not self.animating:
            return
        self.fast_mode = not self.fast_mode
        self.animation_speed = FAST_SPEED if self.fast_mode else SLOW_SPEED

    def add_city(self, x: float, y: float) -> City:
        """Add a city at pixel coordinates and discard the current solution."""
        city = City(x=float(x), y=float(y), orig_x=float(x), orig_y=float(y),
                    name=f"City{len(self.cities)}")
        self.cities.append(city)
        self.steps = []
        self.current_index = -1
        self.animating = False
        return city

    def resize(self, width: int, height: int) -> None:
        """Record a new window size."""
        self.width = width
        self.height = height

    def tick(self) -> None:
        """Advance the salesman by one frame."""
        step = self.current_step
        if not self.animating or step is None:
            return
        if not step.is_final_tour or not step.subtours:
            return
        self.salesman_progress += self.animation_speed
        if self.salesman_progress >= 1.0:
            self.salesman_progress = 0.0
            self.salesman_edge += 1
            if self.salesman_edge >= len(step.subtours[0]):
                self.salesman_edge = 0

    def handle_key(self, key: str) -> bool:
        """Act on a key press; returns False when the program should quit."""
        action = key.lower()
        if action in ("q", "\x1b"):
            return False
        handlers = {
            "n": self.next_step,
            "p": self.previous_step,
            "s": self.solve,
            "m": self.toggle_matrix,
            "a": self.toggle_animation,
            "f": self.toggle_speed,
        }
        handler = handlers.get(action)
        if handler is not None:
            handler()
        return True

    def salesman_position(self) -> tuple[float, float] | None:
        """The salesman's position in device coordinates, or None if not shown."""
        step = self.current_step
        if step is None or not step.is_final_tour or not self.animating:
            return None
        if not step.subtours or len(step.subtours[0]) <= 1:
            return None
        tour = step.subtours[0]
        from_x, from_y = self._to_device(self.cities[tour[self.salesman_edge]])
        to_x, to_y = self._to_device(self.cities[tour[(self.salesman_edge + 1) % len(tour)]])
        t = self.salesman_progress
        return from_x + (to_x - from_x) * t, from_y + (to_y - from_y) * t

    def draw(self, surface, font) -> None:
        """Render the whole scene onto the surface."""
        surface.fill(BACKGROUND)
        width, height = surface.get_width(), surface.get_height()
        points = [to_screen(*self._to_device(city), width, height) for city in self.cities]

        for px, py in points:
            surface.fill(CITY_COLOR, pygame.Rect(px - 4, py - 4, 8, 8))
        for index, city in enumerate(self.cities):
            nx, ny = self._to_device(city)
            draw_text(surface, font, nx + 0.02, ny + 0.02, str(index), LABEL_COLOR)

        step = self.current_step
        if step is not None:
            line_width = 3 if step.is_final_tour else 2
            for index, subtour in enumerate(step.subtours):
                if len(subtour) < 2:
                    continue
                color = SUBTOUR_COLORS[index % len(SUBTOUR_COLORS)]
                pygame.draw.lines(surface, color, True,
                                  [points[city] for city in subtour], line_width)

            position = self.salesman_position()
            if position is not None:
                draw_salesman(surface, *position)

            info = f"Step {self.current_index + 1}/{len(self.steps)}: {step.description}"
            draw_text(surface, font, -0.95, 0.95, info, LABEL_COLOR)
            if step.is_final_tour:
                length = tour_length(self.cities, step.assignment)
                draw_text(surface, font, -0.95, 0.88, f"Tour Length: {int(length)}",
                          LABEL_COLOR)
                if self.animating:
                    mode = "FAST" if self.fast_mode else "SLOW"
                    draw_text(surface, font, -0.95, 0.81,
                              f"Salesman traveling ({mode}) | A: Stop | F: Toggle Speed",
                              ACTIVE_COLOR)
                else:
                    draw_text(surface, font, -0.95, 0.81, "Press A to animate salesman",
                              HINT_COLOR)

            if self.show_matrix:
                draw_panel(surface, font, self.cities, step)

        draw_text(surface, font, -0.95, -0.95, INSTRUCTIONS, HINT_COLOR)


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tspviz",
        description="Interactive TSP solver: Hungarian algorithm with subtour patching.",
    )
    parser.add_argument("cities", nargs="?", default="cities.json",
                        help="JSON file with the initial cities")
    parser.add_argument("--windowed", action="store_true",
                        help="open a window instead of going full screen")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Open the window and run the event loop."""
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    try:
        cities = load_cities(args.cities)
        print(f"Loaded {len(cities)} cities from {args.cities}")
    except OSError:
        logger.error("Could not open %s", args.cities)
        cities = []

    pygame.init()
    try:
        pygame.display.set_caption("TSP Solver - Hungarian Algorithm + Subtour Patching")
        if args.windowed:
            screen = pygame.display.set_mode((DEFAULT_WIDTH, DEFAULT_HEIGHT), pygame.RESIZABLE)
        else:
            screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
        font = pygame.font.Font(None, 18)
        visualizer = Visualizer(cities, *screen.get_size())

        print("\n=== Interactive TSP Solver ===")
        print("\n".join(CONTROLS))

        clock = pygame.time.Clock()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    key = "\x1b" if event.key == pygame.K_ESCAPE else event.unicode
                    if key and not visualizer.handle_key(key):
                        running = False
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    city = visualizer.add_city(*event.pos)
                    print(f"Added {city.name} at ({city.orig_x:g}, {city.orig_y:g})")
                elif event.type == pygame.VIDEORESIZE:
                    screen = pygame.display.set_mode(event.size, pygame.RESIZABLE)
                    visualizer.resize(*event.size)
            visualizer.tick()
            visualizer.draw(screen, font)
            pygame.display.flip()
            clock.tick(FRAME_RATE)
    finally:
        pygame.quit()
    return 0