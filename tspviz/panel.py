"""Text drawing and the assignment panel shown beside the map."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import pygame

from tspviz.city import City
from tspviz.solver import Edge, TSPStep

Color = tuple[int, int, int]


def _rgb(r: float, g: float, b: float) -> Color:
    return (int(r * 255), int(g * 255), int(b * 255))


SUBTOUR_COLORS: tuple[Color, ...] = (
    _rgb(0.0, 1.0, 0.0),
    _rgb(1.0, 0.0, 0.0),
    _rgb(1.0, 1.0, 0.0),
    _rgb(1.0, 0.0, 1.0),
    _rgb(0.0, 1.0, 1.0),
)

TITLE_COLOR = _rgb(1.0, 1.0, 0.0)
INFO_COLOR = _rgb(0.8, 0.8, 1.0)
HEADING_COLOR = _rgb(1.0, 1.0, 1.0)
EDGE_COLOR = _rgb(0.7, 0.7, 0.7)
COMPLETE_COLOR = _rgb(0.0, 1.0, 0.0)
PATCHING_COLOR = _rgb(1.0, 0.5, 0.0)

PANEL_X = 0.45
PANEL_Y = 0.35
PANEL_WIDTH = 0.5
PANEL_HEIGHT = 0.8
PANEL_ALPHA = int(0.7 * 255)

MAX_SUBTOUR_ITEMS = 8
MAX_EDGES = 12
EDGES_PER_LINE = 3


@dataclass(frozen=True)
class PanelLine:
    """A line of panel text at a position in normalised device coordinates."""

    text: str
    color: Color
    x: float
    y: float


def to_screen(x: float, y: float, width: int, height: int) -> tuple[int, int]:
    """Map normalised device coordinates (-1..1, y up) to pixel coordinates."""
    px = (x + 1.0) / 2.0 * width
    py = (1.0 - y) / 2.0 * height
    return int(round(px)), int(round(py))


def draw_text(surface, font, x: float, y: float, text: str, color) -> pygame.Rect:
    """Draw text with its baseline starting at (x, y) in device coordinates."""
    px, py = to_screen(x, y, surface.get_width(), surface.get_height())
    rendered = font.render(text, True, color)
    return surface.blit(rendered, (px, py - font.get_ascent()))


def subtour_label(index: int, subtour: Sequence[int]) -> str:
    """Describe a subtour, listing at most its first eight cities."""
    shown = [str(city) for city in subtour[:MAX_SUBTOUR_ITEMS]]
    path = "->".join(shown)
    if len(subtour) > MAX_SUBTOUR_ITEMS:
        path += "->..."
    return f"  Subtour {index} (size {len(subtour)}): {path}"


def _edge_text(cities: Sequence[City], edge: Edge) -> str:
    origin, target = edge
    a, b = cities[origin], cities[target]
    distance = math.hypot(a.orig_x - b.orig_x, a.orig_y - b.orig_y)
    return f"{origin}->{target}({distance:.0f})"


def assignment_lines(cities: Sequence[City], assignment: Sequence[Edge]) -> list[str]:
    """Assignment edges with distances, three per line, at most twelve in all."""
    texts = [_edge_text(cities, edge) for edge in assignment[:MAX_EDGES]]
    lines = [
        " | ".join(texts[start:start + EDGES_PER_LINE])
        for start in range(0, len(texts), EDGES_PER_LINE)
    ]
    if len(assignment) > MAX_EDGES:
        lines.append("...")
    return lines


def panel_lines(cities: Sequence[City], step: TSPStep) -> list[PanelLine]:
    """Lay out the panel's text for one solver step; empty without cities."""
    if not cities:
        return []
    left = PANEL_X + 0.02
    indent = PANEL_X + 0.04
    top = PANEL_Y + PANEL_HEIGHT

    lines = [
        PanelLine(f"Assignment Matrix - Iteration {step.iteration}", TITLE_COLOR,
                  left, top - 0.05)
    ]
    y = top - 0.12
    lines.append(PanelLine(f"Subtours detected: {len(step.subtours)}", INFO_COLOR, left, y))
    y -= 0.06

    for index, subtour in enumerate(step.subtours):
        color = SUBTOUR_COLORS[index % len(SUBTOUR_COLORS)]
        lines.append(PanelLine(subtour_label(index, subtour), color, indent, y))
        y -= 0.05

    y -= 0.03
    lines.append(PanelLine("Assignment Edges:", HEADING_COLOR, left, y))
    y -= 0.05

    for text in assignment_lines(cities, step.assignment):
        lines.append(PanelLine(text, EDGE_COLOR, indent, y))
        y -= 0.04

    y -= 0.03
    if step.is_final_tour:
        lines.append(PanelLine("STATUS: COMPLETE TOUR FOUND!", COMPLETE_COLOR, left, y))
    else:
        lines.append(PanelLine("STATUS: Patching subtours...", PATCHING_COLOR, left, y))
    return lines


def draw_panel(surface, font, cities: Sequence[City], step: TSPStep) -> pygame.Rect | None:
    """Draw the translucent panel and its text; returns the panel's rectangle."""
    if not cities:
        return None
    width, height = surface.get_width(), surface.get_height()
    left, top = to_screen(PANEL_X, PANEL_Y + PANEL_HEIGHT, width, height)
    right, bottom = to_screen(PANEL_X + PANEL_WIDTH, PANEL_Y, width, height)
    rect = pygame.Rect(left, top, right - left, bottom - top)

    background = pygame.Surface(rect.size, pygame.SRCALPHA)
    background.fill((0, 0, 0, PANEL_ALPHA))
    surface.blit(background, rect.topleft)

    for line in panel_lines(cities, step):
        draw_text(surface, font, line.x, line.y, line.text, line.color)
    return rect