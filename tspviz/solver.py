"""TSP solving by repeated assignment with subtour patching."""

from __future__ import annotations

import logging
import math
import sys
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np
from scipy.optimize import linear_sum_assignment

from tspviz.city import City

logger = logging.getLogger(__name__)

INF = sys.float_info.max / 2.0
MAX_ITERATIONS = 100

Edge = tuple[int, int]


@dataclass
class TSPStep:
    """One iteration of the solver, kept for step-by-step display."""

    assignment: list[Edge] = field(default_factory=list)
    subtours: list[list[int]] = field(default_factory=list)
    description: str = ""
    iteration: int = 0
    is_final_tour: bool = False


def _distance(a: City, b: City) -> float:
    return math.hypot(a.orig_x - b.orig_x, a.orig_y - b.orig_y)


def build_distance_matrix(cities: Sequence[City]) -> np.ndarray:
    """Pairwise distances of original coordinates; the diagonal is forbidden."""
    n = len(cities)
    matrix = np.zeros((n, n), dtype=float)
    for i, a in enumerate(cities):
        for j, b in enumerate(cities):
            matrix[i, j] = INF if i == j else _distance(a, b)
    return matrix


def solve_assignment(cost_matrix) -> list[Edge]:
    """Return the minimum-cost assignment as (row, column) pairs in row order.

    Entries at or above ``INF`` are avoided unless no other choice exists.
    """
    costs = np.array(cost_matrix, dtype=float)
    if costs.size == 0:
        return []
    forbidden = costs >= INF
    finite = costs[~forbidden]
    n = costs.shape[0]
    big = float(np.abs(finite).max()) * 2 * n + 1.0 if finite.size else 1.0
    costs[forbidden] = big
    rows, cols = linear_sum_assignment(costs)
    return sorted((int(r), int(c)) for r, c in zip(rows, cols))


def find_subtours(assignment: Sequence[Edge], n: int) -> list[list[int]]:
    """Split an assignment into the cycles it forms."""
    successor: dict[int, int] = dict(assignment)
    visited = [False] * n
    subtours: list[list[int]] = []
    for start in range(n):
        if visited[start]:
            continue
        cycle = []
        current = start
        while not visited[current]:
            visited[current] = True
            cycle.append(current)
            if current not in successor:
                raise ValueError(f"broken assignment chain at city {current}")
            current = successor[current]
        subtours.append(cycle)
    return subtours


def forbid_subtour_edges(cost_matrix: np.ndarray, subtours, min_size: int) -> None:
    """Forbid the first edge of every subtour shorter than ``min_size``."""
    for subtour in subtours:
        if len(subtour) < min_size:
            origin = subtour[0]
            target = subtour[1 % len(subtour)]
            cost_matrix[origin, target] = INF
            logger.debug(
                "Forbidding edge: %d -> %d (subtour size: %d)",
                origin,
                target,
                len(subtour),
            )


def tour_length(cities: Sequence[City], assignment: Sequence[Edge]) -> float:
    """Total length of the assignment's edges."""
    return sum(_distance(cities[a], cities[b]) for a, b in assignment)


def solve_with_hungarian(cities: Sequence[City]) -> list[TSPStep]:
    """Solve the tour, recording every iteration until a single cycle appears."""
    n = len(cities)
    if n < 2:
        raise ValueError("need at least 2 cities for TSP")

    logger.info("Starting Hungarian TSP solver with %d cities", n)
    cost_matrix = build_distance_matrix(cities)
    steps: list[TSPStep] = []

    for iteration in range(MAX_ITERATIONS):
        assignment = solve_assignment(cost_matrix)
        subtours = find_subtours(assignment, n)
        logger.debug("Iteration %d: %d subtour(s) %s", iteration, len(subtours), subtours)

        final = len(subtours) == 1 and len(subtours[0]) == n
        description = (
            "Final Tour Found! (Single Hamiltonian Cycle)"
            if final
            else f"Iteration {iteration}: Found {len(subtours)} subtours"
        )
        steps.append(
            TSPStep(
                assignment=assignment,
                subtours=subtours,
                description=description,
                iteration=iteration,
                is_final_tour=final,
            )
        )
        if final:
            logger.info("Tour found in iteration %d, length %f",
                        iteration, tour_length(cities, assignment))
            break
        forbid_subtour_edges(cost_matrix, subtours, n)
    else:
        logger.warning("Reached maximum iterations without finding tour")

    return steps