"""Minimum enclosing circle search for a set of cable circles.

Circles are placed largest first on a discrete polar grid inside a candidate
enclosure, and the enclosure diameter is tuned by a bounded binary search.
The result is a heuristic: it is always a valid packing, not necessarily the
tightest one.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .config import PackingConfig, get_packing_config
from .logging_utils import apply_debug_logging
from .math_utils import FLOAT64_EQUALITY_THRESHOLD, polar_to_cartesian
from .model import ENCLOSE_NAME, Circle, EmptyCircleSetError, PackingResult

logger = logging.getLogger(__name__)


def sort_circles(circles: Sequence[Circle]) -> List[Circle]:
    """Return a new list ordered from largest to smallest radius."""

    return sorted(circles, key=lambda circle: circle.radius, reverse=True)


def create_enclose(diameter: float, radius: float) -> Circle:
    return Circle(name=ENCLOSE_NAME, diameter=diameter, radius=radius, color="")


def _overlaps(xs: np.ndarray, ys: np.ndarray, circle: Circle, placed: Sequence[Circle]) -> np.ndarray:
    """For each candidate center, whether ``circle`` there overlaps any of ``placed``.

    Pairs whose center distance is within ``FLOAT64_EQUALITY_THRESHOLD`` of the
    radius sum are tangent, not overlapping.
    """

    if not placed:
        return np.zeros(len(xs), dtype=bool)
    px = np.array([c.coordinates.x for c in placed])
    py = np.array([c.coordinates.y for c in placed])
    radii = np.array([c.radius for c in placed]) + circle.radius
    dist = np.hypot(xs[:, None] - px[None, :], ys[:, None] - py[None, :])
    clash = (radii > dist) & (np.abs(dist - radii) > FLOAT64_EQUALITY_THRESHOLD)
    return clash.any(axis=1)


def circle_position_is_valid(circles: Sequence[Circle], index: int) -> bool:
    """Check ``circles[index]`` against every circle placed before it."""

    circle = circles[index]
    xs = np.array([circle.coordinates.x])
    ys = np.array([circle.coordinates.y])
    return not bool(_overlaps(xs, ys, circle, circles[:index])[0])


@lru_cache(maxsize=16)
def _unit_ring(angle_step: float) -> Tuple[np.ndarray, np.ndarray]:
    angles: List[float] = []
    angle = 0.0
    while angle <= 360.0:
        angles.append(angle)
        angle += angle_step
    unit = [polar_to_cartesian(a, 1.0) for a in angles]
    cos = np.array([u[0] for u in unit])
    sin = np.array([u[1] for u in unit])
    cos.setflags(write=False)
    sin.setflags(write=False)
    return cos, sin


def _radius_candidates(start: float, step: float) -> List[float]:
    radii: List[float] = []
    radius = start
    while radius >= 0:
        radii.append(radius)
        radius -= step
    return radii


def place_circle(
    circles: List[Circle],
    index: int,
    enclose_radius: float,
    config: PackingConfig,
) -> bool:
    """Place ``circles[index]`` at the first collision-free grid position.

    Candidate distances from the center run from the outermost feasible ring
    inwards; on each ring the angle increases from 0 to 360 degrees. The
    chosen position is written back into ``circles[index]``. When nothing
    fits, the circle is left at the last position tried and ``False`` is
    returned.
    """

    circle = circles[index]
    cos, sin = _unit_ring(float(config.angle_step_size))

    placed = circles[:index]

    for ring in _radius_candidates(enclose_radius - circle.radius, config.radius_step_size):
        xs = ring * cos
        ys = ring * sin
        free = np.flatnonzero(~_overlaps(xs, ys, circle, placed))
        if free.size:
            k = int(free[0])
            circles[index] = circle.with_coordinates(xs[k], ys[k])
            return True
        circles[index] = circle.with_coordinates(xs[-1], ys[-1])

    return False


def check_enclose(
    enclose_diameter: float,
    circles: Sequence[Circle],
    config: PackingConfig,
) -> Tuple[List[Circle], bool]:
    """Try to pack every circle inside an enclosure of ``enclose_diameter``.

    Works on a fresh list so ``circles`` is never modified. The returned list
    is only a valid packing when the flag is ``True``.
    """

    packing = list(circles)
    enclose_radius = enclose_diameter / 2.0
    for index in range(len(packing)):
        if not place_circle(packing, index, enclose_radius, config):
            return packing, False
    return packing, True


def find_optimal_enclose_size(
    circles: Sequence[Circle],
    config: Optional[PackingConfig] = None,
) -> PackingResult:
    """Binary search the smallest enclosure diameter that packs ``circles``.

    ``circles`` is expected largest first; its first element seeds the search
    at twice its diameter. The search grows or shrinks by that diameter until
    both a feasible and an infeasible diameter are known, then bisects until
    the step would drop below ``min_enclose_step_size`` or the iteration
    budget runs out. The last feasible packing is returned either way.
    """

    if not circles:
        raise EmptyCircleSetError("cannot find an enclosure for an empty circle set")

    cfg = config if config is not None else get_packing_config()
    best_packing: List[Circle] = list(circles)
    lower_bound = -1.0
    upper_bound = -1.0

    largest_diameter = circles[0].diameter
    diameter = largest_diameter * 2.0
    last_tried = diameter
    iterations = 0

    logger.info(
        "Searching enclosure for %d circle(s), largest diameter=%.6g, max_iterations=%d",
        len(circles),
        largest_diameter,
        cfg.max_iterations,
    )

    while iterations < cfg.max_iterations:
        packing, feasible = check_enclose(diameter, circles, cfg)
        last_tried = diameter
        iterations += 1
        logger.info("Iteration %d: diameter=%.6g feasible=%s", iterations, diameter, feasible)

        if feasible:
            upper_bound = diameter
            best_packing = packing
        else:
            lower_bound = diameter

        if upper_bound < 0:
            diameter += largest_diameter
        elif lower_bound < 0:
            diameter -= largest_diameter
        else:
            step = max((upper_bound - lower_bound) / 2.0, cfg.min_enclose_step_size)
            next_diameter = lower_bound + step
            if next_diameter >= upper_bound:
                logger.info("Enclosure search converged after %d iteration(s)", iterations)
                break
            diameter = next_diameter

    if upper_bound < 0:
        message = f"no feasible enclosure found within {cfg.max_iterations} iteration(s)"
        logger.warning("%s; returning unplaced circles at diameter=%.6g", message, last_tried)
        return PackingResult(
            enclose=create_enclose(last_tried, last_tried / 2.0),
            circles=best_packing,
            success=False,
            iterations=iterations,
            warnings=[message],
        )

    logger.info("Best enclosure diameter=%.6g after %d iteration(s)", upper_bound, iterations)
    return PackingResult(
        enclose=create_enclose(upper_bound, upper_bound / 2.0),
        circles=best_packing,
        success=True,
        iterations=iterations,
    )


def calculate_minimum_enclose_for_circles(
    circles: Sequence[Circle],
    config: Optional[PackingConfig] = None,
) -> PackingResult:
    return find_optimal_enclose_size(sort_circles(circles), config)


apply_debug_logging(
    globals(),
    logger=logger,
    skip={"circle_position_is_valid", "place_circle", "check_enclose"},
)


__all__ = [
    "sort_circles",
    "create_enclose",
    "circle_position_is_valid",
    "place_circle",
    "check_enclose",
    "find_optimal_enclose_size",
    "calculate_minimum_enclose_for_circles",
]
