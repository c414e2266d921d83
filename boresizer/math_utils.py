from __future__ import annotations

import math
from typing import Tuple

from .model import Point

FLOAT64_EQUALITY_THRESHOLD = 1e-9


def almost_equal(a: float, b: float) -> bool:
    """Return ``True`` when ``a`` and ``b`` agree to nine decimal places."""

    return abs(a - b) <= FLOAT64_EQUALITY_THRESHOLD


def polar_to_cartesian(angle: float, radius: float) -> Tuple[float, float]:
    """Convert ``angle`` (degrees) and ``radius`` into Cartesian ``(x, y)``."""

    theta = math.radians(angle)
    return radius * math.cos(theta), radius * math.sin(theta)


def distance(p0: Point, p1: Point) -> float:
    return math.hypot(p1.x - p0.x, p1.y - p0.y)


__all__ = [
    "FLOAT64_EQUALITY_THRESHOLD",
    "almost_equal",
    "polar_to_cartesian",
    "distance",
]
