"""Row expansion and presentation colors for circle records."""

from __future__ import annotations

import logging
import math
from typing import Dict, Iterable, List, Optional, Protocol, Sequence

import numpy as np

from .config import get_packing_config
from .logging_utils import apply_debug_logging
from .model import CUSTOM_CABLE, Cable, Circle, DiameterExceededError, TableRow

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    def random(self) -> float: ...


_RNG = np.random.default_rng()


def _row_name_and_diameter(row: TableRow):
    if isinstance(row.selected_cable, Cable):
        return row.selected_cable.name, row.selected_cable.diameter
    return row.custom_name or CUSTOM_CABLE, row.custom_diameter


def map_rows_to_circles(rows: Iterable[TableRow], max_diameter: Optional[float] = None) -> List[Circle]:
    """Expand cable rows into one circle per physical cable.

    Rows with a missing or non-positive diameter are skipped. A diameter
    above ``max_diameter`` aborts the whole conversion with
    :class:`DiameterExceededError`.
    """

    limit = get_packing_config().max_diameter if max_diameter is None else max_diameter
    circles: List[Circle] = []
    skipped = 0

    for row in rows:
        name, diameter = _row_name_and_diameter(row)
        if not name or diameter is None or not diameter > 0:
            skipped += 1
            continue
        if diameter > limit:
            raise DiameterExceededError(diameter, limit)

        template = Circle.from_diameter(name, diameter)
        # Circles are frozen, so repeating the template cannot alias mutable state.
        circles.extend(template for _ in range(max(0, int(row.quantity))))

    logger.info("Mapped rows to %d circle(s), skipped %d row(s)", len(circles), skipped)
    return circles


def generate_random_color(rng: Optional[RandomSource] = None) -> str:
    source = rng if rng is not None else _RNG
    r, g, b = (math.floor(source.random() * 256) for _ in range(3))
    return f"#{r:02x}{g:02x}{b:02x}"


def assign_colors_to_circles(circles: Sequence[Circle], rng: Optional[RandomSource] = None) -> List[Circle]:
    """Return copies of ``circles`` tagged with one random color per name."""

    color_map: Dict[str, str] = {}
    colored: List[Circle] = []
    for circle in circles:
        if circle.name not in color_map:
            color_map[circle.name] = generate_random_color(rng)
        colored.append(circle.with_color(color_map[circle.name]))

    logger.info("Assigned %d color(s) to %d circle(s)", len(color_map), len(colored))
    return colored


apply_debug_logging(globals(), logger=logger)


__all__ = [
    "RandomSource",
    "map_rows_to_circles",
    "generate_random_color",
    "assign_colors_to_circles",
]
