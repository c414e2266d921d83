"""Configuration helpers for the packing engine."""

from __future__ import annotations

import copy
import logging
import math
import os
from dataclasses import dataclass, fields
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITERATIONS = 100
DEFAULT_RADIUS_STEP_SIZE = 0.05
DEFAULT_ANGLE_STEP_SIZE = 1.0
DEFAULT_MIN_ENCLOSE_STEP_SIZE = 0.01
DEFAULT_MAX_CIRCLES = 100
DEFAULT_MAX_DIAMETER = 100.0

_ENV_NAMES = {
    "max_iterations": "MAX_ITERATIONS",
    "radius_step_size": "RADIUS_STEP_SIZE",
    "angle_step_size": "ANGLE_STEP_SIZE",
    "min_enclose_step_size": "MIN_ENCLOSE_STEP_SIZE",
    "max_circles": "MAX_CIRCLES",
    "max_diameter": "MAX_DIAMETER",
}

_INT_FIELDS = {"max_iterations", "max_circles"}


@dataclass
class PackingConfig:
    """Search tuning and input limits.

    ``radius_step_size`` and ``angle_step_size`` control the placement grid,
    ``max_iterations`` caps the number of feasibility checks and
    ``min_enclose_step_size`` is the smallest bisection step before the
    enclosure search is considered converged. ``max_circles`` and
    ``max_diameter`` bound what callers may submit.
    """

    max_iterations: int = DEFAULT_MAX_ITERATIONS
    radius_step_size: float = DEFAULT_RADIUS_STEP_SIZE
    angle_step_size: float = DEFAULT_ANGLE_STEP_SIZE
    min_enclose_step_size: float = DEFAULT_MIN_ENCLOSE_STEP_SIZE
    max_circles: int = DEFAULT_MAX_CIRCLES
    max_diameter: float = DEFAULT_MAX_DIAMETER

    def __post_init__(self) -> None:
        if self.max_iterations < 1:
            raise ValueError("max_iterations must be at least 1")
        for name in ("radius_step_size", "angle_step_size", "min_enclose_step_size", "max_diameter"):
            value = getattr(self, name)
            if not (value > 0 and math.isfinite(value)):
                raise ValueError(f"{name} must be a positive finite number (got {value!r})")
        if self.max_circles < 1:
            raise ValueError("max_circles must be at least 1")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "PackingConfig":
        """Read overrides from ``environ`` (defaults to ``os.environ``).

        Missing, zero, negative and non-numeric values fall back to the
        defaults.
        """

        env = os.environ if environ is None else environ
        values = {}
        for item in fields(cls):
            raw = env.get(_ENV_NAMES[item.name])
            if raw is None:
                continue
            try:
                number = float(raw)
            except ValueError:
                logger.warning("Ignoring non-numeric %s=%r", _ENV_NAMES[item.name], raw)
                continue
            if not number or not math.isfinite(number):
                continue
            if number < 0 or (item.name in _INT_FIELDS and number < 1):
                logger.warning("Ignoring out-of-range %s=%r", _ENV_NAMES[item.name], raw)
                continue
            values[item.name] = int(number) if item.name in _INT_FIELDS else number
        config = cls(**values)
        logger.info("Loaded packing config from environment: %s", config)
        return config


_PACKING_CONFIG = PackingConfig.from_env()


def get_packing_config() -> PackingConfig:
    return copy.deepcopy(_PACKING_CONFIG)


def set_packing_config(config: PackingConfig) -> None:
    global _PACKING_CONFIG
    _PACKING_CONFIG = copy.deepcopy(config)


__all__ = [
    "DEFAULT_MAX_ITERATIONS",
    "DEFAULT_RADIUS_STEP_SIZE",
    "DEFAULT_ANGLE_STEP_SIZE",
    "DEFAULT_MIN_ENCLOSE_STEP_SIZE",
    "DEFAULT_MAX_CIRCLES",
    "DEFAULT_MAX_DIAMETER",
    "PackingConfig",
    "get_packing_config",
    "set_packing_config",
]
