"""Bore generation service: rows in, packed and colored result out."""

from __future__ import annotations

import logging
import secrets
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Sequence

from .circles import RandomSource, assign_colors_to_circles, map_rows_to_circles
from .config import PackingConfig, get_packing_config
from .logging_utils import apply_debug_logging
from .model import BoreInputError, BoreResult, NoCablesError, TableRow, TooManyCablesError
from .packing import calculate_minimum_enclose_for_circles
from .printer import result_to_dict

logger = logging.getLogger(__name__)

# No 0/O, 1/I/L: ids are read back by people.
RESULT_ID_ALPHABET = "23456789ABCDEFGHJKMNPQRSTUVWXYZ"
RESULT_ID_LENGTH = 8
NO_FEASIBLE_BORE_MESSAGE = "No feasible bore found within the iteration limit."


def generate_result_id() -> str:
    return "".join(secrets.choice(RESULT_ID_ALPHABET) for _ in range(RESULT_ID_LENGTH))


def generate_bore(
    rows: Sequence[TableRow],
    config: Optional[PackingConfig] = None,
    rng: Optional[RandomSource] = None,
) -> BoreResult:
    """Pack the cables described by ``rows`` into the smallest bore found."""

    cfg = config if config is not None else get_packing_config()
    if not rows:
        raise NoCablesError("No cables entered.")

    circles = map_rows_to_circles(rows, max_diameter=cfg.max_diameter)
    if len(circles) > cfg.max_circles:
        raise TooManyCablesError(len(circles), cfg.max_circles)
    if not circles:
        raise NoCablesError("No valid cables entered.")

    packing = calculate_minimum_enclose_for_circles(circles, cfg)
    cables = assign_colors_to_circles(packing.circles, rng)

    result = BoreResult(
        id=generate_result_id(),
        bore=packing.enclose,
        cables=cables,
        created_at=datetime.now(timezone.utc).isoformat(),
        metadata={
            "success": packing.success,
            "iterations": packing.iterations,
            "warnings": list(packing.warnings),
        },
    )
    logger.info(
        "Generated bore %s: diameter=%.6g cables=%d success=%s",
        result.id,
        result.bore.diameter,
        len(result.cables),
        packing.success,
    )
    return result


def generate_bore_response(
    rows: Sequence[TableRow],
    config: Optional[PackingConfig] = None,
    rng: Optional[RandomSource] = None,
) -> Dict[str, Any]:
    """Run :func:`generate_bore` and wrap the outcome in a response mapping.

    Input errors map to code 422 with their message; anything else is
    logged and reported as a generic 500. A packing that found no feasible
    enclosure is a failure too: code 422, with the unplaced layout and its
    metadata still attached under ``"data"``.
    """

    try:
        result = generate_bore(rows, config, rng)
    except BoreInputError as exc:
        logger.warning("Rejected bore request: %s", exc)
        return {"success": False, "error": {"code": exc.code, "message": str(exc)}}
    except Exception:
        logger.exception("Bore generation failed")
        return {"success": False, "error": {"code": 500, "message": "Internal server error."}}

    data = result_to_dict(result, include_metadata=True)
    if not data["metadata"]["success"]:
        # Unplaced layout, kept for inspection only.
        logger.warning("Bore %s has no feasible layout", result.id)
        return {
            "success": False,
            "error": {"code": BoreInputError.code, "message": NO_FEASIBLE_BORE_MESSAGE},
            "data": data,
        }
    return {"success": True, "data": data}


apply_debug_logging(globals(), logger=logger, skip={"generate_result_id"})


__all__ = [
    "RESULT_ID_ALPHABET",
    "RESULT_ID_LENGTH",
    "NO_FEASIBLE_BORE_MESSAGE",
    "generate_result_id",
    "generate_bore",
    "generate_bore_response",
]
