import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import NoReturn, Optional, Sequence

import numpy as np

from boresizer import (
    BoreInputError,
    PackingConfig,
    format_result,
    generate_bore,
    result_to_dict,
    rows_from_json,
)

logger = logging.getLogger(__name__)

_OVERRIDES = {
    "max_iterations": "max_iterations",
    "radius_step": "radius_step_size",
    "angle_step": "angle_step_size",
    "min_enclose_step": "min_enclose_step_size",
    "max_circles": "max_circles",
    "max_diameter": "max_diameter",
}


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _build_config(args: argparse.Namespace) -> PackingConfig:
    config = PackingConfig.from_env()
    overrides = {
        field: getattr(args, option)
        for option, field in _OVERRIDES.items()
        if getattr(args, option) is not None
    }
    if overrides:
        logger.info("Applying command-line overrides: %s", overrides)
        config = replace(config, **overrides)
    return config


def _fail(message: str) -> NoReturn:
    print(f"error: {message}", file=sys.stderr)
    raise SystemExit(1)


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Pack cables into the smallest bore")
    parser.add_argument("path", help="Path to a JSON file with cable rows")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--max-iterations", type=int, help="Cap on enclosure feasibility checks")
    parser.add_argument("--radius-step", type=float, help="Radial step of the placement grid")
    parser.add_argument("--angle-step", type=float, help="Angular step of the placement grid, in degrees")
    parser.add_argument("--min-enclose-step", type=float, help="Smallest bisection step for the enclosure")
    parser.add_argument("--max-circles", type=int, help="Maximum number of cables accepted")
    parser.add_argument("--max-diameter", type=float, help="Maximum cable diameter accepted")
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for cable colors",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON instead of a text report",
    )
    parser.add_argument(
        "--output",
        help="Write the JSON result to the given path",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    try:
        config = _build_config(args)
    except ValueError as exc:
        parser.error(str(exc))

    logger.info("Reading cable rows from %s", args.path)
    try:
        rows = rows_from_json(Path(args.path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        _fail(f"cannot read cable rows from {args.path}: {exc}")

    rng = np.random.default_rng(args.seed) if args.seed is not None else None
    try:
        result = generate_bore(rows, config, rng)
    except BoreInputError as exc:
        _fail(str(exc))

    payload = result_to_dict(result, include_metadata=True) if (args.output or args.json) else None
    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Writing result to %s", output_path)
        output_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    if args.json:
        print(json.dumps(payload, indent=2))
    else:
        print(format_result(result))
        for warning in result.metadata.get("warnings", []):
            print(f"warning: {warning}")


if __name__ == "__main__":
    main(sys.argv[1:])
