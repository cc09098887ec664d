"""
Command-line entry point: write a moving hyperplane stream to CSV.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from .config import (
    DEFAULT_COUNT,
    DEFAULT_DIMENSIONALITY,
    DEFAULT_MAGNITUDE,
    DEFAULT_NOISE_PERCENTAGE,
    DEFAULT_WEIGHT_UPDATE_COUNT,
    ConfigurationError,
    GeneratorSettings,
    settings_to_config,
)
from .evaluation import label_balance
from .moving_hyperplane import generate_examples

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hyperplane-stream",
        description="Generate a concept-drifting moving hyperplane stream.",
    )
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for reproducible output (random if omitted)")
    parser.add_argument("--count", type=int, default=DEFAULT_COUNT,
                        help="Number of examples to generate")
    parser.add_argument("--dimensions", type=int, default=DEFAULT_DIMENSIONALITY,
                        help="Dimensionality of the examples (>= 3)")
    parser.add_argument("--noise", type=int, default=DEFAULT_NOISE_PERCENTAGE,
                        help="Label noise in percent (0-100)")
    parser.add_argument("--update-count", type=int, default=DEFAULT_WEIGHT_UPDATE_COUNT,
                        help="Number of hyperplane weights moved after each example")
    parser.add_argument("--magnitude", type=float, default=DEFAULT_MAGNITUDE,
                        help="Magnitude of change of the moved weights")
    parser.add_argument("--reference-updates", action="store_true",
                        help="Move every weight each round, as the reference generator does")
    parser.add_argument("--output", type=Path, required=True,
                        help="Destination CSV file")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = GeneratorSettings(
        seed=args.seed if args.seed is not None else 0,
        use_random_seed=args.seed is None,
        example_count=args.count,
        dimensionality=args.dimensions,
        noise_percentage=args.noise,
        weight_update_count=args.update_count,
        magnitude=args.magnitude,
    )

    try:
        config = settings_to_config(settings, update_sampled_only=not args.reference_updates)
    except ConfigurationError as e:
        parser.error(str(e))

    df = generate_examples(config)

    args.output.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(args.output, index_label="Row ID")

    balance = label_balance(df)
    logger.info(
        f"Wrote {len(df)} rows to {args.output} "
        f"(seed={config.seed}, positive={balance['Positive']:.3f})"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
