"""Command-line entrypoint for peakview."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from peakview.errors import PeakviewError
from peakview.ingest.factory import load_elevation_data
from peakview.orchestrate.artifact import write_dataset_json
from peakview.orchestrate.batch import ANGLE_COUNT, build_dataset, resolve_workers

DEFAULT_OUTPUT_PATH = "static/timpanogos.json"

logger = logging.getLogger("peakview")


def _positive_int(value: str) -> int:
    """Parse a strictly positive integer argument."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer: {value}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {value}")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    """Create and return the top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="peakview",
        description="Peak viewpoint horizon dataset tools.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 0.1.0",
    )

    subparsers = parser.add_subparsers(dest="command")
    generate = subparsers.add_parser(
        "generate",
        help="Build the 360-viewpoint dataset once and write it as a static JSON file.",
    )
    generate.add_argument("--output", default=DEFAULT_OUTPUT_PATH)
    generate.add_argument("--elevation-mode", choices=["mock", "grid"], default=None)
    generate.add_argument("--elevation-path", default=None)
    generate.add_argument("--workers", type=_positive_int, default=None)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI application."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "generate":
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
        try:
            logger.info("Loading elevation data...")
            elevation = load_elevation_data(path=args.elevation_path, mode=args.elevation_mode)
            logger.info("Generating %d viewpoints...", ANGLE_COUNT)
            viewpoints = build_dataset(elevation, workers=resolve_workers(args.workers))
            write_dataset_json(viewpoints, args.output)
        except PeakviewError as exc:
            logger.error("generate failed: %s", exc)
            return 1
        return 0

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
