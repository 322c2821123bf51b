#!/usr/bin/env python3
"""
mapoffset - command-line entry point

Reads one feature (``Feature.to_dict`` layout) from a JSON file, offsets it
and writes the new feature as JSON.  Distance and side default to the last
values stored by :class:`SettingsService`.

Usage::

    python -m mapoffset.src.main fence.json fence_offset.json --distance 5 --side left
"""

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

from .models.feature import Feature
from .core.errors import OffsetFailure
from .services.offset_service import create_offset_feature, offset_side_options
from .services.settings_service import SettingsService
from .utils.logging_utils import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mapoffset", description="Create a parallel offset copy of a feature.")
    parser.add_argument("input", help="JSON file holding the source feature")
    parser.add_argument("output", help="where to write the offset feature")
    parser.add_argument("--distance", type=float, default=None, help="offset distance in meters")
    parser.add_argument("--side", default=None, choices=["left", "right", "inward", "outward"])
    parser.add_argument("--log-file", default=None)
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Run one offset from the command line.

    Returns:
        int: Exit code (0 for success, 1 on any failure)
    """
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO, args.log_file)
    logger = logging.getLogger(__name__)

    settings = SettingsService()
    last_distance, last_side = settings.last_offset()
    distance = args.distance if args.distance is not None else last_distance

    try:
        with open(args.input, "r", encoding="utf-8") as fp:
            source = Feature.from_dict(json.load(fp))
    except (OSError, ValueError, KeyError) as e:
        logger.error("Cannot read feature from %s: %s", args.input, e)
        return 1

    side = args.side
    if side is None:
        # The stored side may belong to the other geometry variant.
        options = [s.value for s, _label in offset_side_options(source.geometry)]
        side = last_side if last_side in options else options[0]

    result = create_offset_feature(source, distance, side, settings.offset_config())
    if isinstance(result, OffsetFailure):
        logger.error("Offset failed (%s): %s", result.kind.value, result.message)
        return 1

    try:
        with open(args.output, "w", encoding="utf-8") as fp:
            json.dump(result.to_dict(), fp, indent=2)
    except OSError as e:
        logger.error("Cannot write feature to %s: %s", args.output, e)
        return 1
    settings.set_last_offset(distance, side)
    logger.info("Wrote offset feature to %s", args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
