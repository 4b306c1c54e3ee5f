#!/usr/bin/env python3
"""
Lane Packing CLI.

Command-line tools for inspecting the lane layout of an item file
without starting the GUI.

Usage:
    python -m lanechart.cli.lanes pack items.json --min-gap-days 2
    python -m lanechart.cli.lanes pack items.json --json
    python -m lanechart.cli.lanes bounds items.json
"""

import argparse
import json
import logging
import sys

from lanechart.cli.utils import validate_items_path
from lanechart.core.date_math import timeline_bounds, to_iso, total_days
from lanechart.core.item_loader import load_items
from lanechart.core.item_store import ItemStore

# Setup logging
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


def pack(args: argparse.Namespace) -> int:
    """Print the lane assignment for an item file."""
    try:
        store = ItemStore(load_items(args.file))
        lanes = store.lanes(min_gap_days=args.min_gap_days)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to pack lanes: {e}")
        if args.verbose:
            raise
        return 1

    if args.json:
        payload = [[item.to_dict() for item in lane] for lane in lanes]
        print(json.dumps(payload, indent=2))
        return 0

    print(f"✓ {len(store)} items in {len(lanes)} lanes")
    for index, lane in enumerate(lanes):
        print(f"Lane {index}:")
        for item in lane:
            print(f"  {to_iso(item.start)} → {to_iso(item.end)}  {item.name} [{item.id}]")
    return 0


def bounds(args: argparse.Namespace) -> int:
    """Print the padded date range the timeline would render."""
    try:
        items = load_items(args.file)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to read items: {e}")
        if args.verbose:
            raise
        return 1

    origin, last = timeline_bounds(items, padding_days=args.padding_days)
    print(f"Origin: {to_iso(origin)}")
    print(f"End:    {to_iso(last)}")
    print(f"Days:   {total_days(origin, last)}")
    return 0


def main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Inspect Lanechart lane layouts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    pack_parser = subparsers.add_parser("pack", help="Assign items to lanes")
    pack_parser.add_argument("file", help="Path to a JSON item file")
    pack_parser.add_argument(
        "--min-gap-days",
        type=int,
        default=0,
        help="Minimum days between items sharing a lane (default: 0)",
    )
    pack_parser.add_argument(
        "--json", action="store_true", help="Print lanes as JSON"
    )
    pack_parser.set_defaults(func=pack)

    bounds_parser = subparsers.add_parser("bounds", help="Show the rendered range")
    bounds_parser.add_argument("file", help="Path to a JSON item file")
    bounds_parser.add_argument(
        "--padding-days", type=int, default=7, help="Margin days (default: 7)"
    )
    bounds_parser.set_defaults(func=bounds)

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if hasattr(args, "file"):
        if not validate_items_path(args.file):
            sys.exit(1)

    if getattr(args, "min_gap_days", 0) < 0:
        logger.error("--min-gap-days must be >= 0")
        sys.exit(1)

    # Execute command
    if hasattr(args, "func"):
        sys.exit(args.func(args))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
