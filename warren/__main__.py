"""Command line entry point: ``python -m warren``.

Generates one dungeon, prints it as ASCII together with a summary, and
optionally saves it as a PNG.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import asdict

from warren import config
from warren.environment.generators.pipeline import generate_dungeon
from warren.types import RandomSeed
from warren.util.coordinates import Box
from warren.util.rng import RNGProvider
from warren.view.render import ImagePixelSink, render_grid

logger = logging.getLogger(__name__)


def _parse_seed(value: str) -> RandomSeed:
    """Integers are used as-is so `--seed 42` and `seed=42` give the same map."""
    try:
        return int(value)
    except ValueError:
        return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="warren", description="Generate a quadtree + maze dungeon"
    )
    parser.add_argument(
        "--size",
        type=int,
        default=config.DEFAULT_DUNGEON_SIZE,
        help=f"Side length of the square map, must be even (default: "
        f"{config.DEFAULT_DUNGEON_SIZE})",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=config.QUADTREE_MAX_DEPTH,
        help=f"Quadtree depth limit (default: {config.QUADTREE_MAX_DEPTH})",
    )
    parser.add_argument("--seed", type=_parse_seed, help="Master random seed")
    parser.add_argument("--png", type=str, help="Save the dungeon as a PNG here")
    parser.add_argument(
        "--leaves",
        type=str,
        help="Save the quadtree leaves and rooms as a PNG here",
    )
    parser.add_argument(
        "--scale",
        type=int,
        default=config.PNG_SCALE,
        help=f"Pixels per tile in the PNG (default: {config.PNG_SCALE})",
    )
    parser.add_argument(
        "--no-ascii", action="store_true", help="Don't print the ASCII map"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        bounds = Box.from_size(args.size, args.size)
    except ValueError as e:
        parser.error(str(e))
    if args.depth < 0:
        parser.error(f"--depth must be >= 0, got {args.depth}")
    if args.scale < 1:
        parser.error(f"--scale must be >= 1, got {args.scale}")

    dungeon = generate_dungeon(bounds=bounds, max_depth=args.depth, seed=args.seed)

    if not args.no_ascii:
        print(dungeon.grid.to_ascii())
        print()

    print(f"seed: {dungeon.seed!r}")
    for name, value in asdict(dungeon.stats).items():
        print(f"{name}: {value}")

    if args.png:
        render_grid(dungeon.grid, args.scale).save(args.png)
        logger.info(f"Saved PNG to {args.png}")
        print(f"png: {args.png}")

    if args.leaves and dungeon.tree is not None:
        size = bounds.size()
        sink = ImagePixelSink(size.x, size.y)
        colors = RNGProvider(dungeon.seed).get("render.colors")
        dungeon.tree.draw_limits(sink, colors)
        dungeon.tree.draw_rooms(sink, colors)
        sink.save(args.leaves, args.scale)
        print(f"leaves: {args.leaves}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
