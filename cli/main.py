"""CLI entry point and frame driver for the ASCII water simulation."""

from __future__ import annotations

import argparse
import logging
import sys
import time

from watersim.config import DEFAULT_FRAME_INTERVAL_S, FLOW_MODELS, SimulationConfig
from watersim.io import MapLoadError, load_map
from watersim.logging_config import setup_logging
from watersim.rng import RngStream, fresh_seed, seed_from_text
from watersim.simulation import Simulation

logger = logging.getLogger("watersim.cli")

HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"
CLEAR_SCREEN = "\x1b[2J"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Grid water simulation rendered as ASCII animation")
    parser.add_argument("map", help="Map file: '#' obstacle, space empty, any other glyph full water")
    parser.add_argument("--model", choices=FLOW_MODELS, default="conservative", help="Flow model")
    parser.add_argument("--debug", action="store_true", help="Draw velocity arrows instead of water density")
    parser.add_argument("--frames", type=int, default=0, help="Stop after this many frames (0 = until interrupted)")
    parser.add_argument(
        "--interval",
        type=float,
        default=DEFAULT_FRAME_INTERVAL_S,
        help="Seconds to sleep after each frame",
    )
    parser.add_argument("--seed", default=None, help="Integer or text seed for injection randomness")
    parser.add_argument("--w", type=int, default=None, help="Fixed grid width (default: longest map line)")
    parser.add_argument("--h", type=int, default=None, help="Fixed grid height (default: map line count)")
    parser.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        default="WARNING",
        help="Log level for records written to stderr",
    )
    parser.add_argument("--log-file", default=None, help="Also write log records to this file")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.frames < 0:
        parser.error("--frames must be zero or positive")
    if args.interval < 0:
        parser.error("--interval must be zero or positive")

    setup_logging(getattr(logging, args.log_level), args.log_file)

    try:
        seed = seed_from_text(args.seed) if args.seed is not None else fresh_seed()
    except ValueError as exc:
        parser.error(str(exc))

    try:
        grid = load_map(args.map, width=args.w, height=args.h)
    except MapLoadError as exc:
        parser.error(str(exc))

    config = SimulationConfig(model=args.model)
    sim = Simulation(grid, config=config, rng=RngStream(seed))

    out = sys.stdout
    out.write(HIDE_CURSOR + CLEAR_SCREEN)
    out.write(sim.render(debug=args.debug))
    out.flush()
    try:
        while args.frames == 0 or sim.frame < args.frames:
            sim.step()
            out.write(sim.render(debug=args.debug))
            out.flush()
            time.sleep(args.interval)
    except KeyboardInterrupt:
        logger.info("Interrupted at frame %d", sim.frame)
    finally:
        out.write(SHOW_CURSOR)
        out.flush()

    stats = sim.accounting.stats()
    logger.info(
        "Run ended after %d frames: water=%.2f total_added=%.2f total_decayed=%.2f",
        stats.frame,
        stats.total_water,
        stats.total_added,
        stats.total_decayed,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
