"""Headless autoplay demo.

Run with: `python -m tetris_brain`

Plays a game where the brain places every piece, then prints the final board
and a short summary.  Pass ``--help`` for the available options.
"""

from __future__ import annotations

import argparse
import logging
import time

from . import GameSession, brain_by_name, render_board
from .board import HEIGHT, WIDTH


LOGGER = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--width", type=int, default=WIDTH, help="Board width in blocks.")
    parser.add_argument("--height", type=int, default=HEIGHT, help="Visible board height in blocks.")
    parser.add_argument("--pieces", type=int, default=200, help="Maximum number of pieces to play.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the piece sequence.")
    parser.add_argument("--brain", default="Simple Brain", help="Brain to play with.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")

    session = GameSession(
        width=args.width,
        height=args.height,
        seed=args.seed,
        brain=brain_by_name(args.brain),
    )
    start = time.perf_counter()
    rows = session.play(args.pieces)
    elapsed = time.perf_counter() - start

    print(render_board(session.board))
    LOGGER.info(
        "%s: %d pieces, %d rows cleared in %.3fs",
        args.brain,
        min(session.count, args.pieces),
        rows,
        elapsed,
    )


if __name__ == "__main__":
    main()
