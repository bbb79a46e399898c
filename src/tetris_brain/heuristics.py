"""Board scoring strategies for the move search.

A scorer is any callable taking a :class:`~tetris_brain.board.Board` and
returning a number where lower means a better board.  The search only
compares scores, so their range is irrelevant.  :func:`simple_score` is the
reference linear heuristic; :func:`inverted_score` flips it so a brain using
it picks the worst placement it can find.
"""

from __future__ import annotations

from typing import Protocol

from .board import Board


# Weights of the reference heuristic.
MAX_HEIGHT_WEIGHT = 8.0
AVERAGE_HEIGHT_WEIGHT = 40.0
HOLE_WEIGHT = 1.25

# Offset used by :func:`inverted_score`; larger than any realistic simple score.
INVERTED_SCORE_BASE = 10000.0


class Scorer(Protocol):
    def __call__(self, board: Board) -> float: ...


def count_holes(board: Board) -> int:
    """Return the number of empty cells lying below the top of their column.

    The topmost occupied cell of a column is skipped, so the scan starts at
    ``column_height - 2``.
    """

    holes = 0
    for col in range(board.width):
        row = board.get_column_height(col) - 2
        while row >= 0:
            if not board.get_grid(col, row):
                holes += 1
            row -= 1
    return holes


def average_height(board: Board) -> float:
    return int(board.column_heights.sum()) / board.width


def simple_score(board: Board) -> float:
    """Reference heuristic: ``8*max_height + 40*average_height + 1.25*holes``."""

    return (
        MAX_HEIGHT_WEIGHT * board.max_height
        + AVERAGE_HEIGHT_WEIGHT * average_height(board)
        + HOLE_WEIGHT * count_holes(board)
    )


def inverted_score(board: Board) -> float:
    return INVERTED_SCORE_BASE - simple_score(board)


__all__ = [
    "Scorer",
    "average_height",
    "count_holes",
    "inverted_score",
    "simple_score",
]
