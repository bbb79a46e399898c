"""Exhaustive placement search ("brain").

:class:`SimpleBrain` tries every rotation of a piece at every column, lets the
piece drop, scores the resulting board and keeps the lowest score.  Each trial
is a ``place``/``undo`` pair on the caller's board, so the board is returned
exactly as it was received.

Enumeration order is part of the contract: rotations in cycle order starting at
the given piece, columns ascending, and a candidate only replaces the current
best when its score is strictly lower.  Ties therefore go to the first
candidate found, which keeps results deterministic.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol

from .board import Board, BoardStateError, PlacementResult
from .heuristics import Scorer, inverted_score, simple_score
from .piece import Piece


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Move:
    """Placement chosen by a brain."""

    column: int
    row: int
    piece: Piece
    score: float


class Brain(Protocol):
    name: str

    def best_move(self, board: Board, piece: Piece, limit_height: int) -> Optional[Move]: ...


class SimpleBrain:
    """Brain scoring every drop position with a pluggable heuristic."""

    name = "Simple Brain"

    def __init__(self, scorer: Scorer = simple_score) -> None:
        self.scorer = scorer

    def rate_board(self, board: Board) -> float:
        """Return the heuristic score of ``board``; lower is better."""

        return self.scorer(board)

    def best_move(self, board: Board, piece: Piece, limit_height: int) -> Optional[Move]:
        """Return the best placement of ``piece`` or ``None`` if nothing fits.

        Placements whose top would rise above ``limit_height`` are skipped.  A
        placement that fills rows is scored after the rows are cleared.

        Raises:
            BoardStateError: If ``board`` has a pending placement.
        """

        if not board.committed:
            raise BoardStateError("best_move() needs a committed board")

        best: Optional[Move] = None
        trials = 0
        for rotation in piece.rotations():
            for column in range(board.width - rotation.width + 1):
                row = board.drop_height(rotation, column)
                if row + rotation.height > limit_height:
                    continue
                trials += 1
                result = board.place(rotation, column, row)
                if result.succeeded:
                    if result is PlacementResult.ROW_FILLED:
                        board.clear_rows()
                    score = self.rate_board(board)
                    if best is None or score < best.score:
                        best = Move(column=column, row=row, piece=rotation, score=score)
                board.undo()

        LOGGER.debug("%s tried %d placements, best=%s", self.name, trials, best)
        return best

    def __str__(self) -> str:
        return self.name


class SmallBrain(SimpleBrain):
    """Brain that prefers the placement the reference heuristic rates worst."""

    name = "Small Brain"

    def __init__(self, scorer: Scorer = inverted_score) -> None:
        super().__init__(scorer)


def create_brains() -> List[SimpleBrain]:
    """Return one instance of every available brain."""

    return [SimpleBrain(), SmallBrain()]


def brain_by_name(name: str) -> SimpleBrain:
    """Return a new brain whose ``name`` matches ``name`` (case-insensitive).

    Raises:
        ValueError: If no brain has that name.
    """

    for brain in create_brains():
        if brain.name.lower() == name.lower():
            return brain
    raise ValueError(f"Unknown brain: {name}")


__all__ = [
    "Brain",
    "Move",
    "SimpleBrain",
    "SmallBrain",
    "brain_by_name",
    "create_brains",
]
