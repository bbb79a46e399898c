"""Headless game session driving a :class:`~tetris_brain.board.Board`.

The session owns the board, the falling piece and the piece generator.  The
falling piece always sits in the board as an uncommitted placement: each
:meth:`GameSession.tick` undoes it, tries the new position and puts it back
where it was if the move fails.  When a ``DOWN`` tick fails without the piece
having moved since the last one, the piece has landed: full rows are cleared
and the next piece spawns.

There are no timers or key bindings here; callers decide when to tick.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .board import HEIGHT, WIDTH, Board, PlacementResult
from .brain import Brain, Move
from .piece import Piece, standard_catalog


LOGGER = logging.getLogger(__name__)

# Extra rows above the visible playfield where new pieces spawn.
TOP_SPACE = 4

# Number of pieces played before a test-mode game stops on its own.
TEST_LIMIT = 100


class Verb(Enum):
    """Movement requests understood by :meth:`GameSession.tick`."""

    ROTATE = "rotate"
    LEFT = "left"
    RIGHT = "right"
    DROP = "drop"
    DOWN = "down"


Position = Tuple[Piece, int, int]  # (piece, column, row)


def _half(value: int) -> int:
    # Halve towards zero so re-centring is symmetric for both rotation directions.
    return int(value / 2)


@dataclass
class GameSession:
    """Mutable state for a single game."""

    width: int = WIDTH
    height: int = HEIGHT
    seed: Optional[int] = None
    test_mode: bool = False
    brain: Optional[Brain] = None
    board: Board = field(init=False)
    game_on: bool = field(default=False, init=False)
    count: int = field(default=0, init=False)
    rows_cleared: int = field(default=0, init=False)
    current_piece: Optional[Piece] = field(default=None, init=False)
    current_x: int = field(default=0, init=False)
    current_y: int = field(default=0, init=False)
    moved: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        self.pieces = standard_catalog()
        self.board = Board(self.width, self.height + TOP_SPACE)
        self._random = random.Random(self.seed)

    # ------------------------------------------------------------------
    # Game lifecycle
    # ------------------------------------------------------------------
    def start_game(self) -> None:
        """Clear the board, reset counters and spawn the first piece."""

        self.board = Board(self.width, self.height + TOP_SPACE)
        self.count = 0
        self.rows_cleared = 0
        self.current_piece = None
        self.moved = False
        self.game_on = True
        # Test mode replays the same piece sequence every game.
        self._random = random.Random(0 if self.test_mode else self.seed)
        LOGGER.info("Starting game on a %dx%d board", self.width, self.height)
        self.add_new_piece()

    def stop_game(self) -> None:
        self.game_on = False
        LOGGER.info(
            "Game over after %d pieces, %d rows cleared", self.count, self.rows_cleared
        )

    # ------------------------------------------------------------------
    # Pieces
    # ------------------------------------------------------------------
    def pick_next_piece(self) -> Piece:
        """Return a uniformly random catalog piece."""

        return self.pieces[self._random.randrange(len(self.pieces))]

    def set_current(self, piece: Piece, x: int, y: int) -> PlacementResult:
        """Place ``piece`` as the falling piece, reverting if it does not fit."""

        status = self.board.place(piece, x, y)
        if status.succeeded:
            self.current_piece = piece
            self.current_x = x
            self.current_y = y
        else:
            self.board.undo()
        return status

    def add_new_piece(self) -> None:
        """Commit the board and spawn the next piece centred at the top.

        The game ends when the new piece cannot be placed, or in test mode
        once :data:`TEST_LIMIT` pieces have been played.
        """

        self.count += 1
        if self.test_mode and self.count == TEST_LIMIT + 1:
            self.stop_game()
            return

        self.board.commit()
        self.current_piece = None
        piece = self.pick_next_piece()
        x = (self.board.width - piece.width) // 2
        y = self.board.height - piece.height
        status = self.set_current(piece, x, y)
        if not status.succeeded:
            LOGGER.debug("Spawn blocked with status %s", status.name)
            self.stop_game()

    # ------------------------------------------------------------------
    # Movement
    # ------------------------------------------------------------------
    def compute_new_position(self, verb: Verb) -> Position:
        """Return where ``verb`` would move the falling piece."""

        piece = self.current_piece
        if piece is None:
            raise RuntimeError("No falling piece to move")
        x = self.current_x
        y = self.current_y
        if verb is Verb.LEFT:
            x -= 1
        elif verb is Verb.RIGHT:
            x += 1
        elif verb is Verb.ROTATE:
            rotated = piece.next_rotation()
            x += _half(piece.width - rotated.width)
            y += _half(piece.height - rotated.height)
            piece = rotated
        elif verb is Verb.DOWN:
            y -= 1
        elif verb is Verb.DROP:
            y = self.board.drop_height(piece, x)
        else:
            raise ValueError(f"Bad verb: {verb!r}")
        return piece, x, y

    def tick(self, verb: Verb) -> Optional[PlacementResult]:
        """Apply ``verb`` to the falling piece.

        Returns the placement status of the attempted move, or ``None`` when
        the game is not running.
        """

        if not self.game_on:
            return None

        if self.current_piece is not None:
            self.board.undo()

        status = self.set_current(*self.compute_new_position(verb))
        failed = status >= PlacementResult.OUT_BOUNDS
        if failed and self.current_piece is not None:
            self.board.place(self.current_piece, self.current_x, self.current_y)

        if failed and verb is Verb.DOWN and not self.moved:
            self._land()

        self.moved = not failed and verb is not Verb.DOWN
        return status

    def _land(self) -> None:
        if self.board.clear_rows():
            self.rows_cleared += self.board.last_cleared
        if self.board.max_height > self.height:
            self.stop_game()
        else:
            self.add_new_piece()

    # ------------------------------------------------------------------
    # Brain support
    # ------------------------------------------------------------------
    def suggest_move(self) -> Optional[Move]:
        """Ask the brain where the falling piece should go.

        The falling piece is lifted out of the board for the search and put
        back afterwards.
        """

        if self.brain is None or self.current_piece is None or not self.game_on:
            return None
        self.board.undo()
        try:
            return self.brain.best_move(self.board, self.current_piece, self.height)
        finally:
            self.board.place(self.current_piece, self.current_x, self.current_y)

    def autoplay_step(self) -> bool:
        """Move the falling piece to the brain's choice and land it.

        Returns ``False`` when the game is over or the brain found no move.
        """

        move = self.suggest_move()
        if move is None:
            if self.game_on:
                LOGGER.debug("No placement left for piece %d", self.count)
                self.stop_game()
            return False

        self.board.undo()
        status = self.set_current(move.piece, move.column, move.row)
        if not status.succeeded:
            raise RuntimeError(f"Brain move could not be placed: {status.name}")
        self._land()
        return self.game_on

    def play(self, pieces: int) -> int:
        """Autoplay until ``pieces`` pieces have landed or the game ends.

        Returns the number of rows cleared.
        """

        if self.brain is None:
            raise ValueError("Autoplay needs a brain")
        if not self.game_on:
            self.start_game()
        while self.game_on and self.count <= pieces:
            self.autoplay_step()
        return self.rows_cleared


__all__ = ["GameSession", "TEST_LIMIT", "TOP_SPACE", "Verb"]
