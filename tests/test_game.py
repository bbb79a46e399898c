from __future__ import annotations

import logging

import numpy as np
import pytest

from tetris_brain.board import PlacementResult
from tetris_brain.brain import SimpleBrain, SmallBrain
from tetris_brain.game import TOP_SPACE, GameSession, Verb
from tetris_brain.piece import PieceType, catalog_piece, standard_catalog


def _started(**kwargs) -> GameSession:
    session = GameSession(test_mode=True, **kwargs)
    session.start_game()
    return session


def test_start_game_spawns_centred_piece_at_top() -> None:
    session = _started()
    piece = session.current_piece
    assert session.game_on
    assert session.count == 1
    assert piece in standard_catalog()
    assert session.board.height == session.height + TOP_SPACE
    assert session.current_x == (session.width - piece.width) // 2
    assert session.current_y == session.board.height - piece.height
    # The falling piece is a pending placement.
    assert not session.board.committed


def test_test_mode_repeats_piece_sequence() -> None:
    a = GameSession(test_mode=True)
    b = GameSession(test_mode=True)
    a.start_game()
    b.start_game()
    assert [a.pick_next_piece() for _ in range(10)] == [b.pick_next_piece() for _ in range(10)]


def test_left_moves_until_wall() -> None:
    session = _started()
    start_x = session.current_x
    assert session.tick(Verb.LEFT) is PlacementResult.OK
    assert session.current_x == start_x - 1
    for _ in range(start_x - 1):
        session.tick(Verb.LEFT)
    assert session.current_x == 0
    assert session.tick(Verb.LEFT) is PlacementResult.OUT_BOUNDS
    assert session.current_x == 0
    assert session.board.get_column_height(0) > 0


def test_drop_then_down_lands_piece() -> None:
    session = _started()
    piece = session.current_piece
    session.tick(Verb.DROP)
    assert session.current_y == 0
    # The first failed DOWN after a move only cancels the move.
    session.tick(Verb.DOWN)
    assert session.count == 1
    session.tick(Verb.DOWN)
    assert session.count == 2
    assert sum(session.board.get_row_width(r) for r in range(piece.height)) >= len(piece.body)


def test_rotate_recentres_piece() -> None:
    session = _started()
    session.board.undo()
    bar = catalog_piece(PieceType.I)
    assert session.set_current(bar, 4, 10) is PlacementResult.OK
    piece, x, y = session.compute_new_position(Verb.ROTATE)
    assert piece is bar.next_rotation()
    assert (x, y) == (3, 11)
    assert session.tick(Verb.ROTATE) is PlacementResult.OK
    assert session.current_piece is piece


def test_tick_ignored_when_game_not_running() -> None:
    session = GameSession()
    assert session.tick(Verb.LEFT) is None


def test_suggest_move_keeps_falling_piece() -> None:
    session = _started(brain=SimpleBrain())
    before = session.board.grid.tobytes()
    move = session.suggest_move()
    assert move is not None
    assert session.board.grid.tobytes() == before
    assert not session.board.committed


def test_autoplay_keeps_cell_count_consistent() -> None:
    session = GameSession(test_mode=True, brain=SimpleBrain())
    rows = session.play(30)
    assert session.game_on
    assert session.count == 31
    assert rows == session.rows_cleared
    session.board.undo()  # lift the falling piece
    session.board.sanity_check()
    cells = int(np.count_nonzero(session.board.grid))
    assert cells == 4 * 30 - session.board.width * rows
    assert session.board.max_height <= session.height


def test_small_brain_tops_out(caplog) -> None:
    session = GameSession(test_mode=True, brain=SmallBrain())
    with caplog.at_level(logging.INFO, logger="tetris_brain.game"):
        session.play(500)
    assert not session.game_on
    assert session.count < 500
    assert "Game over" in caplog.text


def test_play_needs_a_brain() -> None:
    with pytest.raises(ValueError):
        GameSession().play(5)
