from __future__ import annotations

from tetris_brain.board import Board
from tetris_brain.piece import PieceType, catalog_piece
from tetris_brain.utils import board_rows, render_board


def test_board_rows_top_row_first() -> None:
    board = Board.from_rows(["##..", ".#.."], height=3)
    assert board_rows(board) == ["....", ".#..", "##.."]


def test_overlay_does_not_touch_board() -> None:
    board = Board.from_rows(["##.."], height=3)
    square = catalog_piece(PieceType.O)
    text = render_board(board, square, column=2, row=0)
    assert text == "....\n..@@\n##@@"
    assert board.get_row_width(0) == 2
    assert board.committed
