"""Utility helpers for inspecting boards."""

from __future__ import annotations

from typing import List, Optional

from .board import Board
from .piece import Piece


def board_rows(
    board: Board,
    piece: Optional[Piece] = None,
    column: int = 0,
    row: int = 0,
) -> List[str]:
    """Return the board as text rows, top row first.

    Occupied cells are ``#`` and empty ones ``.``.  When ``piece`` is given it
    is overlaid at ``(column, row)`` with ``@`` without touching the board,
    which is handy for showing a suggested move.
    """

    overlay = set()
    if piece is not None:
        overlay = {(column + dc, row + dr) for dc, dr in piece.body}
    lines: List[str] = []
    for r in range(board.height - 1, -1, -1):
        cells = []
        for c in range(board.width):
            if (c, r) in overlay:
                cells.append("@")
            elif board.get_grid(c, r):
                cells.append("#")
            else:
                cells.append(".")
        lines.append("".join(cells))
    return lines


def render_board(
    board: Board,
    piece: Optional[Piece] = None,
    column: int = 0,
    row: int = 0,
) -> str:
    """Return :func:`board_rows` joined into a single string."""

    return "\n".join(board_rows(board, piece, column, row))
