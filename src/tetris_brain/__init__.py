"""Falling-block board simulation with an exhaustive placement search."""

from .board import Board, BoardConsistencyError, BoardStateError, PlacementResult
from .piece import (
    Piece,
    PieceType,
    build,
    build_rotation_family,
    catalog_piece,
    parse_points,
    rotate_90,
    standard_catalog,
)
from .heuristics import count_holes, inverted_score, simple_score
from .brain import Brain, Move, SimpleBrain, SmallBrain, brain_by_name, create_brains
from .game import GameSession, Verb
from .utils import board_rows, render_board

__all__ = [
    "Board",
    "BoardConsistencyError",
    "BoardStateError",
    "PlacementResult",
    "Piece",
    "PieceType",
    "build",
    "build_rotation_family",
    "catalog_piece",
    "parse_points",
    "rotate_90",
    "standard_catalog",
    "count_holes",
    "inverted_score",
    "simple_score",
    "Brain",
    "Move",
    "SimpleBrain",
    "SmallBrain",
    "brain_by_name",
    "create_brains",
    "GameSession",
    "Verb",
    "board_rows",
    "render_board",
]
