"""Piece geometry and rotation families.

A :class:`Piece` is one orientation of a polyomino: an immutable tuple of
``(col, row)`` offsets normalised so the lowest column and row are zero, its
bounding box and its *skirt* (the lowest occupied row of every column).  The
skirt lets :meth:`tetris_brain.board.Board.drop_height` find a resting row in
``O(width)`` instead of scanning the board.

Rotations of a shape are generated by repeatedly turning the base shape 90
degrees until it maps back onto itself.  The distinct orientations are stored
as a fixed list shared by every member of the family; ``next_rotation`` is
simply the following index modulo the family size.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Tuple

Cell = Tuple[int, int]  # (col, row)

# Skirt value for a bounding-box column holding no cell.  Larger than any row so
# ``column_height - skirt`` never wins the maximum in ``drop_height``.
SKIRT_EMPTY = sys.maxsize

# A shape is invariant after at most four quarter turns.
MAX_ROTATIONS = 4


@dataclass(frozen=True, eq=False)
class Piece:
    """One rotation of a shape.

    Two pieces compare equal when they occupy the same set of cells, whatever
    order ``body`` lists them in and whichever family they belong to.
    """

    body: Tuple[Cell, ...]
    width: int
    height: int
    skirt: Tuple[int, ...]
    rotation: int = 0
    _family: Optional[List["Piece"]] = field(default=None, repr=False)

    @property
    def cells(self) -> FrozenSet[Cell]:
        return frozenset(self.body)

    @property
    def rotation_count(self) -> int:
        """Number of distinct orientations in this piece's family."""

        return len(self._family) if self._family else 1

    def next_rotation(self) -> "Piece":
        """Return the orientation a quarter turn counter-clockwise from this one.

        Raises:
            ValueError: If the piece was built on its own rather than through
                :func:`build_rotation_family`.
        """

        if not self._family:
            raise ValueError("Piece is not part of a rotation family")
        return self._family[(self.rotation + 1) % len(self._family)]

    def rotations(self) -> Iterator["Piece"]:
        """Yield every orientation once, starting with this one."""

        current = self
        while True:
            yield current
            current = current.next_rotation()
            if current is self:
                return

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Piece):
            return NotImplemented
        return self.cells == other.cells

    def __hash__(self) -> int:
        return hash(self.cells)

    def __str__(self) -> str:
        rows = []
        for row in range(self.height - 1, -1, -1):
            rows.append(
                "".join("#" if (col, row) in self.cells else "." for col in range(self.width))
            )
        return "\n".join(rows)


def parse_points(text: str) -> List[Cell]:
    """Parse whitespace separated ``x y`` pairs into a list of cells.

    ``"0 0 1 0 1 1"`` becomes ``[(0, 0), (1, 0), (1, 1)]``.

    Raises:
        ValueError: If a token is not an integer or a coordinate is unpaired.
    """

    tokens = text.split()
    if len(tokens) % 2:
        raise ValueError(f"Could not parse x,y string: {text!r}")
    try:
        values = [int(token) for token in tokens]
    except ValueError as exc:
        raise ValueError(f"Could not parse x,y string: {text!r}") from exc
    return list(zip(values[0::2], values[1::2]))


def _normalise(cells: Iterable[Cell]) -> Tuple[Cell, ...]:
    # Keep first-seen order; duplicate cells collapse.
    points = list(dict.fromkeys((int(col), int(row)) for col, row in cells))
    if not points:
        raise ValueError("A piece needs at least one cell")
    min_col = min(col for col, _ in points)
    min_row = min(row for _, row in points)
    return tuple((col - min_col, row - min_row) for col, row in points)


def _make_piece(
    body: Tuple[Cell, ...],
    *,
    rotation: int = 0,
    family: Optional[List[Piece]] = None,
) -> Piece:
    width = max(col for col, _ in body) + 1
    height = max(row for _, row in body) + 1
    skirt = [SKIRT_EMPTY] * width
    for col, row in body:
        if row < skirt[col]:
            skirt[col] = row
    return Piece(
        body=body,
        width=width,
        height=height,
        skirt=tuple(skirt),
        rotation=rotation,
        _family=family,
    )


def build(cells: Iterable[Cell]) -> Piece:
    """Return a standalone piece for ``cells``.

    The cells are translated so the minimum column and row are zero.  The
    result has no rotation family; use :func:`build_rotation_family` for
    pieces that will be searched or rotated.
    """

    return _make_piece(_normalise(cells))


def rotate_90(piece: Piece) -> Piece:
    """Return ``piece`` turned a quarter counter-clockwise.

    Each cell ``(x, y)`` is swapped to ``(y, x)`` and its first coordinate
    reflected to ``-y - 1``; the result is translated back to the origin.
    """

    return build((-row - 1, col) for col, row in piece.body)


def build_rotation_family(cells: Iterable[Cell]) -> Piece:
    """Build every distinct orientation of ``cells`` and return the first.

    Rotation stops as soon as a turned shape occupies the same cells as the
    base shape, so symmetric shapes get fewer than four orientations (one for
    the square, two for the bar and the S/Z shapes).
    """

    base = build(cells)
    bodies = [base.body]
    current = base
    for _ in range(MAX_ROTATIONS):
        current = rotate_90(current)
        if current == base:
            break
        bodies.append(current.body)

    family: List[Piece] = []
    for index, body in enumerate(bodies):
        family.append(_make_piece(body, rotation=index, family=family))
    return family[0]


class PieceType(str, Enum):
    """The seven standard tetrominoes, in catalog order."""

    I = "I"
    L = "L"
    J = "J"
    S = "S"
    Z = "Z"
    O = "O"
    T = "T"


# Base orientation of each catalog shape as ``x y`` pairs, y pointing up.
_BASE_SHAPES: Dict[PieceType, str] = {
    PieceType.I: "0 0 0 1 0 2 0 3",
    PieceType.L: "0 0 0 1 0 2 1 0",
    PieceType.J: "0 0 1 0 1 1 1 2",
    PieceType.S: "0 0 1 0 1 1 2 1",
    PieceType.Z: "0 1 1 1 1 0 2 0",
    PieceType.O: "0 0 0 1 1 0 1 1",
    PieceType.T: "0 0 1 0 1 1 2 0",
}


@lru_cache(maxsize=1)
def standard_catalog() -> Tuple[Piece, ...]:
    """Return the entry rotation of each standard tetromino family.

    The catalog is built once and shared; pieces are immutable so callers may
    hold on to them freely.
    """

    return tuple(build_rotation_family(parse_points(_BASE_SHAPES[kind])) for kind in PieceType)


def catalog_piece(kind: PieceType) -> Piece:
    """Return the catalog entry for ``kind``."""

    return standard_catalog()[list(PieceType).index(PieceType(kind))]


__all__ = [
    "Cell",
    "MAX_ROTATIONS",
    "Piece",
    "PieceType",
    "SKIRT_EMPTY",
    "build",
    "build_rotation_family",
    "catalog_piece",
    "parse_points",
    "rotate_90",
    "standard_catalog",
]
