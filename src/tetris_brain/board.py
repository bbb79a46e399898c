"""Board representation with incremental indices and a one-level undo.

The board is a NumPy boolean grid indexed ``grid[row, col]`` with row ``0`` at
the bottom.  Alongside the grid it keeps three derived indices that the search
code reads constantly:

``row_widths``
    number of occupied cells in every row,
``column_heights``
    one plus the highest occupied row of every column (``0`` when empty),
``max_height``
    the tallest column.

``place`` updates these per written cell and ``clear_rows`` compacts the grid
in a single pass, so neither needs a full rescan.  Before every ``place`` the
board records a :class:`Snapshot`; ``undo`` restores it and ``commit`` accepts
the current state as the new baseline.  Only one level of undo exists: calling
``place`` twice without ``undo``/``commit`` in between raises
:class:`BoardStateError`.

``place`` on its own is not transactional.  A ``BAD`` placement leaves the
cells written before the collision in the grid; ``place`` followed by ``undo``
is the transaction.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Sequence, Union

import numpy as np
from numpy.typing import NDArray

from .piece import Piece


# Dimensions of the standard playfield.
WIDTH = 10
HEIGHT = 20

Grid = NDArray[np.bool_]
Counts = NDArray[np.int32]


class BoardStateError(RuntimeError):
    """Raised when the board is driven outside its committed/uncommitted protocol."""


class BoardConsistencyError(AssertionError):
    """Raised by :meth:`Board.sanity_check` when an index disagrees with the grid."""


class PlacementResult(IntEnum):
    """Outcome of :meth:`Board.place`, ordered by severity.

    ``result <= PlacementResult.ROW_FILLED`` means the piece was placed.
    """

    OK = 0
    ROW_FILLED = 1
    OUT_BOUNDS = 2
    BAD = 3

    @property
    def succeeded(self) -> bool:
        return self <= PlacementResult.ROW_FILLED


@dataclass(frozen=True)
class Snapshot:
    """Copy of the board state taken at ``place`` time."""

    grid: Grid
    row_widths: Counts
    column_heights: Counts
    max_height: int


class Board:
    """Playfield holding the occupied cells."""

    def __init__(self, width: int = WIDTH, height: int = HEIGHT, *, debug: bool = False) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Board dimensions must be positive, got {width}x{height}")
        self._width = int(width)
        self._height = int(height)
        self.debug = debug
        self.grid: Grid = np.zeros((self._height, self._width), dtype=np.bool_)
        self.row_widths: Counts = np.zeros(self._height, dtype=np.int32)
        self.column_heights: Counts = np.zeros(self._width, dtype=np.int32)
        self._max_height = 0
        self._committed = True
        self._snapshot: Snapshot | None = None
        self.last_cleared = 0

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[Union[str, Sequence[int]]],
        width: int | None = None,
        height: int | None = None,
        *,
        debug: bool = False,
    ) -> "Board":
        """Build a committed board from ``rows`` listed bottom row first.

        Each row is either a string (``#`` occupied, anything else empty) or a
        sequence of truthy/falsy values.  Rows above ``len(rows)`` are empty.
        This exists for tests and debugging that need specific board states.
        """

        parsed = [[ch == "#" for ch in row] if isinstance(row, str) else [bool(v) for v in row] for row in rows]
        if width is None:
            width = max((len(row) for row in parsed), default=WIDTH)
        if height is None:
            height = max(len(parsed), 1)
        if len(parsed) > height:
            raise ValueError("More rows than the board height")
        board = cls(width, height, debug=debug)
        for r, row in enumerate(parsed):
            if len(row) != width:
                raise ValueError(f"Row {r} has {len(row)} cells, expected {width}")
            board.grid[r, :] = row
        board._recompute_indices()
        return board

    def copy(self) -> "Board":
        """Return an independent committed copy of the current state."""

        if not self._committed:
            raise BoardStateError("Cannot copy a board with a pending placement")
        clone = Board(self._width, self._height, debug=self.debug)
        clone.grid = self.grid.copy()
        clone.row_widths = self.row_widths.copy()
        clone.column_heights = self.column_heights.copy()
        clone._max_height = self._max_height
        return clone

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def max_height(self) -> int:
        return self._max_height

    @property
    def committed(self) -> bool:
        return self._committed

    def get_width(self) -> int:
        return self._width

    def get_height(self) -> int:
        return self._height

    def get_max_height(self) -> int:
        return self._max_height

    def get_column_height(self, col: int) -> int:
        """Return one plus the highest occupied row of ``col``.

        Raises:
            IndexError: If ``col`` is outside the board.
        """

        if 0 <= col < self._width:
            return int(self.column_heights[col])
        raise IndexError("Column out of bounds")

    def get_row_width(self, row: int) -> int:
        """Return the number of occupied cells in ``row``.

        Raises:
            IndexError: If ``row`` is outside the board.
        """

        if 0 <= row < self._height:
            return int(self.row_widths[row])
        raise IndexError("Row out of bounds")

    def get_grid(self, col: int, row: int) -> bool:
        """Return ``True`` if the cell at ``(col, row)`` is occupied.

        Any coordinates outside the board are treated as occupied so geometry
        code never needs to special-case the walls and floor.
        """

        if 0 <= row < self._height and 0 <= col < self._width:
            return bool(self.grid[row, col])
        return True

    def grid_view(self) -> Grid:
        """Return a read-only view of the occupancy grid."""

        view = self.grid.view()
        view.setflags(write=False)
        return view

    def drop_height(self, piece: Piece, column: int) -> int:
        """Return the row where ``piece`` comes to rest when dropped at ``column``.

        Uses the piece skirt against the column heights, so the cost is the
        piece width rather than the board area.

        Raises:
            IndexError: If the piece would not fit horizontally at ``column``.
        """

        if column < 0 or column + piece.width > self._width:
            raise IndexError("Piece does not fit at this column")
        row = 0
        for i, lowest in enumerate(piece.skirt):
            candidate = int(self.column_heights[column + i]) - lowest
            if candidate > row:
                row = candidate
        return row

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def place(self, piece: Piece, column: int, row: int) -> PlacementResult:
        """Write ``piece`` with its lower-left corner at ``(column, row)``.

        The board must be committed.  It is always left uncommitted afterwards,
        even when the result is ``OUT_BOUNDS``, so callers follow up with
        :meth:`undo` or :meth:`commit`.

        Raises:
            BoardStateError: If a previous placement is still pending.
        """

        if not self._committed:
            raise BoardStateError("place() called on an uncommitted board")

        self._snapshot = Snapshot(
            grid=self.grid.copy(),
            row_widths=self.row_widths.copy(),
            column_heights=self.column_heights.copy(),
            max_height=self._max_height,
        )
        self._committed = False

        if (
            column < 0
            or row < 0
            or column + piece.width > self._width
            or row + piece.height > self._height
        ):
            return PlacementResult.OUT_BOUNDS

        for dc, dr in piece.body:
            col = column + dc
            r = row + dr
            if self.grid[r, col]:
                return PlacementResult.BAD
            self.grid[r, col] = True
            self.row_widths[r] += 1
            if r + 1 > self.column_heights[col]:
                self.column_heights[col] = r + 1
            if r + 1 > self._max_height:
                self._max_height = r + 1

        result = PlacementResult.OK
        for r in range(row, row + piece.height):
            if self.row_widths[r] == self._width:
                result = PlacementResult.ROW_FILLED
                break

        if self.debug:
            self.sanity_check()
        return result

    def clear_rows(self) -> bool:
        """Remove every full row, moving the rows above it down.

        Rows are compacted in one upward pass: full rows are skipped and each
        surviving row is copied into the next free slot.  Returns ``True`` if
        at least one row was removed.
        """

        width = self._width
        to_row = -1
        for r in range(self._max_height):
            if self.row_widths[r] == width:
                to_row = r
                break
        if to_row == -1:
            self.last_cleared = 0
            return False

        cleared = 0
        for from_row in range(to_row, self._max_height):
            if self.row_widths[from_row] == width:
                cleared += 1
                continue
            self.grid[to_row] = self.grid[from_row]
            self.row_widths[to_row] = self.row_widths[from_row]
            to_row += 1

        self.grid[to_row:] = False
        self.row_widths[to_row:] = 0

        for col in range(width):
            height = int(self.column_heights[col])
            while height > 0 and not self.grid[height - 1, col]:
                height -= 1
            self.column_heights[col] = height

        self._max_height -= cleared
        self.last_cleared = cleared

        if self.debug:
            self.sanity_check()
        return True

    def undo(self) -> None:
        """Restore the state captured by the last :meth:`place`.

        Does nothing when the board is already committed.
        """

        if self._committed:
            return
        snapshot = self._snapshot
        assert snapshot is not None
        self.grid = snapshot.grid
        self.row_widths = snapshot.row_widths
        self.column_heights = snapshot.column_heights
        self._max_height = snapshot.max_height
        self._snapshot = None
        self._committed = True
        if self.debug:
            self.sanity_check()

    def commit(self) -> None:
        """Accept the current state as the new undo baseline."""

        self._committed = True
        self._snapshot = None

    # ------------------------------------------------------------------
    # Consistency
    # ------------------------------------------------------------------
    def sanity_check(self) -> None:
        """Recompute every index from the grid and compare.

        Raises:
            BoardConsistencyError: If any stored index disagrees with the grid.
        """

        if self.grid.shape != (self._height, self._width):
            raise BoardConsistencyError("Grid shape does not match board dimensions")

        widths = np.count_nonzero(self.grid, axis=1)
        if not np.array_equal(widths, self.row_widths):
            raise BoardConsistencyError("Row widths inconsistent")

        heights = self._scan_column_heights()
        if not np.array_equal(heights, self.column_heights):
            raise BoardConsistencyError("Column heights inconsistent")

        expected_max = int(heights.max()) if heights.size else 0
        if self._max_height != expected_max:
            raise BoardConsistencyError("Max height inconsistent")

    def _scan_column_heights(self) -> Counts:
        occupied = self.grid.any(axis=0)
        # Index of the topmost occupied cell, counted from the bottom.
        top = self._height - np.argmax(self.grid[::-1], axis=0)
        return np.where(occupied, top, 0).astype(np.int32)

    def _recompute_indices(self) -> None:
        self.row_widths = np.count_nonzero(self.grid, axis=1).astype(np.int32)
        self.column_heights = self._scan_column_heights()
        self._max_height = int(self.column_heights.max()) if self.column_heights.size else 0


__all__ = [
    "Board",
    "BoardConsistencyError",
    "BoardStateError",
    "HEIGHT",
    "PlacementResult",
    "Snapshot",
    "WIDTH",
]
