"""
Grid of locked cells for the falling-block board.

The grid is a 2D numpy array (rows x cols) of int8 values:
  - 0 = empty cell
  - 1..N = palette index of the piece that locked there

Row 0 is the top of the board and row indices grow downward. The shape of
the array never changes after construction: clearing a row always inserts
a fresh empty row at the top.
"""

from __future__ import annotations

import numpy as np

from blockfall.game.errors import OutOfBounds

EMPTY = 0


class Grid:
    """Fixed-size board holding every locked cell.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        grid: 2D numpy array of shape (rows, cols), dtype int8.
    """

    def __init__(self, rows: int = 20, cols: int = 10) -> None:
        """Initialize an empty grid.

        Args:
            rows: Number of rows (board height).
            cols: Number of columns (board width).

        Raises:
            ValueError: If either dimension is not positive.
        """
        if rows <= 0 or cols <= 0:
            raise ValueError(f"grid dimensions must be positive, got {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        self.grid = np.zeros((self.rows, self.cols), dtype=np.int8)

    @property
    def shape(self) -> tuple[int, int]:
        return self.rows, self.cols

    def _check_row(self, row: int) -> None:
        if not 0 <= row < self.rows:
            raise OutOfBounds(row, None, self.rows, self.cols)

    def _check_cell(self, row: int, col: int) -> None:
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise OutOfBounds(row, col, self.rows, self.cols)

    def cell_at(self, row: int, col: int) -> int:
        """Return the value stored at ``(row, col)``.

        Raises:
            OutOfBounds: If the coordinates are outside the grid.
        """
        self._check_cell(row, col)
        return int(self.grid[row, col])

    def set_cell(self, row: int, col: int, value: int) -> None:
        """Store ``value`` at ``(row, col)``.

        Raises:
            OutOfBounds: If the coordinates are outside the grid.
        """
        self._check_cell(row, col)
        self.grid[row, col] = value

    def is_row_full(self, row: int) -> bool:
        """Return True iff every cell in ``row`` is non-empty.

        Raises:
            OutOfBounds: If ``row`` is outside the grid.
        """
        self._check_row(row)
        return bool(np.all(self.grid[row] != EMPTY))

    def full_rows(self) -> list[int]:
        """Return the indices of all full rows, top to bottom."""
        return [int(r) for r in np.where(np.all(self.grid != EMPTY, axis=1))[0]]

    def remove_row_and_shift_down(self, row: int) -> None:
        """Delete ``row`` and insert an empty row at index 0.

        Every row above the removed one moves down by one; rows below it
        are untouched. The grid keeps exactly ``rows`` rows.

        Raises:
            OutOfBounds: If ``row`` is outside the grid.
        """
        self._check_row(row)
        remaining = np.delete(self.grid, row, axis=0)
        empty_row = np.zeros((1, self.cols), dtype=np.int8)
        self.grid = np.vstack([empty_row, remaining])

    def is_empty(self) -> bool:
        return not bool(np.any(self.grid != EMPTY))

    def get_grid(self) -> np.ndarray:
        """Return a copy of the grid array.

        Returns:
            A numpy array of shape (rows, cols), dtype int8.
        """
        return self.grid.copy()

    def reset(self) -> None:
        """Clear the entire grid, setting all cells to empty."""
        self.grid = np.zeros((self.rows, self.cols), dtype=np.int8)
