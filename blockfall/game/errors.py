"""Error types raised by the game core."""

from __future__ import annotations


class OutOfBounds(IndexError):
    """Raised when a grid accessor is given a row/column outside the board.

    This is a programming error: correct callers only address cells inside
    ``[0, rows) x [0, cols)``. The grid never clamps silently.

    Attributes:
        row: The offending row index.
        col: The offending column index, or None for whole-row operations.
    """

    def __init__(self, row: int, col: int | None, rows: int, cols: int) -> None:
        if col is None:
            message = f"row {row} is outside the {rows}x{cols} grid"
        else:
            message = f"cell ({row}, {col}) is outside the {rows}x{cols} grid"
        super().__init__(message)
        self.row = row
        self.col = col
