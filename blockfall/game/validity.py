"""Placement validity check shared by every piece command."""

from __future__ import annotations

from blockfall.game.grid import EMPTY, Grid
from blockfall.game.pieces import Piece


def is_valid(piece: Piece, grid: Grid) -> bool:
    """Check whether ``piece`` fits on ``grid`` at its current position.

    A placement is valid if every filled cell of the piece:
      - Lies in a column inside ``[0, cols)``.
      - Lies on a row below the floor bound, i.e. ``row < rows``.
      - Does not overlap a filled grid cell, when that row exists.

    Rows above the board (negative indices) are never rejected and count as
    empty, so a freshly spawned or rotated piece may poke above row 0.

    The check is pure: neither the piece nor the grid is modified.

    Args:
        piece: Candidate placement.
        grid: Board of locked cells.

    Returns:
        True if the placement is legal, False otherwise.
    """
    cells = grid.grid
    for row, col in piece.cells():
        if col < 0 or col >= grid.cols:
            return False
        if row >= grid.rows:
            return False
        if row >= 0 and cells[row, col] != EMPTY:
            return False
    return True
