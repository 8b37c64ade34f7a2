"""
Piece controller: applies player and gravity commands to the active piece.

Every command builds a candidate piece, asks the validity checker about it,
and commits only on success. Illegal nudges and rotations are silently
ignored. A soft drop that cannot move down locks the piece; the lock, line
clear, score update, and respawn all happen inside that one call.
"""

from __future__ import annotations

from dataclasses import dataclass

from blockfall.game.grid import Grid
from blockfall.game.pieces import Piece, PieceFactory
from blockfall.game.scoring import ScoreKeeper, clear_full_rows
from blockfall.game.validity import is_valid


@dataclass(frozen=True)
class DropResult:
    """What a soft or hard drop did.

    Attributes:
        locked: True if the piece locked into the grid.
        lines_cleared: Rows removed by the lock.
        score_delta: Points gained from the lock.
        level_changed: True if the lock raised the level.
        topped_out: True if the respawned piece collided immediately.
    """

    locked: bool = False
    lines_cleared: int = 0
    score_delta: int = 0
    level_changed: bool = False
    topped_out: bool = False


MOVED = DropResult()


class PieceController:
    """Owns the active piece and mutates it through validity-checked commands.

    Attributes:
        grid: The board the piece falls into.
        factory: Source of new pieces.
        scores: Score keeper credited on each lock.
        piece: The active piece, or None before the first spawn.
    """

    def __init__(self, grid: Grid, factory: PieceFactory, scores: ScoreKeeper) -> None:
        self.grid = grid
        self.factory = factory
        self.scores = scores
        self.piece: Piece | None = None

    def spawn(self) -> bool:
        """Replace the active piece with a fresh one from the factory.

        Returns:
            True if the new piece fits, False if it collides on arrival.
        """
        self.piece = self.factory.spawn()
        return is_valid(self.piece, self.grid)

    def _try(self, candidate: Piece) -> bool:
        if is_valid(candidate, self.grid):
            self.piece = candidate
            return True
        return False

    def move_left(self) -> bool:
        if self.piece is None:
            return False
        return self._try(self.piece.moved(-1, 0))

    def move_right(self) -> bool:
        if self.piece is None:
            return False
        return self._try(self.piece.moved(1, 0))

    def rotate(self) -> bool:
        """Rotate clockwise in place. No wall kicks are attempted."""
        if self.piece is None:
            return False
        return self._try(self.piece.rotated())

    def soft_drop(self) -> DropResult:
        """Move the piece down one row, locking it if it cannot descend.

        Returns:
            MOVED if the piece descended, otherwise the lock's DropResult.
        """
        if self.piece is None:
            return MOVED
        if self._try(self.piece.moved(0, 1)):
            return MOVED
        return self._lock()

    def hard_drop(self) -> DropResult:
        """Drop the piece to its landing row and lock it immediately."""
        if self.piece is None:
            return MOVED
        self.piece = self.piece.moved(0, self.ghost_y() - self.piece.y)
        return self._lock()

    def ghost_y(self) -> int:
        """Return the row the active piece would land on if dropped now."""
        if self.piece is None:
            return 0
        landing = self.piece
        while is_valid(landing.moved(0, 1), self.grid):
            landing = landing.moved(0, 1)
        return landing.y

    def _merge(self) -> None:
        """Write the active piece's color into the grid.

        Cells that are still above row 0 have nowhere to go and are dropped.
        """
        for row, col in self.piece.cells():
            if row >= 0:
                self.grid.set_cell(row, col, self.piece.color)

    def _lock(self) -> DropResult:
        self._merge()
        lines = clear_full_rows(self.grid)
        update = self.scores.apply(lines)
        fits = self.spawn()
        return DropResult(
            locked=True,
            lines_cleared=update.lines_cleared,
            score_delta=update.score_delta,
            level_changed=update.level_changed,
            topped_out=not fits,
        )

    def reset(self) -> None:
        self.piece = None
