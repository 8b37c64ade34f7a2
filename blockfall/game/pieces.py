"""
Piece catalog: the seven tetromino templates, rotation, and the spawn factory.

Coordinate convention:
  - A shape is a small 2D occupancy matrix; 1 marks a filled cell.
  - On the board, row 0 is the top and row increases downward.
  - A piece's (x, y) is the board position of the shape's top-left corner.

Shapes are read-only numpy arrays. Rotation always builds a new array, so
the catalog templates can never be mutated through a live piece.
"""

from __future__ import annotations

import dataclasses
import random
from dataclasses import dataclass
from typing import Iterator

import numpy as np

Shape = np.ndarray


def make_shape(rows: list[list[int]] | np.ndarray) -> Shape:
    """Build an immutable int8 occupancy matrix from nested rows."""
    shape = np.array(rows, dtype=np.int8)
    if shape.ndim != 2 or shape.size == 0:
        raise ValueError("a shape must be a non-empty 2D matrix")
    shape.setflags(write=False)
    return shape


def rotate_cw(shape: Shape) -> Shape:
    """Return ``shape`` rotated 90 degrees clockwise.

    Equivalent to transposing the matrix and reversing each row. The input
    is left untouched.
    """
    return make_shape(np.rot90(shape, -1))


# =============================================================================
# Tetromino templates (spawn orientation)
# =============================================================================

SHAPE_TEMPLATES: dict[str, Shape] = {
    "I": make_shape([[1, 1, 1, 1]]),
    "O": make_shape([[1, 1],
                     [1, 1]]),
    "T": make_shape([[1, 1, 1],
                     [0, 1, 0]]),
    "L": make_shape([[1, 1, 1],
                     [1, 0, 0]]),
    "J": make_shape([[1, 1, 1],
                     [0, 0, 1]]),
    "Z": make_shape([[1, 1, 0],
                     [0, 1, 1]]),
    "S": make_shape([[0, 1, 1],
                     [1, 1, 0]]),
}

PIECE_NAMES: tuple[str, ...] = tuple(SHAPE_TEMPLATES)


@dataclass(frozen=True, eq=False)
class Piece:
    """The falling piece: a shape, a palette color, and a board position.

    Pieces are values. Moving or rotating returns a new Piece, which lets the
    controller test a candidate placement before committing to it.
    """

    name: str
    shape: Shape
    color: int
    x: int
    y: int

    @property
    def width(self) -> int:
        return int(self.shape.shape[1])

    @property
    def height(self) -> int:
        return int(self.shape.shape[0])

    def moved(self, dx: int, dy: int) -> Piece:
        return dataclasses.replace(self, x=self.x + dx, y=self.y + dy)

    def rotated(self) -> Piece:
        return dataclasses.replace(self, shape=rotate_cw(self.shape))

    def cells(self) -> Iterator[tuple[int, int]]:
        """Yield ``(row, col)`` board coordinates of every filled cell."""
        for dy, dx in zip(*np.nonzero(self.shape)):
            yield self.y + int(dy), self.x + int(dx)


class PieceFactory:
    """Spawns randomized pieces centered at the top of the board.

    Attributes:
        cols: Board width used to center new pieces.
        palette_size: Number of palette entries, including the empty slot 0.
        rng: Random source; inject a seeded ``random.Random`` for
            deterministic sequences.
    """

    def __init__(
        self,
        cols: int,
        palette_size: int,
        rng: random.Random | None = None,
    ) -> None:
        if palette_size < 2:
            raise ValueError("palette needs at least one color besides the empty slot")
        self.cols = cols
        self.palette_size = palette_size
        self.rng = rng if rng is not None else random.Random()
        self._names = list(SHAPE_TEMPLATES)

    def spawn(self) -> Piece:
        """Create a new piece with a uniformly random template and color.

        The piece is horizontally centered at ``cols//2 - width//2`` on
        row 0.
        """
        name = self._names[self.rng.randrange(len(self._names))]
        color = self.rng.randrange(1, self.palette_size)
        return self.create(name, color)

    def create(self, name: str, color: int) -> Piece:
        """Create the named piece at the spawn position."""
        shape = SHAPE_TEMPLATES[name]
        x = self.cols // 2 - shape.shape[1] // 2
        return Piece(name=name, shape=shape, color=color, x=x, y=0)
