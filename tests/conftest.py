"""Shared fixtures for the blockfall test suite."""

from __future__ import annotations

import pytest

from blockfall.config import GameConfig
from blockfall.game.grid import Grid
from blockfall.game.pieces import PIECE_NAMES, PieceFactory
from blockfall.game.tetris import TetrisGame


class FixedRandom:
    """Random source that always spawns the same template and color."""

    def __init__(self, name: str = "O", color: int = 1) -> None:
        self.name_index = PIECE_NAMES.index(name)
        self.color = color

    def randrange(self, start, stop=None, step=1):
        if stop is None:
            return self.name_index
        return self.color


@pytest.fixture
def grid():
    return Grid(rows=20, cols=10)


@pytest.fixture
def o_factory():
    return PieceFactory(cols=10, palette_size=7, rng=FixedRandom("O", 1))


@pytest.fixture
def make_game():
    """Build a TetrisGame whose factory always spawns the given piece."""
    def _make(name: str = "O", color: int = 1, on_render=None, **config_overrides) -> TetrisGame:
        config = GameConfig(**config_overrides)
        return TetrisGame(config, rng=FixedRandom(name, color), on_render=on_render)
    return _make


def _fill_row(grid: Grid, row: int, except_cols: tuple[int, ...] = (), value: int = 1) -> None:
    for col in range(grid.cols):
        if col not in except_cols:
            grid.set_cell(row, col, value)


@pytest.fixture
def fill_row():
    """Fill every cell of a row except the given columns."""
    return _fill_row
