"""Game logic: grid, pieces, validity, scoring, controller, clock, and orchestrator."""

from blockfall.game.errors import OutOfBounds
from blockfall.game.grid import Grid
from blockfall.game.pieces import SHAPE_TEMPLATES, Piece, PieceFactory, rotate_cw
from blockfall.game.validity import is_valid
from blockfall.game.scoring import ScoreKeeper, ScoringRules, clear_full_rows
from blockfall.game.controller import DropResult, PieceController
from blockfall.game.clock import GameClock, Timer, TimerState, descent_period_ms
from blockfall.game.tetris import Command, GameSnapshot, GameStatus, TetrisGame

__all__ = [
    "OutOfBounds",
    "Grid",
    "SHAPE_TEMPLATES",
    "Piece",
    "PieceFactory",
    "rotate_cw",
    "is_valid",
    "ScoreKeeper",
    "ScoringRules",
    "clear_full_rows",
    "DropResult",
    "PieceController",
    "GameClock",
    "Timer",
    "TimerState",
    "descent_period_ms",
    "Command",
    "GameSnapshot",
    "GameStatus",
    "TetrisGame",
]
