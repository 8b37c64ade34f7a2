"""
Game orchestrator: status, command dispatch, clock wiring, and snapshots.

This module ties the Grid, PieceFactory, PieceController, ScoreKeeper and
GameClock into one game with an explicit RUNNING / PAUSED / OVER status.
Hosts drive it with two calls:

  - ``dispatch(command)`` for player input.
  - ``tick(dt_ms)`` with the elapsed wall time since the previous call.

Observable state is pulled with ``snapshot()`` or pushed to the
``on_render`` callback on every render tick and every status change.
"""

from __future__ import annotations

import enum
import random
import threading
from dataclasses import dataclass
from typing import Callable

import numpy as np

from blockfall.config import GameConfig
from blockfall.game.clock import GameClock
from blockfall.game.controller import DropResult, PieceController
from blockfall.game.grid import Grid
from blockfall.game.pieces import Piece, PieceFactory
from blockfall.game.scoring import ScoreKeeper, ScoringRules


class GameStatus(enum.Enum):
    RUNNING = "running"
    PAUSED = "paused"
    OVER = "over"


class Command(enum.IntEnum):
    """Zero-argument player commands accepted by ``TetrisGame.dispatch``."""
    MOVE_LEFT = 0
    MOVE_RIGHT = 1
    ROTATE = 2
    SOFT_DROP = 3
    HARD_DROP = 4
    PAUSE = 5
    RESUME = 6
    TOGGLE_PAUSE = 7
    RESET = 8


# Commands still honoured while paused / after game over.
_PAUSED_COMMANDS = {Command.RESUME, Command.TOGGLE_PAUSE, Command.RESET}
_OVER_COMMANDS = {Command.RESET}


@dataclass(frozen=True, eq=False)
class GameSnapshot:
    """Read-only view of everything a front-end needs to draw a frame.

    Attributes:
        grid: Copy of the locked cells, shape (rows, cols).
        piece: The active piece, or None.
        ghost_y: Landing row of the active piece, or None.
        score: Current score.
        level: Current level.
        lines: Rows cleared this game.
        status: Current GameStatus.
    """

    grid: np.ndarray
    piece: Piece | None
    ghost_y: int | None
    score: int
    level: int
    lines: int
    status: GameStatus

    def board_with_piece(self) -> np.ndarray:
        """Return the grid with the active piece's visible cells painted in."""
        board = self.grid.copy()
        if self.piece is not None:
            rows, cols = board.shape
            for row, col in self.piece.cells():
                if 0 <= row < rows and 0 <= col < cols:
                    board[row, col] = self.piece.color
        return board


class TetrisGame:
    """A complete falling-block game driven by commands and elapsed time.

    Attributes:
        config: The GameConfig this game was built from.
        grid: Board of locked cells.
        factory: Randomized piece source.
        scores: Score, level and line totals.
        controller: Owner of the active piece.
        clock: Descent and render timers.
        status: Current GameStatus.
        on_render: Callback receiving a GameSnapshot on each render tick.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        rng: random.Random | None = None,
        on_render: Callable[[GameSnapshot], None] | None = None,
    ) -> None:
        """Build a game and start it immediately.

        Args:
            config: Game configuration; defaults to a standard 10x20 board.
            rng: Random source for the piece factory. Defaults to
                ``random.Random(config.seed)``.
            on_render: Optional snapshot callback for the host.
        """
        self.config = config or GameConfig()
        self.grid = Grid(self.config.rows, self.config.cols)
        self.factory = PieceFactory(
            self.config.cols,
            len(self.config.palette),
            rng if rng is not None else random.Random(self.config.seed),
        )
        self.scores = ScoreKeeper(
            ScoringRules(
                points_per_line=self.config.points_per_line,
                level_score_threshold=self.config.level_score_threshold,
            )
        )
        self.controller = PieceController(self.grid, self.factory, self.scores)
        self.clock = GameClock(
            on_descent=self._on_descent,
            on_render=self._publish,
            fps=self.config.fps,
            base_descent_ms=self.config.base_descent_ms,
            descent_step_ms=self.config.descent_step_ms,
            min_descent_ms=self.config.min_descent_ms,
        )
        self.on_render = on_render
        self.status = GameStatus.RUNNING
        # Re-entrant: descent callbacks run while tick() holds the lock.
        self._lock = threading.RLock()
        self.reset()

    # -- observable state ---------------------------------------------------

    @property
    def score(self) -> int:
        return self.scores.score

    @property
    def level(self) -> int:
        return self.scores.level

    @property
    def lines(self) -> int:
        return self.scores.lines

    @property
    def piece(self) -> Piece | None:
        return self.controller.piece

    @property
    def game_over(self) -> bool:
        return self.status is GameStatus.OVER

    def snapshot(self) -> GameSnapshot:
        """Return a consistent snapshot of the board and score state."""
        with self._lock:
            piece = self.controller.piece
            return GameSnapshot(
                grid=self.grid.get_grid(),
                piece=piece,
                ghost_y=(
                    self.controller.ghost_y()
                    if piece is not None and self.status is not GameStatus.OVER
                    else None
                ),
                score=self.scores.score,
                level=self.scores.level,
                lines=self.scores.lines,
                status=self.status,
            )

    # -- lifecycle ------------------------------------------------------------

    def reset(self) -> None:
        """Start a fresh game.

        Cancels both timers before anything else, clears the grid and the
        score, spawns the first piece, and re-arms the clock at the level-1
        cadence.
        """
        with self._lock:
            self.clock.stop()
            self.grid.reset()
            self.scores.reset()
            self.controller.reset()
            self.status = GameStatus.RUNNING
            if self.controller.spawn():
                self.clock.start(self.scores.level)
            else:
                # Board too small for the first piece.
                self.status = GameStatus.OVER
            self._publish()

    def pause(self) -> bool:
        with self._lock:
            if self.status is not GameStatus.RUNNING:
                return False
            self.status = GameStatus.PAUSED
            self.clock.pause()
            self._publish()
            return True

    def resume(self) -> bool:
        with self._lock:
            if self.status is not GameStatus.PAUSED:
                return False
            self.status = GameStatus.RUNNING
            self.clock.resume()
            self._publish()
            return True

    # -- input ----------------------------------------------------------------

    def dispatch(self, command: Command) -> bool:
        """Apply a player command.

        While the game is over only RESET is honoured; while paused only
        RESUME, TOGGLE_PAUSE and RESET are. Everything else is ignored
        rather than treated as an error, as are illegal moves.

        Args:
            command: The Command to apply.

        Returns:
            True if the command changed the game state.
        """
        command = Command(command)
        with self._lock:
            if self.status is GameStatus.OVER and command not in _OVER_COMMANDS:
                return False
            if self.status is GameStatus.PAUSED and command not in _PAUSED_COMMANDS:
                return False

            if command == Command.MOVE_LEFT:
                return self.controller.move_left()
            if command == Command.MOVE_RIGHT:
                return self.controller.move_right()
            if command == Command.ROTATE:
                return self.controller.rotate()
            if command == Command.SOFT_DROP:
                self._after_drop(self.controller.soft_drop())
                return True
            if command == Command.HARD_DROP:
                self._after_drop(self.controller.hard_drop())
                return True
            if command == Command.PAUSE:
                return self.pause()
            if command == Command.RESUME:
                return self.resume()
            if command == Command.TOGGLE_PAUSE:
                return self.pause() or self.resume()
            self.reset()
            return True

    def tick(self, dt_ms: float) -> None:
        """Advance the game clock by ``dt_ms`` milliseconds of host time."""
        with self._lock:
            if self.status is GameStatus.RUNNING:
                self.clock.advance(dt_ms)

    # -- internals ------------------------------------------------------------

    def _on_descent(self) -> None:
        self._after_drop(self.controller.soft_drop())

    def _after_drop(self, result: DropResult) -> None:
        if result.topped_out:
            self.status = GameStatus.OVER
            self.clock.stop()
            self._publish()
        elif result.level_changed:
            self.clock.set_level(self.scores.level)

    def _publish(self) -> None:
        if self.on_render is not None:
            self.on_render(self.snapshot())
