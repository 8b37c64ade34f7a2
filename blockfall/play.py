"""
Manual play mode.

Runs a TetrisGame in a pygame window. The pygame clock measures elapsed
time each frame and feeds it to ``game.tick``; the game's render timer
pushes snapshots back to the TetrisRenderer.
"""

from __future__ import annotations

try:
    import pygame
except ImportError:
    pygame = None  # type: ignore[assignment]

from blockfall.config import GameConfig
from blockfall.game.tetris import Command, GameSnapshot, GameStatus, TetrisGame
from blockfall.renderer import TetrisRenderer


# ── Keyboard mapping for manual play ─────────────────────────────────────
# Arrow keys for movement and rotation, Space for hard drop, P pause, R reset
KEY_MAP: dict[int, Command] = {}
if pygame is not None:
    KEY_MAP = {
        pygame.K_LEFT: Command.MOVE_LEFT,
        pygame.K_RIGHT: Command.MOVE_RIGHT,
        pygame.K_DOWN: Command.SOFT_DROP,
        pygame.K_UP: Command.ROTATE,
        pygame.K_x: Command.ROTATE,
        pygame.K_SPACE: Command.HARD_DROP,
        pygame.K_p: Command.TOGGLE_PAUSE,
        pygame.K_r: Command.RESET,
    }

# Commands that only change the piece; redrawn at once instead of waiting
# for the next render tick.
_REDRAW_ON = {Command.MOVE_LEFT, Command.MOVE_RIGHT, Command.ROTATE}


def play_manual(config: GameConfig) -> None:
    """Run the game in manual (human) play mode.

    The player uses keyboard controls:
      - Left/Right arrow: move piece
      - Down arrow: soft drop
      - Up arrow / X: rotate clockwise
      - Space: hard drop
      - P: pause / resume
      - R: reset
      - Escape / close window: quit

    A one-line summary is printed at the end of every game.

    Args:
        config: Game configuration.
    """
    if pygame is None:
        raise ImportError("pygame is required for play mode. Install it: pip install pygame")

    renderer = TetrisRenderer(config)
    games_played = 0

    def on_render(snapshot: GameSnapshot) -> None:
        nonlocal games_played
        renderer.render(snapshot)
        if snapshot.status is GameStatus.OVER:
            games_played += 1
            print(
                f"Game {games_played} over"
                f" | Score: {snapshot.score} | Level: {snapshot.level} | Lines: {snapshot.lines}"
            )

    game = TetrisGame(config, on_render=on_render)
    clock = pygame.time.Clock()
    running = True

    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
                break
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                    break
                command = KEY_MAP.get(event.key)
                if command is not None and game.dispatch(command) and command in _REDRAW_ON:
                    renderer.render(game.snapshot())

        if not running:
            break

        game.tick(clock.tick(config.fps))

    renderer.close()
