"""
Record a demo GIF of the game.

Renders snapshots to images using PIL (no pygame needed), so it works on
headless machines. A seeded autoplayer issues random nudges and rotations
while the game clock runs, and every render tick becomes one GIF frame.
"""

from __future__ import annotations

import dataclasses
import pathlib
import random

from PIL import Image, ImageColor, ImageDraw, ImageFont

from blockfall.config import GameConfig
from blockfall.game.tetris import Command, GameSnapshot, GameStatus, TetrisGame

# Visual settings
SIDEBAR_WIDTH = 140

# Colors (RGB)
BG_COLOR = (18, 18, 24)
GRID_COLOR = (40, 40, 50)
GRID_LINE_COLOR = (30, 30, 40)
SIDEBAR_BG = (14, 14, 20)
BORDER_COLOR = (80, 80, 100)
LABEL_COLOR = (140, 140, 160)
ACCENT_COLOR = (100, 200, 255)
STATUS_COLORS = {
    GameStatus.PAUSED: (255, 220, 80),
    GameStatus.OVER: (255, 70, 70),
}

# Autoplayer: chance of each command per frame; the rest of the time it waits.
AUTOPLAY_WEIGHTS: dict[Command | None, int] = {
    Command.MOVE_LEFT: 2,
    Command.MOVE_RIGHT: 2,
    Command.ROTATE: 1,
    Command.SOFT_DROP: 1,
    None: 10,
}


def darken(color, amount=50):
    return tuple(max(0, c - amount) for c in color)


def lighten(color, amount=40):
    return tuple(min(255, c + amount) for c in color)


def try_load_font(size):
    """Try to load a monospace font, fall back to default."""
    font_paths = [
        "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationMono-Regular.ttf",
        "/usr/share/fonts/truetype/freefont/FreeMono.ttf",
    ]
    for fp in font_paths:
        try:
            return ImageFont.truetype(fp, size)
        except OSError:
            continue
    return ImageFont.load_default()


class FrameRenderer:
    """Draws GameSnapshots onto PIL images.

    Attributes:
        config: Game configuration (geometry, palette, cell size).
        colors: Palette converted to RGB tuples.
    """

    def __init__(self, config: GameConfig) -> None:
        self.config = config
        self.cell = config.cell_size
        self.board_w = config.cols * self.cell
        self.board_h = config.rows * self.cell
        self.size = (self.board_w + SIDEBAR_WIDTH, self.board_h)
        self.colors = [ImageColor.getrgb(entry)[:3] for entry in config.palette]
        self.font_small = try_load_font(12)
        self.font_large = try_load_font(20)

    def draw_cell(self, draw, x, y, color):
        """Draw a single filled cell with 3D-style shading."""
        size = self.cell
        draw.rectangle([x, y, x + size - 1, y + size - 1], fill=color)
        highlight = lighten(color, 60)
        draw.line([(x, y), (x + size - 2, y)], fill=highlight, width=1)
        draw.line([(x, y), (x, y + size - 2)], fill=highlight, width=1)
        shadow = darken(color, 60)
        draw.line([(x + 1, y + size - 1), (x + size - 1, y + size - 1)], fill=shadow, width=1)
        draw.line([(x + size - 1, y + 1), (x + size - 1, y + size - 1)], fill=shadow, width=1)

    def render(self, snapshot: GameSnapshot) -> Image.Image:
        """Render a single snapshot as a PIL Image."""
        img = Image.new("RGB", self.size, BG_COLOR)
        draw = ImageDraw.Draw(img)

        board = snapshot.board_with_piece()
        rows, cols = board.shape
        for row in range(rows):
            for col in range(cols):
                x = col * self.cell
                y = row * self.cell
                value = int(board[row, col])
                if value != 0:
                    self.draw_cell(draw, x, y, self._color(value))
                else:
                    draw.rectangle([x, y, x + self.cell - 1, y + self.cell - 1],
                                   fill=GRID_COLOR, outline=GRID_LINE_COLOR)

        draw.rectangle([0, 0, self.board_w - 1, self.board_h - 1], outline=BORDER_COLOR, width=2)

        # --- Sidebar ---
        sx = self.board_w
        draw.rectangle([sx, 0, self.size[0] - 1, self.size[1] - 1], fill=SIDEBAR_BG)
        draw.line([(sx, 0), (sx, self.size[1])], fill=BORDER_COLOR, width=2)

        cx = sx + 12
        cy = 12
        for label, value in (
            ("SCORE", snapshot.score),
            ("LEVEL", snapshot.level),
            ("LINES", snapshot.lines),
        ):
            draw.text((cx, cy), label, fill=LABEL_COLOR, font=self.font_small)
            cy += 15
            draw.text((cx, cy), str(value), fill=ACCENT_COLOR, font=self.font_large)
            cy += 28

        if snapshot.status in STATUS_COLORS:
            draw.text((cx, cy), snapshot.status.name, fill=STATUS_COLORS[snapshot.status],
                      font=self.font_large)

        return img

    def _color(self, index: int) -> tuple[int, int, int]:
        if 0 < index < len(self.colors):
            return self.colors[index]
        return (128, 128, 128)


def record_frames(
    config: GameConfig,
    max_frames: int = 300,
    frame_fps: int = 12,
    seed: int | None = None,
) -> list[Image.Image]:
    """Play one autoplayed game and return its frames.

    Args:
        config: Game configuration; its fps is replaced by ``frame_fps``.
        max_frames: Stop after this many frames.
        frame_fps: Render ticks (and GIF frames) per second of game time.
        seed: Seed for both the piece randomizer and the autoplayer.

    Returns:
        The rendered frames, ending with a short freeze if the game ended.
    """
    if max_frames <= 0:
        raise ValueError("max_frames must be positive")
    if seed is not None:
        config = dataclasses.replace(config, seed=seed)
    config = dataclasses.replace(config, fps=frame_fps)
    renderer = FrameRenderer(config)
    frames: list[Image.Image] = []

    game = TetrisGame(config, on_render=lambda snap: frames.append(renderer.render(snap)))
    player = random.Random(config.seed)
    commands = list(AUTOPLAY_WEIGHTS)
    weights = list(AUTOPLAY_WEIGHTS.values())
    frame_ms = 1000.0 / frame_fps

    while len(frames) < max_frames and not game.game_over:
        command = player.choices(commands, weights)[0]
        if command is not None:
            game.dispatch(command)
        game.tick(frame_ms)

    if game.game_over:
        # Hold the final board for about a second.
        frames.extend(frames[-1].copy() for _ in range(frame_fps))
    return frames


def save_gif(frames: list[Image.Image], output_path: str | pathlib.Path, frame_fps: int = 12) -> pathlib.Path:
    """Quantize ``frames`` and save them as a looping GIF."""
    if not frames:
        raise ValueError("no frames to save")
    output_path = pathlib.Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    quantized = [f.quantize(colors=64, method=Image.Quantize.MEDIANCUT) for f in frames]
    quantized[0].save(
        str(output_path),
        save_all=True,
        append_images=quantized[1:],
        duration=1000 // frame_fps,
        loop=0,
        optimize=True,
    )
    return output_path


def record_gif(
    config: GameConfig,
    output_path: str | pathlib.Path,
    max_frames: int = 300,
    frame_fps: int = 12,
    seed: int | None = None,
) -> pathlib.Path:
    """Record an autoplayed game to ``output_path`` and report progress."""
    print("Recording demo GIF...")
    print(f"  Output: {output_path}")
    print(f"  Frames: up to {max_frames} at {frame_fps} FPS")

    frames = record_frames(config, max_frames=max_frames, frame_fps=frame_fps, seed=seed)
    path = save_gif(frames, output_path, frame_fps=frame_fps)

    file_size_kb = path.stat().st_size / 1024
    print(f"GIF saved: {path} ({len(frames)} frames, {file_size_kb:.1f} KB)")
    return path
