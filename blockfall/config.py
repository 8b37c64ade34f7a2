"""
Game configuration: board geometry, palette, timing, and scoring knobs.

Values come from a YAML file (see ``config/settings.yaml``) or from the
dataclass defaults. Unknown keys are rejected so typos don't silently fall
back to defaults.
"""

from __future__ import annotations

import dataclasses
import pathlib
from dataclasses import dataclass
from typing import Any

import yaml

DEFAULT_PALETTE: tuple[str, ...] = (
    "#000000",  # empty
    "#FF0000",
    "#00FF00",
    "#0000FF",
    "#FFFF00",
    "#00FFFF",
    "#FF00FF",
)


@dataclass(frozen=True)
class GameConfig:
    """All tunables for one game.

    Attributes:
        cols: Board width in cells.
        rows: Board height in cells.
        palette: Ordered color identifiers; index 0 is the empty cell.
        fps: Render cadence in frames per second.
        cell_size: Pixel size of a cell for the front-ends.
        base_descent_ms: Descent interval at level 1.
        descent_step_ms: Interval reduction per level.
        min_descent_ms: Floor for the descent interval.
        points_per_line: Score for each cleared row.
        level_score_threshold: Score multiple that triggers a level-up.
        seed: Seed for the piece randomizer, or None for nondeterministic play.
    """

    cols: int = 10
    rows: int = 20
    palette: tuple[str, ...] = DEFAULT_PALETTE
    fps: int = 60
    cell_size: int = 30
    base_descent_ms: int = 1000
    descent_step_ms: int = 100
    min_descent_ms: int = 100
    points_per_line: int = 100
    level_score_threshold: int = 1000
    seed: int | None = None

    def __post_init__(self) -> None:
        # YAML hands us lists; keep the palette hashable and immutable.
        object.__setattr__(self, "palette", tuple(self.palette))
        if self.cols <= 0 or self.rows <= 0:
            raise ValueError(f"board must be at least 1x1, got {self.cols}x{self.rows}")
        if not 2 <= len(self.palette) <= 128:
            raise ValueError("palette needs an empty slot plus 1-127 colors")
        if self.fps <= 0:
            raise ValueError(f"fps must be positive, got {self.fps}")
        if self.cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {self.cell_size}")
        if self.min_descent_ms <= 0 or self.base_descent_ms < self.min_descent_ms:
            raise ValueError("descent timing needs 0 < min_descent_ms <= base_descent_ms")
        if self.descent_step_ms < 0:
            raise ValueError("descent_step_ms must be non-negative")

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> GameConfig:
        """Build a config from a plain mapping, rejecting unknown keys."""
        data = dict(data or {})
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**data)


def load_config(config_path: str | pathlib.Path) -> GameConfig:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        The parsed GameConfig.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ValueError: If the file holds unknown keys or invalid values.
    """
    config_path = pathlib.Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    with open(config_path, "r") as f:
        return GameConfig.from_dict(yaml.safe_load(f))
