"""
Line clearing, scoring, and level progression.

Scoring is deliberately linear: each cleared row is worth a fixed number of
points regardless of how many rows clear together. The level goes up by one
whenever a lock pushes the score past a multiple of the level threshold, and
never by more than one per lock.
"""

from __future__ import annotations

from dataclasses import dataclass

from blockfall.game.grid import Grid


def clear_full_rows(grid: Grid) -> int:
    """Remove every full row in a single pass.

    Rows are removed top to bottom. Removing a row only shifts the rows
    above it, so the indices of the remaining full rows below stay valid.

    Args:
        grid: Board to compact in place.

    Returns:
        The number of rows removed.
    """
    full = grid.full_rows()
    for row in full:
        grid.remove_row_and_shift_down(row)
    return len(full)


@dataclass(frozen=True)
class ScoringRules:
    points_per_line: int = 100
    level_score_threshold: int = 1000

    def __post_init__(self) -> None:
        if self.points_per_line < 0:
            raise ValueError("points_per_line must be non-negative")
        if self.level_score_threshold <= 0:
            raise ValueError("level_score_threshold must be positive")

    def score_for_lines(self, lines: int) -> int:
        if lines <= 0:
            return 0
        return lines * self.points_per_line


@dataclass(frozen=True)
class ScoreUpdate:
    """Outcome of applying one lock's line clears to the score."""

    lines_cleared: int
    score_delta: int
    level_changed: bool


class ScoreKeeper:
    """Running score, level, and line total for one game.

    Attributes:
        rules: Scoring configuration.
        score: Current score (starts at 0).
        level: Current level (starts at 1).
        lines: Total rows cleared this game.
    """

    def __init__(self, rules: ScoringRules | None = None) -> None:
        self.rules = rules or ScoringRules()
        self.score: int = 0
        self.level: int = 1
        self.lines: int = 0

    def reset(self) -> None:
        self.score = 0
        self.level = 1
        self.lines = 0

    def apply(self, lines_cleared: int) -> ScoreUpdate:
        """Credit the rows cleared by a single lock.

        The level increases by exactly one if ``score // threshold`` grew,
        even when the new score jumped several thresholds at once.

        Args:
            lines_cleared: Rows removed by the lock (0 or more).

        Returns:
            The resulting ScoreUpdate.
        """
        delta = self.rules.score_for_lines(lines_cleared)
        old_score = self.score
        self.score += delta
        self.lines += max(lines_cleared, 0)

        threshold = self.rules.level_score_threshold
        level_changed = self.score // threshold > old_score // threshold
        if level_changed:
            self.level += 1

        return ScoreUpdate(
            lines_cleared=lines_cleared,
            score_delta=delta,
            level_changed=level_changed,
        )
