from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_points: int = 100
    hard_drop_points_per_cell: int = 2

    def score_for_lines(self, lines: int) -> int:
        if lines <= 0:
            return 0
        return lines * self.line_clear_points

    def score_for_hard_drop(self, distance: int) -> int:
        return max(0, distance) * self.hard_drop_points_per_cell


@dataclass
class SpeedRamp:
    """Gravity interval as a function of score.

    The interval shrinks by `step_ms` for every full `score_threshold` points,
    never going below `min_interval_ms`.
    """

    initial_interval_ms: int = 1000
    step_ms: int = 100
    score_threshold: int = 1000
    min_interval_ms: int = 100

    def __post_init__(self) -> None:
        if self.score_threshold <= 0:
            raise ValueError("score_threshold must be positive")
        if self.step_ms < 0:
            raise ValueError("step_ms cannot be negative")
        if self.min_interval_ms > self.initial_interval_ms:
            raise ValueError("min_interval_ms cannot exceed initial_interval_ms")

    def interval_for_score(self, score: int) -> int:
        crossings = max(0, score) // self.score_threshold
        return max(self.min_interval_ms, self.initial_interval_ms - crossings * self.step_ms)
