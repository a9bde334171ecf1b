# tests/test_rules.py
from __future__ import annotations

import pytest

from falling_blocks.game import ScoringRules, SpeedRamp


@pytest.mark.parametrize(
    "score, interval",
    [(0, 1000), (999, 1000), (1000, 900), (2500, 800), (8999, 200), (9000, 100), (250000, 100)],
)
def test_interval_for_score(score: int, interval: int) -> None:
    assert SpeedRamp().interval_for_score(score) == interval


def test_interval_is_non_increasing_in_score() -> None:
    ramp = SpeedRamp()
    intervals = [ramp.interval_for_score(s) for s in range(0, 12000, 50)]
    assert all(a >= b for a, b in zip(intervals, intervals[1:]))
    assert min(intervals) == 100


def test_ramp_rejects_invalid_threshold() -> None:
    with pytest.raises(ValueError):
        SpeedRamp(score_threshold=0)
    with pytest.raises(ValueError):
        SpeedRamp(initial_interval_ms=100, min_interval_ms=200)


def test_ramp_rejects_negative_step() -> None:
    with pytest.raises(ValueError):
        SpeedRamp(step_ms=-100)
    assert SpeedRamp(step_ms=0).interval_for_score(50_000) == 1000


def test_scoring_rules() -> None:
    rules = ScoringRules()
    assert rules.score_for_lines(0) == 0
    assert rules.score_for_lines(1) == 100
    assert rules.score_for_lines(4) == 400
    assert rules.score_for_hard_drop(0) == 0
    assert rules.score_for_hard_drop(22) == 44
