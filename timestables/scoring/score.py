from __future__ import annotations

"""Attempt quality score: correctness blended with response speed."""

from typing import Optional

from .config import DEFAULT_SCORING, ScoringConfig


def _clamp(value: float) -> float:
    # float weights can overshoot 100 by an ulp (0.3 * 100 == 30.000000000000004)
    return min(100.0, max(0.0, value))


def speed_score(time_seconds: float, cfg: Optional[ScoringConfig] = None) -> float:
    """Map response time to 0..100.

    Full credit up to `fast_seconds`, none from `slow_seconds`, linear between.
    """
    cfg = cfg or DEFAULT_SCORING
    t = float(time_seconds)
    if t <= cfg.fast_seconds:
        return 100.0
    if t >= cfg.slow_seconds:
        return 0.0
    span = cfg.slow_seconds - cfg.fast_seconds
    return 100.0 - ((t - cfg.fast_seconds) / span) * 100.0


def compute_score(correct: bool, time_seconds: float, cfg: Optional[ScoringConfig] = None) -> float:
    """Score a single attempt in 0..100.

    - Accuracy: correct = 100, incorrect = 0 (70% weight)
    - Speed: see speed_score (30% weight)
    """
    cfg = cfg or DEFAULT_SCORING
    acc = 100.0 if correct else 0.0
    return _clamp(acc * cfg.accuracy_weight + speed_score(time_seconds, cfg) * cfg.speed_weight)


def blend(previous: float, latest: float, alpha: float) -> float:
    """Exponential moving average step: move `alpha` of the way to `latest`."""
    return _clamp(previous * (1 - alpha) + latest * alpha)
