from __future__ import annotations

"""Scoring hyperparameters using Pydantic."""

from pydantic import BaseModel, Field, model_validator


class ScoringConfig(BaseModel):
    """Weights and thresholds for attempt scoring and confidence smoothing.

    - accuracy_weight / speed_weight: blend of the two sub-scores
    - fast_seconds: answers at or under this get full speed credit
    - slow_seconds: answers at or over this get no speed credit
    - ema_alpha: share of each new attempt in the smoothed confidence
    """

    accuracy_weight: float = Field(0.7, ge=0, le=1)
    speed_weight: float = Field(0.3, ge=0, le=1)
    fast_seconds: float = Field(2.0, ge=0)
    slow_seconds: float = Field(8.0, gt=0)
    ema_alpha: float = Field(0.3, gt=0, le=1)

    @model_validator(mode="after")
    def _check_ranges(self) -> "ScoringConfig":
        if self.fast_seconds >= self.slow_seconds:
            raise ValueError("fast_seconds must be < slow_seconds")
        if abs(self.accuracy_weight + self.speed_weight - 1.0) > 1e-9:
            raise ValueError("accuracy_weight + speed_weight must equal 1")
        return self


DEFAULT_SCORING = ScoringConfig()
