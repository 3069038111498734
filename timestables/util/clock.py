from __future__ import annotations

"""Clocks used to time answers.

Rounds measure elapsed seconds from the moment a question is shown to the
moment its answer is submitted. The clock is injected so tests can advance
time by hand instead of sleeping.
"""

import time
from typing import Protocol


class Clock(Protocol):
    def time(self) -> float: ...


class MonotonicClock:
    """Wall-clock elapsed time via time.perf_counter()."""

    def time(self) -> float:
        return time.perf_counter()


class FakeClock:
    """Manually advanced clock for tests."""

    def __init__(self, start: float = 0.0) -> None:
        self._now = float(start)

    def time(self) -> float:
        return self._now

    def advance(self, seconds: float) -> None:
        self._now += float(seconds)
