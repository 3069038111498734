from __future__ import annotations

"""Mastery grid: the 12 x 12 view of per-fact confidence."""

import math
from typing import Tuple

import numpy as np
import pandas as pd

from ..storage.schema import MAX_FACTOR, MIN_FACTOR, StatsTable

MIN_ATTEMPTS = 5

RED = (239, 68, 68)
YELLOW = (234, 179, 8)
GREEN = (34, 197, 94)

_FACTORS = list(range(MIN_FACTOR, MAX_FACTOR + 1))


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def _lerp(c0: Tuple[int, int, int], c1: Tuple[int, int, int], t: float) -> Tuple[int, int, int]:
    return tuple(_round_half_up(a + (b - a) * t) for a, b in zip(c0, c1))  # type: ignore[return-value]


def confidence_color(value: float) -> Tuple[int, int, int]:
    """RGB for a confidence in 0..100: red at 0, yellow at 50, green at 100."""
    v = min(100.0, max(0.0, float(value)))
    if v <= 50:
        return _lerp(RED, YELLOW, v / 50)
    return _lerp(YELLOW, GREEN, (v - 50) / 50)


def mastery_grid(table: StatsTable, min_attempts: int = MIN_ATTEMPTS) -> pd.DataFrame:
    """Confidence per (row a, column b); NaN where attempts < min_attempts."""
    grid = pd.DataFrame(np.nan, index=pd.Index(_FACTORS, name="a"), columns=pd.Index(_FACTORS, name="b"), dtype="float64")
    for (a, b), rec in table.items():
        if a in grid.index and b in grid.columns and rec.attempts >= min_attempts:
            grid.loc[a, b] = float(rec.confidence)
    return grid


def attempts_grid(table: StatsTable) -> pd.DataFrame:
    grid = pd.DataFrame(0, index=pd.Index(_FACTORS, name="a"), columns=pd.Index(_FACTORS, name="b"), dtype="int64")
    for (a, b), rec in table.items():
        if a in grid.index and b in grid.columns:
            grid.loc[a, b] = int(rec.attempts)
    return grid


def has_any_score(table: StatsTable, min_attempts: int = MIN_ATTEMPTS) -> bool:
    return any(rec.attempts >= min_attempts for rec in table.values())


def format_grid(table: StatsTable, min_attempts: int = MIN_ATTEMPTS) -> str:
    """Plain-text grid; '–' marks facts without enough attempts yet."""
    grid = mastery_grid(table, min_attempts)
    width = 4
    lines = [" ×".rjust(width) + "".join(str(c).rjust(width) for c in grid.columns)]
    for a, row in grid.iterrows():
        cells = ["–" if pd.isna(v) else str(_round_half_up(v)) for v in row]
        lines.append(str(a).rjust(width) + "".join(c.rjust(width) for c in cells))
    if not has_any_score(table, min_attempts):
        lines.append("")
        lines.append(f"No facts with {min_attempts}+ attempts yet. Keep playing!")
    return "\n".join(lines)
