from __future__ import annotations

"""Schema constants and Pydantic model for persisted per-fact mastery records."""

import re
from typing import Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field

# --- Constants ---

STORAGE_KEY = "timesTableTurboStats"
MIN_FACTOR = 1
MAX_FACTOR = 12

_KEY_RE = re.compile(r"^(\d+)_(\d+)$")

FactKey = Tuple[int, int]


# --- Pydantic models ---

class FactRecord(BaseModel):
    """Smoothed mastery estimate for one ordered fact (a, b)."""

    model_config = ConfigDict(strict=True)

    confidence: float = Field(ge=0, le=100)
    attempts: int = Field(ge=1)


StatsTable = Dict[FactKey, FactRecord]


def stat_key(a: int, b: int) -> str:
    """Persisted key for the ordered fact (a, b): "a_b"."""
    return f"{a}_{b}"


def parse_stat_key(key: str) -> FactKey:
    """Inverse of stat_key. Raises ValueError on anything else."""
    m = _KEY_RE.match(str(key))
    if not m:
        raise ValueError(f"Bad stats key: {key!r}")
    return int(m.group(1)), int(m.group(2))
