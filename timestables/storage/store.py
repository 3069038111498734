from __future__ import annotations

"""JSON-backed store for per-fact mastery records.

The whole table lives in one keyed entry, `<data_dir>/<storage_key>.json`:

    {"7_8": {"confidence": 82.5, "attempts": 6}, "8_7": {...}, ...}

Keys are ordered: 7x8 and 8x7 are tracked separately. The table is read
wholesale, mutated, and written back as one unit after every update. Reads
fail soft: a missing, unparsable or wrongly shaped entry loads as an empty
table.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from ..app.explain import trace as xtrace
from ..scoring.config import DEFAULT_SCORING, ScoringConfig
from ..scoring.score import blend, compute_score
from .schema import STORAGE_KEY, FactRecord, StatsTable, parse_stat_key, stat_key


def _decode(raw: Any) -> StatsTable:
    if not isinstance(raw, dict):
        raise ValueError("stats entry must be a JSON object")
    table: StatsTable = {}
    for k, v in raw.items():
        table[parse_stat_key(k)] = FactRecord.model_validate(v)
    return table


def _encode(table: StatsTable) -> Dict[str, Dict[str, Any]]:
    return {stat_key(a, b): rec.model_dump() for (a, b), rec in table.items()}


class FactStatsStore:
    """Persisted mapping of ordered fact -> FactRecord."""

    def __init__(
        self,
        data_dir: str | Path,
        storage_key: str = STORAGE_KEY,
        scoring: Optional[ScoringConfig] = None,
    ) -> None:
        self.data_dir = Path(data_dir).expanduser()
        self.storage_key = storage_key
        self.scoring = scoring or DEFAULT_SCORING

    @property
    def path(self) -> Path:
        return self.data_dir / f"{self.storage_key}.json"

    def load(self) -> StatsTable:
        """Read the persisted table; corruption or absence gives {}."""
        p = self.path
        if not p.exists():
            return {}
        try:
            with p.open("r", encoding="utf-8") as f:
                return _decode(json.load(f))
        except (OSError, ValueError, ValidationError, RecursionError) as e:
            # json.JSONDecodeError is a ValueError
            xtrace("stats_corrupt", {"path": str(p), "error": type(e).__name__})
            return {}

    def save(self, table: StatsTable) -> None:
        """Replace the persisted table with `table` (write temp file, then rename)."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=f".{self.storage_key}.", suffix=".tmp", dir=self.data_dir)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(_encode(table), f, separators=(",", ":"))
            os.replace(tmp, self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def get(self, a: int, b: int) -> Optional[FactRecord]:
        return self.load().get((a, b))

    def update(self, a: int, b: int, correct: bool, time_seconds: float) -> FactRecord:
        """Fold one attempt at a x b into its record and persist the table."""
        table = self.load()
        key = (a, b)
        new_score = compute_score(correct, time_seconds, self.scoring)

        rec = table.get(key)
        if rec is not None:
            rec.confidence = blend(rec.confidence, new_score, self.scoring.ema_alpha)
            rec.attempts += 1
        else:
            rec = FactRecord(confidence=new_score, attempts=1)
            table[key] = rec

        self.save(table)
        xtrace(
            "stats_updated",
            {"key": stat_key(a, b), "score": round(new_score, 2), "confidence": round(rec.confidence, 2), "attempts": rec.attempts},
        )
        return rec
