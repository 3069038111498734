from __future__ import annotations

"""Result schema dataclasses."""

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class RoundResult:
    """Outcome of one answered question, as displayed (a x b)."""

    a: int
    b: int
    correct: bool
    user_answer: int
    expected: int
    time_taken_seconds: float

    def to_json(self) -> Dict[str, Any]:
        return asdict(self)
