from __future__ import annotations

"""End-of-round tally over the answered questions.

Read-side only: persisted mastery stats are updated per answer by the
session, not here.
"""

from typing import Any, Dict, List

from .schema import RoundResult

TIER_PERFECT = "perfect"
TIER_AMAZING = "amazing"
TIER_GREAT = "great"
TIER_KEEP_PRACTISING = "keep_practising"

TIER_TITLES = {
    TIER_PERFECT: "Perfect Round!",
    TIER_AMAZING: "Amazing!",
    TIER_GREAT: "Great Job!",
    TIER_KEEP_PRACTISING: "Keep Practising!",
}


# absolute correct-answer counts, independent of round length
AMAZING_MIN_CORRECT = 12
GREAT_MIN_CORRECT = 8


def tier_for(correct_count: int, total: int = 15) -> str:
    """Perfect means every question right; the other tiers use fixed counts."""
    if correct_count == total:
        return TIER_PERFECT
    if correct_count >= AMAZING_MIN_CORRECT:
        return TIER_AMAZING
    if correct_count >= GREAT_MIN_CORRECT:
        return TIER_GREAT
    return TIER_KEEP_PRACTISING


class RoundResultAggregator:
    def __init__(self, total: int = 15) -> None:
        self.total = total
        self._results: List[RoundResult] = []

    def add(self, result: RoundResult) -> None:
        self._results.append(result)

    @property
    def results(self) -> List[RoundResult]:
        return list(self._results)

    @property
    def answered(self) -> int:
        return len(self._results)

    @property
    def correct_count(self) -> int:
        return sum(1 for r in self._results if r.correct)

    @property
    def wrong_answers(self) -> List[RoundResult]:
        return [r for r in self._results if not r.correct]

    @property
    def tier(self) -> str:
        return tier_for(self.correct_count, self.total)

    @property
    def title(self) -> str:
        return TIER_TITLES[self.tier]

    @property
    def score_line(self) -> str:
        return f"{self.correct_count} / {self.total}"

    def detail_lines(self) -> List[str]:
        wrong = self.wrong_answers
        if not wrong:
            return ["You got every question right!"]
        return [f"{r.a} × {r.b} = {r.expected} (you said {r.user_answer})" for r in wrong]

    def summary(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "answered": self.answered,
            "correct": self.correct_count,
            "tier": self.tier,
            "title": self.title,
            "wrong": [r.to_json() for r in self.wrong_answers],
        }
