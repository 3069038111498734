from __future__ import annotations

"""Round session: the state of one round in progress.

Front ends own a RoundSession and drive it with key presses and submits; the
session grades answers, times them, records results and feeds the
persistent stats store after every answer.
"""

import random
from dataclasses import dataclass, field
from typing import List, Optional

from ..drills.question_set import TOTAL_QUESTIONS, Mode, QuestionSpec, generate_questions
from ..results.result_manager import RoundResultAggregator
from ..results.schema import RoundResult
from ..storage.store import FactStatsStore
from ..util.clock import Clock, MonotonicClock
from .explain import trace as xtrace

MAX_DIGITS = 3  # 12 x 12 = 144
CORRECT_DELAY_MS = 800
INCORRECT_DELAY_MS = 1500


@dataclass
class RoundSession:
    questions: List[QuestionSpec]
    store: FactStatsStore
    clock: Clock = field(default_factory=MonotonicClock)
    max_digits: int = MAX_DIGITS
    correct_delay_ms: int = CORRECT_DELAY_MS
    incorrect_delay_ms: int = INCORRECT_DELAY_MS
    index: int = 0
    answer_buffer: str = ""
    showing_feedback: bool = False
    question_started_at: float = 0.0
    abandoned: bool = False
    results: RoundResultAggregator = field(init=False)

    def __post_init__(self) -> None:
        self.results = RoundResultAggregator(total=len(self.questions))

    @classmethod
    def start(
        cls,
        mode: Mode,
        store: FactStatsStore,
        rng: Optional[random.Random] = None,
        clock: Optional[Clock] = None,
        count: int = TOTAL_QUESTIONS,
        max_digits: int = MAX_DIGITS,
        correct_delay_ms: int = CORRECT_DELAY_MS,
        incorrect_delay_ms: int = INCORRECT_DELAY_MS,
    ) -> "RoundSession":
        questions = generate_questions(mode, rng, count)
        session = cls(
            questions=questions,
            store=store,
            clock=clock or MonotonicClock(),
            max_digits=max_digits,
            correct_delay_ms=correct_delay_ms,
            incorrect_delay_ms=incorrect_delay_ms,
        )
        xtrace("round_started", {"mode": str(mode), "questions": len(questions)})
        session._present()
        return session

    def _present(self) -> None:
        self.answer_buffer = ""
        self.question_started_at = self.clock.time()

    @property
    def finished(self) -> bool:
        return self.index >= len(self.questions)

    @property
    def current_question(self) -> Optional[QuestionSpec]:
        if self.finished:
            return None
        return self.questions[self.index]

    @property
    def progress(self) -> str:
        return f"{min(self.index + 1, len(self.questions))} / {len(self.questions)}"

    def press_digit(self, digit: str) -> None:
        if self.showing_feedback or self.finished:
            return
        if len(digit) != 1 or not digit.isdigit():
            return
        if len(self.answer_buffer) >= self.max_digits:
            return
        self.answer_buffer += digit

    def backspace(self) -> None:
        if self.showing_feedback:
            return
        self.answer_buffer = self.answer_buffer[:-1]

    def submit(self) -> Optional[RoundResult]:
        """Grade the typed answer. Returns None when there is nothing to submit."""
        if self.answer_buffer == "" or self.showing_feedback or self.finished:
            return None
        q = self.questions[self.index]
        user_answer = int(self.answer_buffer)
        elapsed = self.clock.time() - self.question_started_at
        result = RoundResult(
            a=q.a,
            b=q.b,
            correct=user_answer == q.answer,
            user_answer=user_answer,
            expected=q.answer,
            time_taken_seconds=elapsed,
        )
        self.results.add(result)
        xtrace("answer_submitted", {"index": self.index, **result.to_json()})

        # keyed by the displayed operand order
        self.store.update(q.a, q.b, result.correct, elapsed)
        self.showing_feedback = True
        return result

    def feedback_delay_ms(self, result: RoundResult) -> int:
        return self.correct_delay_ms if result.correct else self.incorrect_delay_ms

    def advance(self) -> None:
        """Leave feedback and move on to the next question (if any)."""
        if not self.showing_feedback:
            return
        self.showing_feedback = False
        self.index += 1
        if self.finished:
            xtrace("round_finished", self.results.summary())
            return
        self._present()

    def abandon(self) -> None:
        """Back out of the round. Stats already saved for answered questions remain."""
        xtrace("round_abandoned", {"answered": self.results.answered})
        self.abandoned = True
        self.showing_feedback = False
        self.answer_buffer = ""
        self.questions = []
        self.index = 0
        self.results = RoundResultAggregator(total=0)
