from __future__ import annotations

"""Question-set generation for a round of times-table questions.

Two modes:

- a single table n (1..12): every n x k for k in 1..12 appears at least once,
  plus three repeats, in shuffled order;
- "mixed": 15 independent uniform draws from the full 12 x 12 grid.

In both modes each question's operands are swapped for display with
probability 0.5. The answer is computed before the swap, so it is the same
either way.
"""

import random
from dataclasses import dataclass
from typing import List, MutableSequence, Optional, TypeVar, Union

TOTAL_QUESTIONS = 15
TABLE_SIZE = 12
MIXED = "mixed"

Mode = Union[int, str]
T = TypeVar("T")


@dataclass(frozen=True)
class QuestionSpec:
    a: int
    b: int
    answer: int


def shuffle(items: MutableSequence[T], rng: random.Random) -> MutableSequence[T]:
    """Fisher-Yates shuffle in place; returns `items` for chaining."""
    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(0, i)
        items[i], items[j] = items[j], items[i]
    return items


def parse_mode(text: str) -> Mode:
    """Turn user input ("mixed", "7") into a mode. Raises ValueError otherwise."""
    t = str(text).strip().lower()
    if t == MIXED:
        return MIXED
    try:
        n = int(t)
    except ValueError:
        raise ValueError(f"Unknown mode: {text!r} (expected 1-{TABLE_SIZE} or '{MIXED}')") from None
    if not (1 <= n <= TABLE_SIZE):
        raise ValueError(f"Table must be in 1..{TABLE_SIZE}, got {n}")
    return n


def _mixed_pairs(rng: random.Random, count: int) -> List[tuple[int, int]]:
    return [(rng.randint(1, TABLE_SIZE), rng.randint(1, TABLE_SIZE)) for _ in range(count)]


def _table_pairs(n: int, rng: random.Random, count: int) -> List[tuple[int, int]]:
    pool = shuffle([(n, k) for k in range(1, TABLE_SIZE + 1)], rng)
    # cycle through the shuffled pool so every fact shows up before any repeats
    pairs = [pool[i % len(pool)] for i in range(count)]
    return list(shuffle(pairs, rng))


def generate_questions(
    mode: Mode,
    rng: Optional[random.Random] = None,
    count: int = TOTAL_QUESTIONS,
) -> List[QuestionSpec]:
    """Build the ordered question list for one round.

    `mode` is "mixed" or a table number (int or numeric string); it is assumed
    already validated by the caller (see parse_mode).
    """
    rng = rng or random.Random()
    if mode == MIXED:
        pairs = _mixed_pairs(rng, count)
    else:
        pairs = _table_pairs(int(mode), rng, count)

    questions: List[QuestionSpec] = []
    for a, b in pairs:
        if rng.random() < 0.5:
            questions.append(QuestionSpec(a=b, b=a, answer=a * b))
        else:
            questions.append(QuestionSpec(a=a, b=b, answer=a * b))
    return questions
