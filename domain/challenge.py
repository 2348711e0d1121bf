"""
Domain: Math challenge shown on the contact form.

Rules implemented here:
- Operands are drawn uniformly from 1..10 inclusive.
- The operator is drawn uniformly from {+, -}.
- Subtraction always puts the larger operand first, so the answer is never negative.
- A challenge is generated per form render and never reused across requests.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional

MIN_OPERAND = 1
MAX_OPERAND = 10


class ChallengeOperator(str, Enum):
    ADD = "+"
    SUBTRACT = "-"

    def apply(self, left: int, right: int) -> int:
        if self is ChallengeOperator.ADD:
            return left + right
        return left - right


@dataclass(frozen=True, slots=True)
class MathChallenge:
    """
    A single arithmetic question and its expected answer.

    The operands and operator are kept alongside the rendered question so
    callers (and tests) can re-evaluate it without parsing the text.
    """

    left: int
    operator: ChallengeOperator
    right: int

    def __post_init__(self) -> None:
        if self.operator is ChallengeOperator.SUBTRACT and self.left < self.right:
            raise ValueError("subtraction challenges must not produce a negative answer")

    @property
    def question(self) -> str:
        return f"What is {self.left} {self.operator.value} {self.right}?"

    @property
    def answer(self) -> int:
        return self.operator.apply(self.left, self.right)

    def is_correct(self, submitted: Optional[int]) -> bool:
        return submitted is not None and submitted == self.answer


def generate_math_challenge(rng: Optional[random.Random] = None) -> MathChallenge:
    """
    Draw a fresh challenge.

    Args:
        rng: Random source; defaults to the module-level generator.
    """

    source = rng or random
    first = source.randint(MIN_OPERAND, MAX_OPERAND)
    second = source.randint(MIN_OPERAND, MAX_OPERAND)
    operator = source.choice(list(ChallengeOperator))

    if operator is ChallengeOperator.SUBTRACT:
        return MathChallenge(left=max(first, second), operator=operator, right=min(first, second))
    return MathChallenge(left=first, operator=operator, right=second)


__all__ = [
    "ChallengeOperator",
    "MathChallenge",
    "generate_math_challenge",
]
