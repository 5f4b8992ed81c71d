"""
Challenge State Machine
=======================
Sequential goal tracking that goal-oriented demonstrations attach to
themselves.

The cursor only moves forward: a correct answer advances to the next
challenge and adds ``SCORE_INCREMENT`` to the score; a wrong answer returns
``False`` and changes nothing. Once the cursor reaches the end, every
further ``check_answer`` returns ``False``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

logger = logging.getLogger(__name__)

SCORE_INCREMENT: int = 100

ChallengeCallback = Callable[[bool, str], None]


@dataclass(frozen=True)
class Challenge:
    id: str
    question: str
    target_value: float
    tolerance: float
    units: str = ""
    hint: str = ""

    def accepts(self, value: float) -> bool:
        return abs(value - self.target_value) <= self.tolerance


class ChallengeSet:
    """An ordered run of challenges with a cursor and a score."""

    def __init__(self, challenges: Sequence[Challenge], on_result: Optional[ChallengeCallback] = None) -> None:
        self._challenges: tuple[Challenge, ...] = tuple(challenges)
        self._on_result = on_result
        self.index: int = 0
        self.score: int = 0

    def __len__(self) -> int:
        return len(self._challenges)

    @property
    def current(self) -> Optional[Challenge]:
        if self.index < len(self._challenges):
            return self._challenges[self.index]
        return None

    @property
    def is_complete(self) -> bool:
        return self.index >= len(self._challenges)

    def check_answer(self, value: float) -> bool:
        challenge = self.current
        if challenge is None:
            return False
        if not challenge.accepts(value):
            return False

        self.score += SCORE_INCREMENT
        self.index += 1
        logger.debug(f"Challenge '{challenge.id}' solved with {value}; score {self.score}.")

        following = self.current
        if following is not None:
            message = f"Correct! Next Challenge: {following.question}"
        else:
            message = f"All Challenges Complete! Final Score: {self.score}"
        if self._on_result is not None:
            self._on_result(True, message)
        return True

    def progress(self) -> str:
        shown = min(self.index + 1, len(self._challenges))
        return f"Challenge {shown}/{len(self._challenges)} | Score: {self.score}"
