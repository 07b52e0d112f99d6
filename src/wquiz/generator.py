import logging
import random
from abc import ABC, abstractmethod
from typing import List, MutableSequence, Optional, TypeVar

from .errors import EmptySelectionError
from .models import Bank, SessionParams, SessionQuestion

logger = logging.getLogger(__name__)

T = TypeVar("T")


def uniform_shuffle(items: MutableSequence[T], rng: Optional[random.Random] = None) -> None:
    """Fisher-Yates shuffle in place: walking down from the last index, swap
    each slot with a uniformly chosen slot at or below it."""
    rng = rng or random.Random()
    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(0, i)
        items[i], items[j] = items[j], items[i]


def collect_candidates(bank: Bank, weeks: set) -> List[SessionQuestion]:
    """Flattens the questions of the selected weeks, in bank order."""
    return [
        SessionQuestion.from_bank(item, week.name)
        for week in bank.weeks
        if week.number is not None and week.number in weeks
        for item in week.questions
    ]


# --- Strategy Pattern: Quiz Generators ---
class QuizGenerator(ABC):
    """Abstract Base Class for session question selection strategies."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    @abstractmethod
    def generate(self, bank: Bank, params: SessionParams) -> List[SessionQuestion]:
        pass


class WeekSampleGenerator(QuizGenerator):
    """Standard mode: uniformly samples numQ questions from the chosen weeks."""

    def generate(self, bank: Bank, params: SessionParams) -> List[SessionQuestion]:
        candidates = collect_candidates(bank, params.weeks)
        if not candidates:
            raise EmptySelectionError("No questions available for the selected weeks.")
        if params.question_count == 0:
            raise EmptySelectionError("No questions requested.")

        uniform_shuffle(candidates, self.rng)
        selected = candidates[: min(params.question_count, len(candidates))]
        logger.info(
            f"Sampled {len(selected)} of {len(candidates)} candidates "
            f"from weeks {sorted(params.weeks)}"
        )
        return selected


class QuizFactory:
    """Factory to select the appropriate generator."""

    @staticmethod
    def create(mode: str = "standard", rng: Optional[random.Random] = None) -> QuizGenerator:
        if mode != "standard":
            logger.warning(f"Unknown quiz mode {mode!r}, using standard")
        return WeekSampleGenerator(rng)
