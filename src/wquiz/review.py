"""Post-submission review: incorrect-only filtering, expand/collapse and the
terminal navigation targets offered on the results screen."""

import logging
from enum import Enum
from typing import Any, Dict, List, Optional

from .models import SessionQuestion
from .session import QuizSession

logger = logging.getLogger(__name__)

NOT_ANSWERED = "Not answered"


class NavigationTarget(Enum):
    RETRY = "/quiz"
    HOME = "/"

    @classmethod
    def from_name(cls, name: str) -> "NavigationTarget":
        return cls[name.upper()]


class ReviewCoordinator:
    def __init__(self, session: QuizSession):
        self.session = session
        self.show_only_incorrect = False
        self.expanded_index: Optional[int] = None

    def set_filter(self, only_incorrect: bool) -> None:
        self.show_only_incorrect = only_incorrect

    def displayed(self) -> List[SessionQuestion]:
        if not self.session.submitted:
            return []
        if self.show_only_incorrect:
            return [q for q in self.session.questions if not q.is_correct]
        return list(self.session.questions)

    def toggle_expand(self, display_index: int) -> None:
        if not self.session.submitted:
            return
        if not 0 <= display_index < len(self.displayed()):
            return
        if self.expanded_index == display_index:
            self.expanded_index = None
        else:
            self.expanded_index = display_index

    def items(self) -> List[Dict[str, Any]]:
        return [
            {
                "display_index": i,
                "number": i + 1,
                "week_label": q.week_label,
                "question": q.question,
                "selected_answer": q.selected_answer or NOT_ANSWERED,
                "expected_answer": q.expected_answer,
                "is_correct": q.is_correct,
                "expanded": i == self.expanded_index,
            }
            for i, q in enumerate(self.displayed())
        ]

    def summary(self) -> Dict[str, Any]:
        report = self.session.report
        return {
            "report": report.model_dump() if report else None,
            "shown": len(self.displayed()),
            "total": self.session.total_questions,
            "show_only_incorrect": self.show_only_incorrect,
            "expanded_index": self.expanded_index,
        }

    def navigate(self, target: NavigationTarget) -> str:
        """Ends the review; the caller leaves for the returned path."""
        logger.info(f"Session {self.session.session_id}: leaving review for {target.name.lower()}")
        self.session.teardown()
        return target.value
