"""
Quiz session state machine.

A session starts in ``ANSWERING`` and moves to ``SUBMITTED`` exactly once,
either when the user advances past the last question or when the countdown
reaches zero. Both paths go through ``QuizSession.submit``.
"""

import logging
import uuid
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Sequence

from .config import settings
from .errors import SessionClosedError, ValidationError
from .models import ScoreReport, SessionQuestion
from .scoring import score_questions
from .timer import CountdownTimer, format_clock

logger = logging.getLogger(__name__)


class SessionState(Enum):
    ANSWERING = "answering"
    SUBMITTED = "submitted"


class QuizSession:
    def __init__(
        self,
        questions: Sequence[SessionQuestion],
        time_remaining_seconds: int,
        course_code: str = "",
        title: str = "",
        session_id: Optional[str] = None,
        tick_interval: float = settings.TICK_SECONDS,
        warning_threshold: int = settings.WARNING_THRESHOLD_SECONDS,
    ):
        self.session_id = session_id or str(uuid.uuid4())
        self.course_code = course_code
        self.title = title
        self.created_at = datetime.now()

        self.questions = tuple(questions)
        self.current_index = 0
        self.time_budget_seconds = max(0, int(time_remaining_seconds))
        self.time_remaining_seconds = self.time_budget_seconds
        self.state = SessionState.ANSWERING
        self.score = 0
        self.report: Optional[ScoreReport] = None
        self.warning_shown = False
        self.validation_error = False
        self.submit_trigger: Optional[str] = None
        self._torn_down = False

        self.timer = CountdownTimer(self, tick_interval, warning_threshold)

    # --- State ---
    @property
    def submitted(self) -> bool:
        return self.state is SessionState.SUBMITTED

    @property
    def total_questions(self) -> int:
        return len(self.questions)

    @property
    def current_question(self) -> SessionQuestion:
        return self.questions[self.current_index]

    @property
    def is_last_question(self) -> bool:
        return self.current_index == self.total_questions - 1

    @property
    def answered_count(self) -> int:
        return sum(1 for q in self.questions if q.is_answered)

    def _require_answering(self) -> None:
        if self.submitted:
            raise SessionClosedError("The quiz has already been submitted.")

    # --- Navigation ---
    def select_answer(self, answer: str) -> None:
        self._require_answering()
        self.current_question.selected_answer = answer
        self.validation_error = False

    def advance(self) -> None:
        """Move to the next question, or submit from the last one.

        Raises ValidationError, leaving the cursor where it is, when the
        current question has no selected answer.
        """
        self._require_answering()
        if not self.current_question.is_answered:
            self.validation_error = True
            raise ValidationError("Please select an answer before proceeding")

        self.validation_error = False
        if self.is_last_question:
            self.submit(trigger="navigation")
        else:
            self.current_index += 1

    # --- Lifecycle ---
    def start(self) -> None:
        self.timer.start()

    def submit(self, trigger: str = "navigation") -> ScoreReport:
        """Answering -> Submitted. A no-op returning the stored report when
        the session is already submitted."""
        if self.submitted:
            logger.debug(f"Session {self.session_id}: ignoring repeated submit ({trigger})")
            return self.report

        self.timer.cancel()
        self.state = SessionState.SUBMITTED
        self.submit_trigger = trigger
        self.validation_error = False
        self.report = score_questions(self.questions)
        self.score = self.report.score
        logger.info(
            f"Session {self.session_id} submitted by {trigger}: "
            f"{self.report.score}/{self.report.total} ({self.report.percentage}%)"
        )
        return self.report

    def teardown(self) -> None:
        if self._torn_down:
            return
        self._torn_down = True
        self.timer.cancel()
        logger.info(f"Session {self.session_id} torn down")

    # --- Presentation ---
    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "session_id": self.session_id,
            "course_code": self.course_code,
            "title": self.title,
            "state": self.state.value,
            "submitted": self.submitted,
            "current_index": self.current_index,
            "total_questions": self.total_questions,
            "answered_count": self.answered_count,
            "time_remaining_seconds": self.time_remaining_seconds,
            "clock": format_clock(self.time_remaining_seconds),
            "warning_shown": self.warning_shown,
            "validation_error": self.validation_error,
        }
        if self.submitted:
            data["report"] = self.report.model_dump()
        else:
            q = self.current_question
            data["question"] = {
                "number": self.current_index + 1,
                "week_label": q.week_label,
                "question": q.question,
                "options": q.options,
                "selected_answer": q.selected_answer,
                "is_last_question": self.is_last_question,
            }
        return data
