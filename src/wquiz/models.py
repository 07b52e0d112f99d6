from typing import List, Optional, Set

from pydantic import BaseModel, Field, field_validator


# --- Bank (read-only, as served by the bank service) ---
class BankQuestion(BaseModel):
    question: str
    options: List[str]
    answer: List[str]

    @field_validator("answer")
    @classmethod
    def answer_not_empty(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("a question needs at least one correct answer")
        return value


class Week(BaseModel):
    name: str
    questions: List[BankQuestion] = Field(default_factory=list)

    @property
    def number(self) -> Optional[int]:
        """Numeric week label, or None when the name is not an integer."""
        try:
            return int(self.name.strip())
        except ValueError:
            return None


class Bank(BaseModel):
    title: str
    weeks: List[Week] = Field(default_factory=list)


# --- Session ---
class SessionQuestion(BaseModel):
    question: str
    options: List[str]
    expected_answer: str
    week_label: str
    selected_answer: Optional[str] = None

    @classmethod
    def from_bank(cls, item: BankQuestion, week_label: str) -> "SessionQuestion":
        # Only the first listed answer is scored.
        return cls(
            question=item.question,
            options=list(item.options),
            expected_answer=item.answer[0],
            week_label=week_label,
        )

    @property
    def is_answered(self) -> bool:
        return self.selected_answer is not None

    @property
    def is_correct(self) -> bool:
        return self.selected_answer == self.expected_answer


class SessionParams(BaseModel):
    course_code: str
    weeks: Set[int] = Field(default_factory=set)
    question_count: int = 0
    time_budget_seconds: int


class ScoreReport(BaseModel):
    score: int
    total: int
    percentage: float
    tier: str
