import copy

import pytest

from wquiz.bank import BankSource
from wquiz.errors import NetworkError
from wquiz.models import Bank, SessionQuestion
from wquiz.session import QuizSession

BANK_DATA = {
    "title": "Software Testing",
    "weeks": [
        {
            "name": "1",
            "questions": [
                {"question": "What does a unit test cover?", "options": ["A unit", "The system", "Nothing"], "answer": ["A unit"]},
                {"question": "Which runner is used here?", "options": ["pytest", "nose"], "answer": ["pytest"]},
                {"question": "Is a fixture reusable?", "options": ["Yes", "No"], "answer": ["Yes", "Sometimes"]},
            ],
        },
        {
            "name": "2",
            "questions": [
                {"question": "What is mocking?", "options": ["Faking a collaborator", "Laughing"], "answer": ["Faking a collaborator"]},
                {"question": "What is coverage?", "options": ["Lines run", "Insurance"], "answer": ["Lines run"]},
            ],
        },
        {
            "name": "3",
            "questions": [
                {"question": "What is a regression?", "options": ["A returning bug", "A model"], "answer": ["A returning bug"]},
            ],
        },
        {
            "name": "Bonus",
            "questions": [
                {"question": "Unreachable?", "options": ["Yes"], "answer": ["Yes"]},
            ],
        },
    ],
}


class StaticBankSource(BankSource):
    def __init__(self, bank: Bank):
        self.bank = bank
        self.requested = []

    async def fetch(self, course_code: str) -> Bank:
        self.requested.append(course_code)
        return self.bank


class FailingBankSource(BankSource):
    def __init__(self, status: int = 503):
        self.status = status

    async def fetch(self, course_code: str) -> Bank:
        raise NetworkError("Error fetching quiz content: Service Unavailable", status=self.status)


@pytest.fixture
def bank():
    return Bank.model_validate(BANK_DATA)


@pytest.fixture
def bank_source(bank):
    return StaticBankSource(bank)


@pytest.fixture
def make_session():
    """Builds a session of ``count`` questions whose correct answer is "a"."""

    def factory(count=5, seconds=60, **kwargs):
        questions = [
            SessionQuestion(
                question=f"Question {i + 1}",
                options=["a", "b", "c"],
                expected_answer="a",
                week_label="1",
            )
            for i in range(count)
        ]
        return QuizSession(questions, seconds, course_code="CS101", **kwargs)

    return factory


@pytest.fixture
def failing_bank_source():
    return FailingBankSource


@pytest.fixture
def bank_data():
    return copy.deepcopy(BANK_DATA)
