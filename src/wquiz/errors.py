"""Exceptions raised by the quiz session core."""

from typing import Optional


class QuizError(Exception):
    """Base exception for quiz session errors."""

    pass


class InvalidUrlError(QuizError):
    """The routing path or its query parameters could not be parsed."""

    pass


class NetworkError(QuizError):
    """The question bank could not be retrieved."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class BankFormatError(QuizError):
    """The bank service answered with a payload that is not a bank."""

    pass


class EmptySelectionError(QuizError):
    """No questions are left after filtering and sampling."""

    pass


class ValidationError(QuizError):
    """Advance was requested before an answer was selected."""

    pass


class SessionClosedError(QuizError):
    """The session has already been submitted."""

    pass


class SessionNotFoundError(QuizError):
    """No active session for the given id."""

    pass
