"""Parsing of the quiz routing input: ``/quiz/<courseCode>?weeks=&numQ=&time=``."""

import logging
import re
from typing import Optional, Set
from urllib.parse import parse_qs, unquote, urlsplit

from .config import settings
from .errors import InvalidUrlError
from .models import SessionParams

logger = logging.getLogger(__name__)

QUIZ_SEGMENT = "/quiz/"
TIME_PATTERN = re.compile(r"(\d{2})(\d{2})(\d{2})")


def extract_course_code(path: str) -> str:
    if QUIZ_SEGMENT not in path:
        raise InvalidUrlError("Invalid quiz URL format.")
    course_code = unquote(path.split(QUIZ_SEGMENT, 1)[1].split("/", 1)[0]).strip()
    if not course_code:
        raise InvalidUrlError("Course code not found in URL.")
    return course_code


def parse_weeks(raw: Optional[str]) -> Set[int]:
    """Parses a dash-separated week list such as ``1-2-5``.

    Tokens that are not positive integers can never match a week and are
    dropped.
    """
    weeks: Set[int] = set()
    if not raw:
        return weeks
    for token in raw.split("-"):
        token = token.strip()
        if token.isdecimal() and int(token) > 0:
            weeks.add(int(token))
        else:
            logger.warning(f"Ignoring invalid week label {token!r} in {raw!r}")
    return weeks


def parse_question_count(raw: Optional[str]) -> int:
    if raw is None or raw.strip() == "":
        return 0
    raw = raw.strip()
    if not raw.isdecimal():
        raise InvalidUrlError(f"Invalid question count: {raw!r}")
    return int(raw)


def parse_time_budget(raw: Optional[str], default: int = settings.DEFAULT_TIME_SECONDS) -> int:
    """Converts an ``HHMMSS`` string to seconds, falling back to ``default``
    when the value is absent or zero."""
    if raw is None or raw.strip() == "":
        return default
    match = TIME_PATTERN.fullmatch(raw.strip())
    if not match:
        raise InvalidUrlError(f"Invalid time budget {raw!r}, expected HHMMSS")
    hours, minutes, seconds = (int(part) for part in match.groups())
    if minutes >= 60 or seconds >= 60:
        raise InvalidUrlError(f"Invalid time budget {raw!r}, expected HHMMSS")
    total = hours * 3600 + minutes * 60 + seconds
    return total if total > 0 else default


def parse_session_url(url: str, default_time: int = settings.DEFAULT_TIME_SECONDS) -> SessionParams:
    parts = urlsplit(url)
    course_code = extract_course_code(parts.path)
    query = parse_qs(parts.query, keep_blank_values=True)

    def first(name: str) -> Optional[str]:
        values = query.get(name)
        return values[0] if values else None

    return SessionParams(
        course_code=course_code,
        weeks=parse_weeks(first("weeks")),
        question_count=parse_question_count(first("numQ")),
        time_budget_seconds=parse_time_budget(first("time"), default_time),
    )
