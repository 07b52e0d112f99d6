import logging
import random
from typing import Optional

from .bank import BankSource
from .config import settings
from .errors import QuizError
from .generator import QuizFactory
from .params import parse_session_url
from .session import QuizSession

logger = logging.getLogger(__name__)


async def initialize_session(
    url: str,
    bank_source: BankSource,
    mode: str = "standard",
    rng: Optional[random.Random] = None,
    tick_interval: float = settings.TICK_SECONDS,
) -> QuizSession:
    """Builds a new session from a ``/quiz/<courseCode>?...`` URL.

    Any failure is terminal: the error propagates and no session exists.
    The returned session's timer is not started yet.
    """
    try:
        params = parse_session_url(url, settings.DEFAULT_TIME_SECONDS)
        bank = await bank_source.fetch(params.course_code)
        questions = QuizFactory.create(mode, rng).generate(bank, params)
    except QuizError as e:
        logger.warning(f"Session initialization failed for {url}: {e}")
        raise

    session = QuizSession(
        questions,
        params.time_budget_seconds,
        course_code=params.course_code,
        title=bank.title,
        tick_interval=tick_interval,
    )
    logger.info(
        f"New session: {session.session_id} [Course: {params.course_code}, "
        f"Questions: {session.total_questions}, Time: {session.time_remaining_seconds}s]"
    )
    return session
