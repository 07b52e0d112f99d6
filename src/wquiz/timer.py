"""
Session countdown with low-time warning and forced submission.
"""

import asyncio
import logging
from typing import TYPE_CHECKING, Optional

from .config import settings

if TYPE_CHECKING:
    from .session import QuizSession

logger = logging.getLogger(__name__)


def format_clock(total_seconds: int) -> str:
    """Renders seconds as ``HH:MM:SS``."""
    total_seconds = max(0, int(total_seconds))
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


class CountdownTimer:
    """
    Cancellable one-second countdown owned by a single session.

    Every tick reads and writes the session record directly, so there is no
    captured copy of the remaining time that could go stale.
    """

    def __init__(
        self,
        session: "QuizSession",
        interval: float = settings.TICK_SECONDS,
        warning_threshold: int = settings.WARNING_THRESHOLD_SECONDS,
    ) -> None:
        self.session = session
        self.interval = interval
        self.warning_threshold = warning_threshold
        self._task: Optional[asyncio.Task] = None
        self._cancelled = False

    @property
    def running(self) -> bool:
        return (
            not self._cancelled
            and not self.session.submitted
            and self.session.time_remaining_seconds > 0
        )

    def start(self) -> None:
        """Schedule the countdown on the running event loop."""
        if self._task is not None or not self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())
        logger.debug(
            f"Timer started for session {self.session.session_id} "
            f"({self.session.time_remaining_seconds}s)"
        )

    async def _run(self) -> None:
        while self.running:
            await asyncio.sleep(self.interval)
            self.tick()

    def tick(self) -> None:
        """Advance the countdown by one second."""
        if not self.running:
            return
        session = self.session
        previous = session.time_remaining_seconds
        session.time_remaining_seconds = previous - 1

        if not session.warning_shown and previous >= self.warning_threshold > session.time_remaining_seconds:
            session.warning_shown = True
            logger.info(f"Session {session.session_id}: {self.warning_threshold} seconds remaining")

        if session.time_remaining_seconds == 0:
            logger.info(f"Session {session.session_id}: time is up, submitting")
            session.submit(trigger="timer")

    def cancel(self) -> None:
        """Stop ticking. Safe to call more than once, including from a tick."""
        self._cancelled = True
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
