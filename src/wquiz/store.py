import logging
from datetime import datetime, timedelta
from typing import Dict, Optional

from .config import settings
from .review import ReviewCoordinator
from .session import QuizSession

logger = logging.getLogger(__name__)


class SessionEntry:
    def __init__(self, session: QuizSession):
        self.session = session
        self.review = ReviewCoordinator(session)


class SessionStore:
    """In-memory sessions keyed by cookie id. Every removal tears the
    session down so no timer outlives it."""

    def __init__(self, timeout_minutes: int = settings.SESSION_TIMEOUT_MINUTES):
        self.timeout = timedelta(minutes=timeout_minutes)
        self._entries: Dict[str, SessionEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, session: QuizSession) -> SessionEntry:
        entry = SessionEntry(session)
        self._entries[session.session_id] = entry
        return entry

    def get(self, session_id: Optional[str]) -> Optional[SessionEntry]:
        if not session_id or session_id not in self._entries:
            return None
        entry = self._entries[session_id]
        if self._expired(entry.session):
            logger.info(f"Session {session_id} expired")
            self.remove(session_id)
            return None
        return entry

    def _expired(self, session: QuizSession) -> bool:
        """Unsubmitted sessions get their whole time budget before the
        timeout starts counting."""
        age = datetime.now() - session.created_at
        if session.submitted:
            return age > self.timeout
        return age > self.timeout + timedelta(seconds=session.time_budget_seconds)

    def remove(self, session_id: Optional[str]) -> None:
        entry = self._entries.pop(session_id, None) if session_id else None
        if entry is not None:
            entry.session.teardown()

    def clear(self) -> None:
        for session_id in list(self._entries):
            self.remove(session_id)
