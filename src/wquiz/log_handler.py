import logging

from .database import insert_log


class SQLiteHandler(logging.Handler):
    """Mirrors session lifecycle log records into the SQLite log table."""

    def emit(self, record):
        try:
            insert_log(record.levelname, record.name, self.format(record))
        except Exception:
            self.handleError(record)
