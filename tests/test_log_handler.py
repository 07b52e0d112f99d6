import logging

from wquiz import database
from wquiz.config import settings
from wquiz.log_handler import SQLiteHandler


def test_records_are_written(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "DB_DIR", str(tmp_path / "db"))
    database.init_db()

    logger = logging.getLogger("wquiz.test_log_handler")
    logger.setLevel(logging.INFO)
    handler = SQLiteHandler()
    logger.addHandler(handler)
    try:
        logger.info("Session abc submitted by timer")
    finally:
        logger.removeHandler(handler)

    conn = database.get_db_connection()
    rows = conn.execute("SELECT level, logger, message FROM logs").fetchall()
    conn.close()
    assert [tuple(row) for row in rows] == [
        ("INFO", "wquiz.test_log_handler", "Session abc submitted by timer")
    ]
