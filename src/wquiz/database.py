import os
import sqlite3

from .config import settings

LOG_TABLE_SQL = """
    CREATE TABLE IF NOT EXISTS logs (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        timestamp DATETIME DEFAULT CURRENT_TIMESTAMP,
        level TEXT,
        logger TEXT,
        message TEXT
    );
"""


def get_db_connection():
    """Opens the SQLite log database configured in settings."""
    conn = sqlite3.connect(os.path.join(settings.DB_DIR, settings.DB_FILE))
    conn.row_factory = sqlite3.Row
    return conn


def insert_log(level: str, logger_name: str, message: str) -> None:
    conn = get_db_connection()
    try:
        with conn:
            conn.execute(
                "INSERT INTO logs (level, logger, message) VALUES (?, ?, ?)",
                (level, logger_name, message),
            )
    finally:
        conn.close()


def init_db():
    """Creates the database directory and the log table."""
    os.makedirs(settings.DB_DIR, exist_ok=True)
    conn = get_db_connection()
    try:
        with conn:
            conn.execute(LOG_TABLE_SQL)
    finally:
        conn.close()
