import os


class Settings:
    PROJECT_NAME: str = "wquiz"
    DEBUG: bool = os.environ.get("DEBUG", "").lower() in ("1", "true", "yes")
    LOG_DIR: str = "log"
    LOG_FILE: str = "wquiz.log"
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")
    LOG_TO_DB: bool = os.environ.get("LOG_TO_DB", "").lower() in ("1", "true", "yes")
    DB_DIR: str = "db"
    DB_FILE: str = "wquiz.db"
    BANK_API_URL: str = os.environ.get("BANK_API_URL", "")
    BANK_DIR: str = os.environ.get("BANK_DIR", "banks")
    BANK_TIMEOUT_SECONDS: float = float(os.environ.get("BANK_TIMEOUT_SECONDS", "15"))
    DEFAULT_TIME_SECONDS: int = 30 * 60
    WARNING_THRESHOLD_SECONDS: int = 30
    TICK_SECONDS: float = 1.0
    SESSION_COOKIE_NAME: str = "quiz_session_id"
    SESSION_TIMEOUT_MINUTES: int = 120
    ROOT_PATH: str = os.environ.get("ROOT_PATH", "")


settings = Settings()
