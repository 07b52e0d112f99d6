import logging
import os
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .config import settings
from .database import init_db
from .errors import (
    BankFormatError,
    EmptySelectionError,
    InvalidUrlError,
    NetworkError,
    QuizError,
    SessionClosedError,
    SessionNotFoundError,
    ValidationError,
)
from .globals import bank_source, session_store
from .log_handler import SQLiteHandler
from .router import router

logger = logging.getLogger("wquiz")

ERROR_STATUS = {
    InvalidUrlError: 400,
    ValidationError: 400,
    SessionNotFoundError: 401,
    SessionClosedError: 409,
    EmptySelectionError: 422,
    NetworkError: 502,
    BankFormatError: 502,
}


# --- Logging Setup ---
def setup_logging():
    logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    # Avoid adding handlers multiple times
    if logger.handlers:
        return

    os.makedirs(settings.LOG_DIR, exist_ok=True)
    log_path = os.path.join(settings.LOG_DIR, settings.LOG_FILE)
    file_handler = RotatingFileHandler(log_path, maxBytes=5_000_000, backupCount=3)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(levelname)s - %(name)s - %(message)s")
    )
    logger.addHandler(file_handler)

    if settings.LOG_TO_DB:
        init_db()
        logger.addHandler(SQLiteHandler())

    # Also configure root logger to see logs from other libraries
    logging.basicConfig(level=logging.INFO)


# --- Lifecycle ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.PROJECT_NAME} with {type(bank_source).__name__}")
    yield
    session_store.clear()
    logger.info("Shut down, all sessions torn down")


# --- Error Handling ---
async def quiz_exception_handler(request: Request, exc: QuizError):
    status_code = next(
        (code for kind, code in ERROR_STATUS.items() if isinstance(exc, kind)), 400
    )
    logger.warning(f"{type(exc).__name__} on {request.url.path}: {exc}")
    content = {"error": str(exc), "kind": type(exc).__name__}
    if isinstance(exc, NetworkError) and exc.status is not None:
        content["status"] = exc.status
    return JSONResponse(content, status_code=status_code)


# --- App Factory ---
def create_app() -> FastAPI:
    setup_logging()
    app = FastAPI(
        title=settings.PROJECT_NAME,
        debug=settings.DEBUG,
        lifespan=lifespan,
        root_path=settings.ROOT_PATH,
    )

    app.add_exception_handler(QuizError, quiz_exception_handler)
    app.include_router(router)

    return app
