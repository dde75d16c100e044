"""
Logging configuration for WorkCompass API.

Console logging always; a rotating file under LOG_DIR unless it is empty
(containers that ship stdout only).
"""
import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional

from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

REDACTED = "***REDACTED***"

# substrings of keys whose values never reach a log line
SENSITIVE_KEYS = ("password", "_pass", "token", "secret", "authorization")

CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"


def setup_logging(log_level: str = "INFO", log_dir: Optional[str] = "logs"):
    """
    Configure the root logger. Called once from the app lifespan.

    Args:
        log_level: Logging level name; unknown names fall back to INFO
        log_dir: Directory for workcompass.log, or None/"" for console only
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(console_handler)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path / "workcompass.log",
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
        )
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(file_handler)

    logging.getLogger("uvicorn").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)
    logging.getLogger("google.auth").setLevel(logging.WARNING)


def _mask_database_url(value: str) -> str:
    try:
        return make_url(value).render_as_string(hide_password=True)
    except ArgumentError:
        return REDACTED


def sanitize_log_data(data: dict) -> dict:
    """
    Copy of data that is safe to log.

    Credentials are replaced, nested dicts are sanitized too, and a
    database URL keeps its host and database name but loses the password.
    """
    sanitized = {}
    for key, value in data.items():
        lowered = key.lower()
        if isinstance(value, dict):
            sanitized[key] = sanitize_log_data(value)
        elif value is None:
            sanitized[key] = None
        elif lowered == "database_url":
            sanitized[key] = _mask_database_url(str(value))
        elif any(sensitive in lowered for sensitive in SENSITIVE_KEYS):
            sanitized[key] = REDACTED
        else:
            sanitized[key] = value
    return sanitized
