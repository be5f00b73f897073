"""
Logging setup and small helpers used across services and stores.
"""
import logging
import sys
from typing import Any, Optional

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

logger = logging.getLogger("moodjournal")


def setup_logging(level: Optional[str] = None) -> None:
    """Configure the package logger once; repeated calls only change the level."""
    if level is None:
        from moodjournal.core.config import settings
        level = settings.log_level

    if not any(getattr(h, "_moodjournal", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._moodjournal = True
        logger.addHandler(handler)
    logger.setLevel(level.upper())


def _format_context(context: dict) -> str:
    parts = [f"{key}={value}" for key, value in context.items() if value not in (None, "")]
    return f" ({', '.join(parts)})" if parts else ""


def log_info(message: str, **context: Any) -> None:
    logger.info(message + _format_context(context))


def log_warning(message: str, **context: Any) -> None:
    logger.warning(message + _format_context(context))


def log_error(exc: BaseException, **context: Any) -> None:
    """Log an exception with its traceback and optional key=value context."""
    logger.error(
        f"{type(exc).__name__}: {exc}{_format_context(context)}",
        exc_info=(type(exc), exc, exc.__traceback__),
    )
