"""Logging for the storefront.

structlog renders through the standard library root logger, so protean's own
records and the storefront's structured events share one console stream and
one rotating file. The ``PROTEAN_ENV`` overlay that selects the database also
selects the level and the renderer: JSON lines in production, a coloured
console with Rich tracebacks everywhere else.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path

import structlog

from storefront.config import get_settings

_LEVELS = {
    "production": "INFO",
    "test": "WARNING",
}


def _environment() -> str:
    return os.getenv("PROTEAN_ENV", "development").lower()


def _level() -> str:
    return get_settings().log_level.upper() or _LEVELS.get(_environment(), "DEBUG")


def _setup_handlers(level: str) -> None:
    log_dir = Path(get_settings().log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    file_handler = logging.handlers.RotatingFileHandler(
        filename=log_dir / "storefront.log",
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [logging.StreamHandler(sys.stdout), file_handler]

    # Library records at WARNING and above only
    for name in ("protean", "stripe"):
        logging.getLogger(name).setLevel(logging.WARNING)


def configure_logging() -> None:
    level = _level()
    _setup_handlers(level)

    if _environment() == "production":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=2),
        )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def add_context(**kwargs) -> None:
    """Bind request-scoped values onto every following log line."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
