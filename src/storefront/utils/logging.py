"""Logging for the storefront process and the commerce store API it serves.

Records go to stdout and to two rotating files under LOG_DIR:
``storefront.log`` for everything at the configured level and
``storefront_error.log`` for errors only. Production and staging render JSON
lines; elsewhere records are rendered for a terminal with rich tracebacks
that skip httpx frames, so a failed cart call shows the storefront code that
made it.

Log lines emitted while a request is served carry the ``cart_id`` bound by
``bind_cart``.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import httpx
import structlog

LOG_FILE = "storefront.log"
ERROR_LOG_FILE = "storefront_error.log"
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5

JSON_ENVIRONMENTS = ("production", "staging")

LEVELS_BY_ENVIRONMENT = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

# Chatty below WARNING during every cart call or command.
QUIET_LOGGERS = ("protean", "httpx", "httpcore", "asyncio")


def current_environment() -> str:
    return (os.getenv("ENV") or os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def get_log_level() -> str:
    """LOG_LEVEL if set, otherwise the level for the current environment."""
    return os.getenv("LOG_LEVEL", LEVELS_BY_ENVIRONMENT.get(current_environment(), "INFO"))


def _rotating_handler(path: Path, level: str | int) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def setup_stdlib_logging(log_dir: Path | None = None) -> None:
    log_level = get_log_level()

    log_dir = log_dir or Path(os.getenv("LOG_DIR", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = [
        console_handler,
        _rotating_handler(log_dir / LOG_FILE, log_level),
        _rotating_handler(log_dir / ERROR_LOG_FILE, logging.ERROR),
    ]

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def build_processors(env: str) -> list:
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if env in JSON_ENVIRONMENTS:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stdout.isatty(),
                exception_formatter=structlog.dev.RichTracebackFormatter(
                    show_locals=False,
                    max_frames=4,
                    suppress=(httpx,),
                ),
            )
        )
    return processors


def setup_structlog() -> None:
    structlog.configure(
        processors=build_processors(current_environment()),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(log_dir: Path | None = None) -> None:
    """Configure stdlib handlers and structlog for the whole process."""
    setup_stdlib_logging(log_dir)
    setup_structlog()


def bind_cart(cart_id: str, **kwargs: Any) -> None:
    """Tag every subsequent log line in this context with the shopper's cart."""
    structlog.contextvars.bind_contextvars(cart_id=cart_id, **kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
