"""Structured logging configuration using structlog."""

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog

from beangen.config import get_settings

if TYPE_CHECKING:
    from structlog.types import Processor


def setup_logging() -> None:
    """Configure structured logging with structlog."""
    settings = get_settings()

    # Determine log level
    log_level = getattr(logging, settings.logging.level.upper())

    # Shared processors
    shared_processors: list["Processor"] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    # Configure structlog based on format
    processors: list["Processor"]
    if settings.logging.format == "json":
        processors = [
            *shared_processors,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(
                colors=settings.logging.console_colorized,
                exception_formatter=structlog.dev.plain_traceback,
            ),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Configure standard logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )
    logging.getLogger("beangen").setLevel(log_level)


def get_logger(name: str | None = None, **context: Any) -> structlog.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (defaults to module name)
        **context: Additional context to bind to the logger

    Returns:
        Bound logger instance
    """
    logger: structlog.BoundLogger = structlog.get_logger(name)
    if context:
        logger = logger.bind(**context)
    return logger


# Initialize logging when module is imported
setup_logging()
