"""Structured logging with structlog.

In production:
- JSON lines on stdout, one object per event
- Suitable for container log collectors

In development:
- Colorized console output
"""

from __future__ import annotations

import logging
import sys
from functools import lru_cache
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

_LEVELS: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "silent": logging.CRITICAL,
}


@lru_cache(maxsize=1)
def _configure_logging(*, is_production: bool, log_level: str) -> None:
    """Configure structlog for the service.

    Args:
        is_production: Use JSON output for production, colorized for dev.
        log_level: Minimum level name; "silent" keeps only critical events.
    """
    min_level = _LEVELS.get(log_level, logging.INFO)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]

    if is_production:
        renderer: list[structlog.types.Processor] = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        renderer = [structlog.dev.ConsoleRenderer(colors=True)]

    structlog.configure(
        processors=[*shared_processors, *renderer],
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """Get a logger for a specific module/service.

    Args:
        name: Logger name (typically module name like "agecheck_providers.snapchat").

    Returns:
        Configured structlog logger with service context.

    Example:
        >>> log = get_logger("api.routes")
        >>> log.info("fetching_profile", provider="snapchat", username="abc")
    """
    from agecheck_utils.settings import get_settings

    settings = get_settings()
    _configure_logging(is_production=settings.is_production, log_level=settings.log_level)

    return structlog.get_logger(service=name)
