"""Standard-library logging for the ledger.

Ledger code reports through logfire directly. This module covers the
stdlib loggers the ledger and its libraries still emit to, either
forwarding them into logfire or printing them when nothing is sent.
"""

import logging
import sys

import logfire

from yard.config import Settings
from yard.util.observability import should_send_to_logfire

LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Library loggers held at WARNING unless debugging
NOISY_LOGGERS = (
    "httpx",
    "httpcore",
    "asyncpg",
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "dishka",
    "uvicorn.access",
)


def resolve_level(settings: Settings) -> int:
    """Level for ledger loggers: debug wins, the test environment stays quiet."""
    if settings.debug:
        return logging.DEBUG
    if settings.environment == "test":
        return logging.WARNING
    return logging.getLevelName(settings.observability.log_level)


def build_handler(settings: Settings) -> logging.Handler:
    """Forward to logfire when telemetry is sent, otherwise print to stdout."""
    if should_send_to_logfire(settings):
        return logfire.LogfireLoggingHandler()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logging(settings: Settings) -> None:
    """Configure stdlib logging for the process.

    Call after ``configure_logfire`` so forwarded records have somewhere
    to go.

    Args:
        settings: Application settings
    """
    level = resolve_level(settings)

    logging.basicConfig(level=level, handlers=[build_handler(settings)], force=True)

    library_level = logging.DEBUG if settings.debug else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)

    logging.getLogger("yard").setLevel(level)

    logfire.info(
        "Logging configured",
        environment=settings.environment,
        level=logging.getLevelName(level),
        forwarded=should_send_to_logfire(settings),
    )


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``yard`` hierarchy (pass ``__name__``)."""
    return logging.getLogger(name)
