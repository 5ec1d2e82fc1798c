"""
Logging Configuration

Structured logging with structlog. Every module logs key-value events
through the shared logger; request-scoped values (request id, user id)
are bound once with log_context() and appear on every line after that.

Log Output:
===========
Development:
    2025-03-02 08:14:09 [info     ] Post published                 post_id=3f2a9c1e-...

Production (JSON):
    {"timestamp": "2025-03-02T08:14:09", "level": "info", "event": "Post published", "post_id": "3f2a9c1e-..."}

Usage:
======
    from src.shared.core.logging import logger, get_logger, log_context

    logger.info("Post published", post_id=post_id, slug=slug)
    logger.warning("Email send failed", to=email, error=str(e))

    email_logger = get_logger("email")
    email_logger.debug("Sending batch", size=len(batch))
"""

import logging
import sys
from typing import Any

import structlog
from structlog.typing import Processor

from src.config.settings import settings

# Third-party loggers that are too chatty at INFO
_QUIET_LOGGERS = ("httpx", "httpcore", "botocore", "boto3", "urllib3")


def setup_logging() -> None:
    """
    Configure structlog and the stdlib root logger.

    Development gets colored console output, every other environment
    gets one JSON object per line.
    """
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.is_development:
        processors: list[Processor] = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    else:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a named structlog logger."""
    return structlog.get_logger(name)


def log_context(**kwargs: Any) -> None:
    """
    Bind values to every subsequent log call in the current context.

    Example:
        log_context(request_id="abc-123", user_id=str(user.id))
        logger.info("Lock acquired")  # includes request_id and user_id
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_log_context() -> None:
    """Drop all bound context values (call at the end of a request)."""
    structlog.contextvars.clear_contextvars()


setup_logging()

logger = get_logger("inshort")
