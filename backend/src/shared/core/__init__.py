"""
Core Module

Provides core functionality shared across the application:
- Structured logging
- Typed exceptions rendered as {"error": {...}} responses

Usage:
======
    from src.shared.core.logging import logger, get_logger
    from src.shared.core.exceptions import InshortException, NotFoundError

    logger.info("Starting operation", user_id=user_id)
"""

from src.shared.core.logging import (
    logger,
    get_logger,
    log_context,
    clear_log_context,
)
from src.shared.core.exceptions import (
    InshortException,
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    PostNotFoundError,
    ProfileNotFoundError,
    CommentNotFoundError,
    CollectionNotFoundError,
    AssignmentNotFoundError,
    MediaNotFoundError,
    SocialTaskNotFoundError,
    SubscriberNotFoundError,
    ValidationError,
    ConflictError,
    DuplicateResourceError,
    InvalidTransitionError,
    RateLimitError,
    ConfigurationError,
    ExternalServiceError,
    ServiceUnavailableError,
)

__all__ = [
    # Logging
    "logger",
    "get_logger",
    "log_context",
    "clear_log_context",
    # Exceptions
    "InshortException",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "PostNotFoundError",
    "ProfileNotFoundError",
    "CommentNotFoundError",
    "CollectionNotFoundError",
    "AssignmentNotFoundError",
    "MediaNotFoundError",
    "SocialTaskNotFoundError",
    "SubscriberNotFoundError",
    "ValidationError",
    "ConflictError",
    "DuplicateResourceError",
    "InvalidTransitionError",
    "RateLimitError",
    "ConfigurationError",
    "ExternalServiceError",
    "ServiceUnavailableError",
]
