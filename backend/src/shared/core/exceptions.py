"""
Custom Exceptions

Application-specific exceptions with HTTP status codes and error codes.

Exception Hierarchy:
====================
    InshortException (base)
       │
       ├── AuthenticationError (401)    ← Missing/invalid token, bad credentials
       ├── AuthorizationError (403)     ← Role does not allow the action
       ├── NotFoundError (404)          ← Resource not found
       │      ├── PostNotFoundError
       │      ├── ProfileNotFoundError
       │      ├── CommentNotFoundError
       │      ├── CollectionNotFoundError
       │      ├── AssignmentNotFoundError
       │      ├── MediaNotFoundError
       │      ├── SocialTaskNotFoundError
       │      └── SubscriberNotFoundError
       ├── ValidationError (400)        ← Invalid input data
       ├── ConflictError (409)          ← Unique constraint / state conflict
       │      ├── DuplicateResourceError
       │      └── InvalidTransitionError
       ├── RateLimitError (429)         ← Too many requests
       ├── ConfigurationError (500)     ← Required setting missing
       ├── ExternalServiceError (502)   ← Upstream API returned an error
       └── ServiceUnavailableError (503) ← Dependency down

Usage:
======
    from src.shared.core.exceptions import NotFoundError, ValidationError

    raise PostNotFoundError(post_id)
    # {"error": {"code": "NOT_FOUND", "message": "Post with id 'abc' not found"}}

    raise ValidationError(
        "Post validation failed",
        details={"errors": [{"field": "title", "message": "Title is required"}]},
    )

Exception Handling:
===================
    Exceptions are caught by the error handler middleware and converted to JSON:
    {
        "error": {
            "code": "NOT_FOUND",
            "message": "Post with id 'abc-123' not found",
            "details": {}
        }
    }
"""

from typing import Any, Optional


class InshortException(Exception):
    """
    Base exception for all Inshort application errors.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code (default 500)
        error_code: Machine-readable error code
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or "INTERNAL_ERROR"
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to the API error envelope."""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }


# ═══════════════════════════════════════════════════════════════════════════════
# AUTHENTICATION & AUTHORIZATION ERRORS (401, 403)
# ═══════════════════════════════════════════════════════════════════════════════


class AuthenticationError(InshortException):
    """
    Authentication failed error (401 Unauthorized).

    Raised when:
    - Missing or invalid credentials
    - Token expired or malformed
    - Action requires a logged-in user
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=401,
            error_code="AUTHENTICATION_ERROR",
            details=details,
        )


class AuthorizationError(InshortException):
    """
    Authorization failed error (403 Forbidden).

    Raised when the user is authenticated but their role lacks permission.
    """

    def __init__(
        self,
        message: str = "Not authorized",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=403,
            error_code="AUTHORIZATION_ERROR",
            details=details,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# NOT FOUND ERRORS (404)
# ═══════════════════════════════════════════════════════════════════════════════


class NotFoundError(InshortException):
    """
    Resource not found error (404 Not Found).

    Example:
        raise NotFoundError("Post", post_id)
        # Message: "Post with id 'abc-123' not found"
    """

    def __init__(
        self,
        resource: str,
        resource_id: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        message: Optional[str] = None,
    ) -> None:
        if message is None:
            message = f"{resource} not found"
            if resource_id:
                message = f"{resource} with id '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=404,
            error_code="NOT_FOUND",
            details=details,
        )


class PostNotFoundError(NotFoundError):
    def __init__(self, post_id: str) -> None:
        super().__init__(resource="Post", resource_id=str(post_id))


class ProfileNotFoundError(NotFoundError):
    def __init__(self, user_id: str) -> None:
        super().__init__(resource="Profile", resource_id=str(user_id))


class CommentNotFoundError(NotFoundError):
    def __init__(self, comment_id: str) -> None:
        super().__init__(resource="Comment", resource_id=str(comment_id))


class CollectionNotFoundError(NotFoundError):
    def __init__(self, collection_id: str) -> None:
        super().__init__(
            resource="Collection",
            resource_id=str(collection_id),
            message="Collection not found",
        )


class AssignmentNotFoundError(NotFoundError):
    def __init__(self, assignment_id: str) -> None:
        super().__init__(resource="Assignment", resource_id=str(assignment_id))


class MediaNotFoundError(NotFoundError):
    def __init__(self, media_id: str) -> None:
        super().__init__(
            resource="Media file",
            resource_id=str(media_id),
            message="Media file not found",
        )


class SocialTaskNotFoundError(NotFoundError):
    def __init__(self, task_id: str) -> None:
        super().__init__(
            resource="Task", resource_id=str(task_id), message="Task not found"
        )


class SubscriberNotFoundError(NotFoundError):
    """Unknown unsubscribe token."""

    def __init__(self) -> None:
        super().__init__(
            resource="Subscriber",
            message="Invalid unsubscribe link. Please contact support.",
        )


# ═══════════════════════════════════════════════════════════════════════════════
# VALIDATION & CONFLICT ERRORS (400, 409)
# ═══════════════════════════════════════════════════════════════════════════════


class ValidationError(InshortException):
    """
    Validation error (400 Bad Request).

    Field level problems go in details["errors"] as [{field, message}].
    """

    def __init__(
        self,
        message: str = "Validation failed",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=400,
            error_code="VALIDATION_ERROR",
            details=details,
        )


class ConflictError(InshortException):
    """
    Resource conflict error (409 Conflict).

    Example:
        raise ConflictError("Slug already in use")
    """

    def __init__(
        self,
        message: str = "Resource conflict",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=409,
            error_code="CONFLICT",
            details=details,
        )


class DuplicateResourceError(ConflictError):
    """Raised when a unique constraint rejects a new row."""

    def __init__(
        self,
        message: str = "Resource already exists",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, details=details)


class InvalidTransitionError(ConflictError):
    """Workflow status change not allowed from the current status."""

    def __init__(self, current: str, target: str) -> None:
        super().__init__(
            message=f"Cannot move post from '{current}' to '{target}'",
            details={"current_status": current, "target_status": target},
        )


# ═══════════════════════════════════════════════════════════════════════════════
# RATE LIMITING, CONFIGURATION & SERVICE ERRORS (429, 500, 502, 503)
# ═══════════════════════════════════════════════════════════════════════════════


class RateLimitError(InshortException):
    """
    Rate limit exceeded error (429 Too Many Requests).

    Includes retry_after hint for clients.
    """

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        retry_after: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        extra_details = details or {}
        if retry_after:
            extra_details["retry_after_seconds"] = retry_after
        super().__init__(
            message=message,
            status_code=429,
            error_code="RATE_LIMIT_EXCEEDED",
            details=extra_details,
        )


class ConfigurationError(InshortException):
    """A setting required by the requested operation is missing."""

    def __init__(
        self,
        message: str = "Server configuration error",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=500,
            error_code="CONFIGURATION_ERROR",
            details=details,
        )


class ExternalServiceError(InshortException):
    """
    External API returned an error (502 Bad Gateway).

    A caller may pass the upstream status code through instead.
    """

    def __init__(
        self,
        service_name: str,
        message: Optional[str] = None,
        status_code: int = 502,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        msg = message or f"{service_name} service error"
        extra_details = details or {}
        extra_details["service"] = service_name
        super().__init__(
            message=msg,
            status_code=status_code,
            error_code="EXTERNAL_SERVICE_ERROR",
            details=extra_details,
        )


class ServiceUnavailableError(InshortException):
    """
    Service temporarily unavailable error (503).

    Raised when the database or another hard dependency is down.
    """

    def __init__(
        self,
        message: str = "Service temporarily unavailable",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=503,
            error_code="SERVICE_UNAVAILABLE",
            details=details,
        )
