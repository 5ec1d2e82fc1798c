"""
Error Handler Middleware

Global exception handling for the API.

Error Response Format:
======================
    {
        "error": {
            "code": "CONFLICT",
            "message": "Cannot transition from draft to published",
            "details": {"current": "draft", "target": "published"}
        }
    }

Exception Handling:
===================
1. InshortException subclasses → their status_code and to_dict()
2. Request body/query validation → 400 with field errors
3. Database integrity errors → 409 (unique) or 400 (foreign key, not null)
4. Anything else → 500 with a generic message (details only logged)

Usage:
======
    from src.api.middleware.error_handler import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError

from src.shared.core import exceptions
from src.shared.core.exceptions import InshortException
from src.shared.core.logging import logger


def _validation_response(request: Request, errors: list) -> JSONResponse:
    logger.warning("Validation error", errors=errors, path=request.url.path)
    return JSONResponse(
        status_code=400,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Request validation failed",
                "details": {"errors": jsonable_encoder(errors)},
            }
        },
    )


# Postgres SQLSTATE codes for integrity_constraint_violation
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"
NOT_NULL_VIOLATION = "23502"


def integrity_error_to_exception(exc: IntegrityError) -> InshortException:
    """Translate a constraint violation raised on flush or commit."""
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    constraint = getattr(getattr(orig, "__cause__", None), "constraint_name", None)
    details = {"constraint": constraint} if constraint else None

    if sqlstate == FOREIGN_KEY_VIOLATION:
        return exceptions.ValidationError("Referenced record does not exist", details=details)
    if sqlstate == NOT_NULL_VIOLATION:
        return exceptions.ValidationError("A required field is missing", details=details)
    if sqlstate == UNIQUE_VIOLATION:
        return exceptions.DuplicateResourceError(details=details)
    return exceptions.ConflictError("Request conflicts with existing data", details=details)


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers on the application.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(InshortException)
    async def inshort_exception_handler(
        request: Request,
        exc: InshortException,
    ) -> JSONResponse:
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            "Application error",
            error_code=exc.error_code,
            message=exc.message,
            status_code=exc.status_code,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        return _validation_response(request, exc.errors())

    @app.exception_handler(ValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: ValidationError,
    ) -> JSONResponse:
        return _validation_response(request, exc.errors())

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(
        request: Request,
        exc: IntegrityError,
    ) -> JSONResponse:
        error = integrity_error_to_exception(exc)
        logger.warning(
            "Integrity error",
            error_code=error.error_code,
            error=str(exc.orig),
            path=request.url.path,
        )
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Unhandled errors are logged in full but never exposed to clients."""
        logger.error(
            "Unexpected error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                }
            },
        )
