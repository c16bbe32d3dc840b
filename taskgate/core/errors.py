"""
Error taxonomy and exception handlers.

Handlers raise the ``AppError`` subclasses below; the exception handlers
registered by ``register_exception_handlers`` turn them into JSON responses
of the form ``{"detail": "<message>"}``.
"""

import logging
import traceback
from contextlib import contextmanager
from typing import Iterator, Optional

from argon2.exceptions import HashingError
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that map to a specific HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Server error"

    def __init__(self, message: Optional[str] = None, headers: Optional[dict[str, str]] = None):
        self.message = message or self.default_message
        self.headers = headers
        super().__init__(self.message)


class ValidationError(AppError):
    """Missing or invalid input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class AuthenticationError(AppError):
    """Missing/invalid/expired token or bad credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authorized"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class NotFoundError(AppError):
    """Resource absent or not owned by the caller."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(AppError):
    """Duplicate unique value (e.g. email)."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Already exists"


class InternalError(AppError):
    """Unexpected store or hashing failure."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"


@contextmanager
def handler_boundary(operation: str) -> Iterator[None]:
    """
    Map store and hashing failures raised inside a handler to InternalError.

    Errors from the taxonomy pass through untouched.
    """
    try:
        yield
    except AppError:
        raise
    except (SQLAlchemyError, HashingError) as exc:
        logger.exception("%s failed", operation)
        raise InternalError() from exc


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=exc.headers,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed bodies and parameters as 400 instead of FastAPI's 422."""
    errors = exc.errors()
    if errors:
        location = ".".join(str(part) for part in errors[0].get("loc", ()) if part != "body")
        message = errors[0].get("msg", "Invalid request")
        detail = f"{location}: {message}" if location else message
    else:
        detail = "Invalid request"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": detail},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler to prevent information leakage."""
    request_id = getattr(request.state, "request_id", "unknown")
    logger.error("[%s] Unhandled exception: %s", request_id, exc)
    if request.app.state.settings.debug:
        logger.debug("".join(traceback.format_exception(exc)))

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "An internal error occurred",
            "request_id": request_id,
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
