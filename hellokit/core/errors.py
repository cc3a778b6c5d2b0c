"""API error envelope and exception handler registration."""

from __future__ import annotations

from collections.abc import Sequence
from http import HTTPStatus
import logging
from typing import Any

from fastapi import FastAPI
from fastapi import Request
from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from hellokit.core.config import get_settings
from hellokit.schemas.error import ErrorResponse
from hellokit.schemas.error import ValidationFailure

logger = logging.getLogger(__name__)

VALIDATION_FAILED = "Validation failed"


class APIError(Exception):
    """Base application exception for explicit API error responses."""

    def __init__(self, *, status_code: int, message: str, error: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error = error or _status_title(status_code)
        self.message = message


class NotFoundError(APIError):
    """Convenience exception for missing resources."""

    def __init__(self, *, message: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, message=message)


class ConflictError(APIError):
    """Raised when a write collides with an existing row."""

    def __init__(self, *, message: str) -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, message=message)


class ValidationFailedError(APIError):
    """Carries every field failure collected for one request."""

    def __init__(self, failures: Sequence[ValidationFailure]) -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, message=VALIDATION_FAILED, error=VALIDATION_FAILED)
        self.failures = list(failures)


def _status_title(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


def build_error_response(
    *,
    status_code: int,
    error: str,
    message: str,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Render a non-validation failure in the shared envelope."""
    payload = ErrorResponse(error=error, message=message)
    return JSONResponse(status_code=status_code, content=payload.model_dump(exclude_none=True), headers=headers)


def build_validation_response(failures: Sequence[ValidationFailure]) -> JSONResponse:
    """Render collected failures as the 400 validation envelope."""
    payload = ErrorResponse(error=VALIDATION_FAILED, errors=list(failures))
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=payload.model_dump(exclude_none=True))


def _format_location(location: tuple[Any, ...] | list[Any] | Any) -> str:
    if not isinstance(location, (tuple, list)):
        return str(location)

    prefixes = {"body", "query", "path", "header", "cookie"}
    filtered = [str(part) for part in location if part not in prefixes]
    if filtered:
        return ".".join(filtered)

    if not location:
        return "request"

    return str(location[0])


def _framework_failures(exc: RequestValidationError) -> list[ValidationFailure]:
    return [
        ValidationFailure(field=_format_location(issue.get("loc", ())), message=str(issue.get("msg", "Invalid value")))
        for issue in exc.errors()
    ]


async def validation_failed_handler(request: Request, exc: ValidationFailedError) -> JSONResponse:
    """Reject the request with every collected field failure."""
    logger.info(
        "Rejected %s %s: invalid fields=%s",
        request.method,
        request.url.path,
        [failure.field for failure in exc.failures],
    )
    return build_validation_response(exc.failures)


async def request_validation_exception_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    """Normalize FastAPI validation errors to the validation envelope."""
    return build_validation_response(_framework_failures(exc))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Normalize HTTP exceptions to the shared envelope."""
    title = _status_title(exc.status_code)
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == title:
        message = f"Route {request.method} {request.url.path} not found"
    elif isinstance(exc.detail, str) and exc.detail:
        message = exc.detail
    else:
        message = "Request failed"
    return build_error_response(status_code=exc.status_code, error=title, message=message)


async def api_error_handler(_: Request, exc: APIError) -> JSONResponse:
    """Return explicit domain errors in the shared envelope."""
    return build_error_response(status_code=exc.status_code, error=exc.error, message=exc.message)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Avoid leaking internal exceptions outside development."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    if get_settings().is_production:
        message = "An unexpected error occurred"
    else:
        message = str(exc) or exc.__class__.__name__
    return build_error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        error="Internal Server Error",
        message=message,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach all error handlers to a FastAPI app instance."""
    app.add_exception_handler(ValidationFailedError, validation_failed_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
