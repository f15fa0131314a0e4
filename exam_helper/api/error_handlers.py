"""
API exception handlers.

Maps the application exception hierarchy onto HTTP status codes and the
shared ErrorResponse body. Stack details never reach the client.

Dependencies: fastapi, starlette, exam_helper.core.exceptions
System role: Error translation at the HTTP boundary
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from exam_helper.core.exceptions import (
    ConfigError,
    EmbeddingError,
    ExamHelperException,
    GenerationError,
    NotFoundError,
    ParsingError,
    UnsupportedTypeError,
    ValidationError,
)
from exam_helper.models.common import ErrorResponse

logger = logging.getLogger(__name__)

# Checked in order; subclasses come before their bases
STATUS_BY_EXCEPTION: list[tuple[type[ExamHelperException], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (UnsupportedTypeError, status.HTTP_415_UNSUPPORTED_MEDIA_TYPE),
    (ParsingError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (EmbeddingError, status.HTTP_502_BAD_GATEWAY),
    (GenerationError, status.HTTP_502_BAD_GATEWAY),
    (ConfigError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def status_for(exc: ExamHelperException) -> int:
    """Return the HTTP status code for an application exception."""
    for exception_type, status_code in STATUS_BY_EXCEPTION:
        if isinstance(exc, exception_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _error_response(status_code: int, error: str, details: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, details=details or None).model_dump(mode="json"),
    )


async def app_exception_handler(request: Request, exc: ExamHelperException) -> JSONResponse:
    """Handle application exceptions."""
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(
            f"{__name__}:app_exception_handler - {type(exc).__name__}: {exc}",
            extra={"path": request.url.path, "status_code": status_code},
        )
    else:
        logger.warning(
            f"{__name__}:app_exception_handler - {type(exc).__name__}: {exc.message}",
            extra={"path": request.url.path, "status_code": status_code},
        )
    # Configuration details name server settings; keep them out of the response
    details = None if isinstance(exc, ConfigError) else exc.details
    return _error_response(status_code, exc.message, details)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTPException raised by routers or routing."""
    return _error_response(exc.status_code, str(exc.detail))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle malformed request bodies."""
    errors = exc.errors()
    logger.warning(f"{__name__}:request_validation_handler - {errors}")
    message = errors[0]["msg"] if errors else "Invalid request."
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        f"Invalid request: {message}",
        {"errors": [{"loc": list(error.get("loc", ())), "msg": error.get("msg")} for error in errors]},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all other exceptions."""
    logger.error(f"{__name__}:unhandled_exception_handler - {type(exc).__name__}: {exc}", exc_info=True)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error. Please try again later.",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all exception handlers to app."""
    app.add_exception_handler(ExamHelperException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
