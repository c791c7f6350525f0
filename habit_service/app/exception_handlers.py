"""Global exception handlers for the FastAPI application.

Every failure is rendered as the flat envelope ``{success: false, error,
message?}`` with the matching status code.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from habit_service.core.exceptions import AppException, InternalServerException
from habit_service.core.schemas.envelope import fail
from habit_service.core.settings import get_app_settings

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"
INVALID_REQUEST_MESSAGE = "Invalid request"

HTTP_ERROR_MESSAGES = {
    status.HTTP_404_NOT_FOUND: "Route not found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "Method not allowed",
}


def _get_request_id(request: Request) -> str | None:
    """Request ID set by ``RequestIDMiddleware``, if any."""
    return getattr(request.state, "request_id", None)


def _request_context(request: Request) -> dict[str, Any]:
    return {
        "request_id": _get_request_id(request),
        "path": request.url.path,
        "method": request.method,
    }


def _describe_errors(errors: list[Any]) -> str:
    """Join validation errors as ``field: message`` pairs."""
    parts = []
    for error in errors:
        field_path = ".".join(str(loc) for loc in error.get("loc", ()) if loc != "body")
        parts.append(f"{field_path}: {error['msg']}" if field_path else error["msg"])
    return "; ".join(parts)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Render an ``AppException`` with its own status code.

    Internal errors lose their detail in production.
    """
    is_internal = exc.status_code >= 500 or isinstance(exc, InternalServerException)
    log = logger.error if is_internal else logger.warning
    log(
        "Application exception occurred",
        extra={
            **_request_context(request),
            "exception_type": exc.type,
            "status_code": exc.status_code,
            "detail": exc.detail,
        },
    )

    detail = exc.detail
    if is_internal and get_app_settings().is_production:
        detail = INTERNAL_ERROR_MESSAGE

    return JSONResponse(status_code=exc.status_code, content=fail(detail))


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Request validation failures are client errors (400)."""
    errors = list(exc.errors())
    logger.warning(
        "Request validation failed",
        extra={**_request_context(request), "error_count": len(errors)},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=fail(INVALID_REQUEST_MESSAGE, _describe_errors(errors)),
    )


async def pydantic_validation_exception_handler(
    request: Request, exc: PydanticValidationError
) -> JSONResponse:
    """Pydantic validation raised inside a handler, e.g. a malformed payload."""
    errors = list(exc.errors())
    logger.warning(
        "Pydantic validation failed",
        extra={**_request_context(request), "error_count": len(errors)},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=fail(INVALID_REQUEST_MESSAGE, _describe_errors(errors)),
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Routing errors (unknown route, wrong method) and explicit HTTP errors."""
    logger.info(
        "HTTP exception",
        extra={**_request_context(request), "status_code": exc.status_code},
    )
    error = HTTP_ERROR_MESSAGES.get(exc.status_code, str(exc.detail))
    return JSONResponse(
        status_code=exc.status_code,
        content=fail(error),
        headers=getattr(exc, "headers", None),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unexpected exceptions (500)."""
    logger.error(
        "Unexpected exception occurred",
        extra={
            **_request_context(request),
            "exception_type": type(exc).__name__,
            "exception_message": str(exc),
        },
        exc_info=True,
    )

    message = INTERNAL_ERROR_MESSAGE if get_app_settings().is_production else str(exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=fail(INTERNAL_ERROR_MESSAGE, message or None),
    )


def configure_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on ``app``.

    Example:
        app = FastAPI()
        configure_exception_handlers(app)
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(PydanticValidationError, pydantic_validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.info("Exception handlers configured")
