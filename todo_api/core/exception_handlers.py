"""Global exception handlers for consistent error responses.

Design:
- AppError subclasses → status from ``STATUS_BY_ERROR`` (first match wins)
- Unexpected Exception → generic 500 (safety net, nothing leaked)
- All responses carry request_id for log correlation
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from todo_api.core.errors import (
    AppError,
    AuthenticationAppError,
    CapacityExceededAppError,
    PayloadTooLargeAppError,
    ValidationAppError,
)
from todo_api.core.logging import get_request_id

logger = logging.getLogger(__name__)

# Ordered: subclasses must precede their bases.
STATUS_BY_ERROR: tuple[tuple[type[AppError], int], ...] = (
    (PayloadTooLargeAppError, 413),
    (CapacityExceededAppError, 409),
    (AuthenticationAppError, 403),
    (ValidationAppError, 400),
)


def status_for(exc: AppError) -> int:
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return 400


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render a domain error as ``{"error": {code, message, request_id, details?}}``."""
    status_code = status_for(exc)
    request_id = get_request_id()

    logger.warning(
        "app_error_handled",
        extra={
            "error_code": exc.code,
            "error_message": exc.message,
            "status_code": status_code,
            "request_path": request.url.path,
            "has_details": bool(exc.details),
        },
    )

    error_content: dict = {
        "code": exc.code,
        "message": exc.message,
        "request_id": request_id,
    }
    if exc.details:
        error_content["details"] = exc.details

    return JSONResponse(status_code=status_code, content={"error": error_content})


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Fallback handler for unexpected errors.

    Logs the failure for debugging but answers with a generic message so no
    stack trace or internal detail reaches the client.
    """
    logger.error(
        "unhandled_exception",
        extra={
            "error_type": type(exc).__name__,
            "error_msg": str(exc),
            "request_path": request.url.path,
            "request_method": request.method,
        },
    )

    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "internal_server_error",
                "message": "An unexpected error occurred. Please try again later.",
                "request_id": get_request_id(),
            }
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register the AppError handler and the catch-all fallback on ``app``."""
    app.exception_handler(AppError)(app_error_handler)
    app.exception_handler(Exception)(general_exception_handler)
