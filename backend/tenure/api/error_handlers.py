"""Error Handlers — map raised errors onto the Tenure error envelope.

Invariants:
    - Every error body is built by core.errors.error_envelope:
      {"error": {code, message, category, severity, timestamp, context}}
    - TenureError keeps its own status, code and context
    - RequestValidationError (wrong JSON types, bad query params) -> 400 VALIDATION_ERROR
      with one entry per offending field under "details"
    - Anything else -> 500 INTERNAL_ERROR; the exception text never reaches the client
    - Promotion rejections never reach these handlers: routes return them

Design Decisions:
    - Handlers registered from one function so main.py stays declarative
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from tenure.core.errors import (
    ErrorCategory, ErrorSeverity, TenureError, error_envelope,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register the raised-error, validation and catch-all handlers."""

    @app.exception_handler(TenureError)
    async def tenure_error_handler(request: Request, exc: TenureError):
        logger.error(
            f"{exc.code} on {request.url.path}: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "emp_no": exc.context.emp_no,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        details = validation_details(exc)
        logger.warning(
            f"Invalid request on {request.url.path}",
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_envelope(
                "VALIDATION_ERROR", "Invalid request data",
                ErrorCategory.VALIDATION, details=details,
            ),
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_envelope(
                "INTERNAL_ERROR", "An unexpected error occurred",
                ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
            ),
        )


def validation_details(exc: RequestValidationError) -> list[dict]:
    """One {field, message, type} entry per pydantic error; body/query prefix dropped."""
    return [
        {
            "field": ".".join(str(part) for part in e["loc"][1:] or e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
