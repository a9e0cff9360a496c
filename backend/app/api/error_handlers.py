"""Error Handlers — map catalog, validation and unexpected errors onto JSON responses.

Invariants:
    - CatalogError → its own http_status and to_response() body
    - OverloadedError (503) carries a Retry-After header
    - 4xx logged at WARNING, 5xx at ERROR, always with the request path
    - RequestValidationError → 400 VALIDATION_ERROR with one detail per field
    - Anything else → 500 INTERNAL_ERROR; internal details never reach the body

Design Decisions:
    - Kept out of main.py so the app factory stays a list of registrations
    - Retry-After is a fixed hint: a rejected task has no queue position to
      estimate from
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.errors import (
    CatalogError, ErrorCategory, ErrorSeverity, OverloadedError,
)

logger = logging.getLogger(__name__)

RETRY_AFTER_SECONDS = 1


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)


# ─── Handlers ────────────────────────────────────────────────────

async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    log = logger.error if exc.http_status >= 500 else logger.warning
    log(
        f"{type(exc).__name__}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "player_id": exc.context.player_id,
            "operation": exc.context.operation,
            "pool": exc.context.pool,
        },
    )
    headers = None
    if isinstance(exc, OverloadedError):
        headers = {"Retry-After": str(RETRY_AFTER_SECONDS)}
    return JSONResponse(
        status_code=exc.http_status, content=exc.to_response(), headers=headers,
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    logger.warning(
        f"Rejected request with {len(details)} invalid field(s)",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            "VALIDATION_ERROR", "Invalid request data", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, details=details,
        ),
    )


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__}: {exc}",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL,
        ),
    )


def _envelope(
    code: str, message: str, category: ErrorCategory, severity: ErrorSeverity,
    **extra,
) -> dict:
    """Same shape as CatalogError.to_response() for errors raised outside the domain."""
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category.value,
            "severity": severity.value,
            **extra,
        },
    }
