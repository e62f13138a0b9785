"""
Exception handlers for the maternal care API.

All error responses share one body shape:
``{"error": true, "message": ..., "status_code": ...}`` plus ``code`` and
``details`` where the error carries them.
"""

import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from maternal_care.core.domain.exceptions import DomainException

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: Any, headers: dict[str, str] | None = None, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": True, "message": message, **extra, "status_code": status_code},
        headers=headers,
    )


async def domain_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    if not isinstance(exc, DomainException):
        return await global_exception_handler(request, exc)

    logger.warning(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    return _error_response(exc.http_status, exc.message, code=exc.code, details=exc.details)


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    if not isinstance(exc, HTTPException):
        return await global_exception_handler(request, exc)
    return _error_response(exc.status_code, exc.detail, headers=exc.headers)


async def validation_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Flatten pydantic request errors into ``field``/``message``/``type`` entries."""
    errors = []
    if isinstance(exc, RequestValidationError):
        errors = [
            {
                "field": ".".join(str(part) for part in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
            }
            for error in exc.errors()
        ]

    logger.warning(f"Rejected request to {request.url.path}: {errors}")
    return _error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, "Validation error", details=errors)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    # Internals are logged, never returned to the caller
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc!s}", exc_info=True)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
