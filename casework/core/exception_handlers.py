"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to the canonical error envelope {errorKind, message, details}.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from casework.core.config import get_settings
from casework.domain.exceptions import CaseworkException

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status
ERROR_CODE_STATUS: dict[str, int] = {
    "NOT_FOUND": 404,
    "INVALID_TRANSITION": 409,
    "INVALID_STATE": 409,
    "FORBIDDEN": 403,
    "MISSING_REJECTION_REASON": 422,
    "INVALID_AMOUNT": 422,
    "QUOTE_ALREADY_ACTIVE": 409,
    "CONFLICT": 409,
    "VALIDATION_ERROR": 400,
    "SERVICE_UNAVAILABLE": 503,
}


def status_for(exc: CaseworkException) -> int:
    """HTTP status for a domain error; storage failures are upstream errors (502)."""
    if exc.error_code.startswith("STORAGE_"):
        return 502
    return ERROR_CODE_STATUS.get(exc.error_code, 400)


def _casework_exception_handler(
    request: Request, exc: CaseworkException
) -> JSONResponse:
    """Return JSON from CaseworkException.to_dict() with appropriate status code."""
    status = status_for(exc)
    if status >= 500:
        logger.error("%s on %s %s: %s", exc.error_code, request.method, request.url.path, exc.message)
    else:
        logger.info("%s on %s %s", exc.error_code, request.method, request.url.path)
    return JSONResponse(status_code=status, content=jsonable_encoder(exc.to_dict()))


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content=jsonable_encoder(
            {
                "errorKind": "VALIDATION_ERROR",
                "message": "Request validation failed",
                "details": {"errors": exc.errors()},
            }
        ),
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"errorKind": "HTTP_ERROR", "message": exc.detail, "details": {}},
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"errorKind": "INTERNAL_ERROR", "message": detail, "details": {}},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: CaseworkException (and
    subclasses), RequestValidationError, StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(CaseworkException, _casework_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
