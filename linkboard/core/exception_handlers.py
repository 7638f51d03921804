"""Exception handlers rendering every error as ``{"type", "message", ...}``.

Registered once in ``main.py``; routes and services only raise.
"""

import logging
from collections.abc import Mapping
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from linkboard.core.exceptions import AppException

logger = logging.getLogger("linkboard.exception")

# Location prefixes that mean nothing to API clients.
_LOCATION_SOURCES = {"body", "query", "path", "header", "cookie"}


def error_response(
    status_code: int,
    error_type: str,
    message: str,
    *,
    headers: Mapping[str, str] | None = None,
    **extra: Any,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={**extra, "type": error_type, "message": message},
        headers=headers,
    )


def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    level = logging.ERROR if exc.status_code >= 500 else logging.INFO
    logger.log(
        level,
        "%s %s failed: %s (%s)",
        request.method,
        request.url.path,
        exc.error_type,
        exc.message,
        extra={
            "method": request.method,
            "path": request.url.path,
            "status_code": exc.status_code,
            "error_type": exc.error_type,
        },
    )
    return error_response(
        exc.status_code, exc.error_type, exc.message, headers=exc.headers, **exc.details
    )


def http_exception_handler(
    _request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Framework-level HTTP errors (unknown route, wrong method)."""
    return error_response(
        exc.status_code, "http_error", str(exc.detail), headers=exc.headers
    )


def _field_name(loc: tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in loc if part not in _LOCATION_SOURCES)


def validation_exception_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Request validation failures as 400 with one entry per field.

    ``message`` joins the entries for clients that only show a single string.
    """
    errors = [
        {"field": _field_name(error["loc"]), "message": error["msg"]}
        for error in exc.errors()
    ]
    message = "; ".join(
        f"{error['field']}: {error['message']}" if error["field"] else error["message"]
        for error in errors
    )
    return error_response(400, "validation_error", message, errors=errors)


def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception on %s %s: %s",
        request.method,
        request.url.path,
        exc,
        extra={"method": request.method, "path": request.url.path, "status_code": 500},
        exc_info=exc,
    )
    return error_response(500, "internal_error", "An unexpected error occurred")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
