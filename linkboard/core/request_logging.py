"""Access log middleware.

One line per request on the ``linkboard.request`` logger, with the request
details attached as ``extra`` fields for the JSON formatter. One-time tokens
in query strings (verification and reset links) are masked.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from linkboard.core.logging import env_bool
from linkboard.core.settings import get_settings

logger = logging.getLogger("linkboard.request")

_SENSITIVE_QUERY_KEYS = {"token"}
# Load balancer probes would otherwise dominate the log.
_QUIET_PATHS = {"/health"}


def _redact_query(query: str) -> str:
    if not query:
        return query
    pairs = []
    for pair in query.split("&"):
        key, sep, _value = pair.partition("=")
        pairs.append(f"{key}{sep}***" if key in _SENSITIVE_QUERY_KEYS and sep else pair)
    return "&".join(pairs)


def client_ip(request: Request, trusted_proxy_count: int = 0) -> str:
    """Address of the caller as seen by the nearest untrusted hop.

    X-Forwarded-For is ignored unless ``trusted_proxy_count`` reverse proxies
    sit in front of the app. Each of them appends the address it saw, so the
    client is the entry that many places from the right; anything further
    left was supplied by the caller and can be forged.
    """
    if trusted_proxy_count > 0:
        hops = [
            hop.strip()
            for hop in request.headers.get("x-forwarded-for", "").split(",")
            if hop.strip()
        ]
        if hops:
            return hops[max(len(hops) - trusted_proxy_count, 0)]
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def _level_for(path: str, status_code: int | None) -> int:
    if status_code is None or status_code >= 500:
        return logging.ERROR
    if status_code == 429:
        return logging.WARNING
    if path in _QUIET_PATHS:
        return logging.DEBUG
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, trusted_proxy_count: int = 0) -> None:
        super().__init__(app)
        self.trusted_proxy_count = trusted_proxy_count

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start = time.perf_counter()
        status_code: int | None = None
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000.0, 2)
            path = request.url.path
            query = _redact_query(request.url.query)
            extra: dict[str, Any] = {
                "method": request.method,
                "path": path,
                "query": query,
                "status_code": status_code,
                "duration_ms": duration_ms,
                "client_ip": client_ip(request, self.trusted_proxy_count),
                "user_agent": request.headers.get("user-agent"),
            }
            logger.log(
                _level_for(path, status_code),
                "%s %s%s -> %s (%.2fms)",
                request.method,
                path,
                f"?{query}" if query else "",
                status_code,
                duration_ms,
                extra=extra,
            )


def add_request_logging_middleware(app: FastAPI) -> None:
    """Attach the access log middleware unless LOG_REQUESTS is off."""
    if env_bool("LOG_REQUESTS", default=True):
        app.add_middleware(
            RequestLoggingMiddleware,
            trusted_proxy_count=get_settings().trusted_proxy_count,
        )
