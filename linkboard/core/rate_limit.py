"""Fixed-window, per-client rate limiting for abuse-prone endpoints.

Counters live in process memory; a multi-instance deployment gets one
window per instance.
"""

import math
import threading
import time
from typing import Annotated

from fastapi import Depends, Request

from linkboard.core.exceptions import RateLimitError
from linkboard.core.request_logging import client_ip
from linkboard.core.settings import Settings, get_settings


class FixedWindowLimiter:
    def __init__(self) -> None:
        self._hits: dict[str, tuple[int, float]] = {}
        self._lock = threading.Lock()

    def hit(self, key: str, limit: int, window_seconds: int) -> int | None:
        """Count one request for ``key``.

        Returns None when allowed, otherwise seconds until the window resets.
        """
        now = time.monotonic()
        with self._lock:
            count, reset_at = self._hits.get(key, (0, now + window_seconds))
            if now >= reset_at:
                count = 0
                reset_at = now + window_seconds
            count += 1
            self._hits[key] = (count, reset_at)
            if count > limit:
                return max(1, math.ceil(reset_at - now))
        return None

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()


limiter = FixedWindowLimiter()


class RateLimit:
    """Route dependency enforcing ``limit`` requests per ``window_seconds``.

    Usage:
        @router.post("/login", dependencies=[Depends(AUTH_RATE_LIMIT)])
    """

    def __init__(self, scope: str, limit: int, window_seconds: int) -> None:
        self.scope = scope
        self.limit = limit
        self.window_seconds = window_seconds

    def __call__(
        self, request: Request, settings: Annotated[Settings, Depends(get_settings)]
    ) -> None:
        if not settings.rate_limit_enabled:
            return
        key = f"{self.scope}:{client_ip(request, settings.trusted_proxy_count)}"
        retry_after = limiter.hit(key, self.limit, self.window_seconds)
        if retry_after is not None:
            raise RateLimitError(retry_after=retry_after)


# Login, registration and password reset attempts.
AUTH_RATE_LIMIT = RateLimit("auth", limit=5, window_seconds=15 * 60)

# Endpoints that send email.
EMAIL_RATE_LIMIT = RateLimit("email", limit=3, window_seconds=60 * 60)
