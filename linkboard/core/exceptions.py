"""App-wide exception hierarchy.

Each class carries the HTTP status and the machine-readable ``type`` of the
JSON error body, so services raise domain errors and the handlers in
``exception_handlers.py`` render them. Domain packages subclass the bases
below in their own ``exceptions.py``.
"""

from typing import Any


class AppException(Exception):
    """Base exception for all application errors.

    ``details`` are merged into the error body next to ``type`` and
    ``message`` (e.g. ``needs_verification``).
    """

    status_code: int = 500
    error_type: str = "internal_error"
    default_message: str = "An unexpected error occurred"

    def __init__(
        self, message: str | None = None, details: dict[str, Any] | None = None
    ):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    @property
    def headers(self) -> dict[str, str] | None:
        return None


class AuthenticationError(AppException):
    status_code = 401
    error_type = "authentication_error"
    default_message = "Authentication failed"


class AuthorizationError(AppException):
    status_code = 403
    error_type = "authorization_error"
    default_message = "Access denied"


class NotFoundError(AppException):
    status_code = 404
    error_type = "not_found"
    default_message = "Resource not found"


class ConflictError(AppException):
    status_code = 409
    error_type = "conflict"
    default_message = "Resource conflict"


class ValidationError(AppException):
    status_code = 400
    error_type = "validation_error"
    default_message = "Validation failed"


class BadRequestError(ValidationError):
    error_type = "bad_request"
    default_message = "Bad request"


class RateLimitError(AppException):
    """Too many requests; ``retry_after`` becomes the Retry-After header."""

    status_code = 429
    error_type = "rate_limit_exceeded"
    default_message = "Too many requests, please try again later"

    def __init__(self, message: str | None = None, retry_after: int | None = None):
        self.retry_after = retry_after
        super().__init__(message)

    @property
    def headers(self) -> dict[str, str] | None:
        if self.retry_after is None:
            return None
        return {"Retry-After": str(self.retry_after)}


class InternalError(AppException):
    default_message = "An internal error occurred"
