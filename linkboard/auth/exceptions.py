"""Auth domain exceptions."""

from linkboard.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BadRequestError,
    ValidationError,
)


class InvalidCredentialsError(AuthenticationError):
    """Wrong email/password, or no valid session.

    The same message is used for unknown accounts so responses do not reveal
    which emails are registered.
    """

    error_type = "invalid_credentials"
    default_message = "Invalid email or password"


class EmailNotVerifiedError(AuthorizationError):
    error_type = "email_not_verified"
    default_message = "Please verify your email before logging in"

    def __init__(self, message: str | None = None):
        super().__init__(message, details={"needs_verification": True})


class AdminRequiredError(AuthorizationError):
    error_type = "admin_required"
    default_message = "Admin privileges required"


class PasswordPolicyError(ValidationError):
    """Password out of policy; the unmet rules are listed under ``requirements``."""

    error_type = "password_policy_error"
    default_message = "Password does not meet requirements"

    def __init__(self, message: str | None = None, requirements: list[str] | None = None):
        self.requirements = requirements or []
        message = message or self.default_message
        if self.requirements:
            message = f"{message}: {', '.join(self.requirements)}"
        super().__init__(message, details={"requirements": self.requirements})


class EmailVerificationError(ValidationError):
    error_type = "email_verification_error"
    default_message = "Invalid or expired verification token"


class PasswordResetError(ValidationError):
    error_type = "password_reset_error"
    default_message = "Invalid or expired reset token"


class ImpersonationError(BadRequestError):
    error_type = "impersonation_error"
    default_message = "Cannot impersonate this user"
