from linkboard.core.exceptions import AuthorizationError, NotFoundError, ValidationError


class UserNotFoundError(NotFoundError):
    error_type = "user_not_found"
    default_message = "User not found"


class EmailExistsError(ValidationError):
    """Registration with an address that already has an account (400)."""

    error_type = "email_exists"
    default_message = "User with this email already exists"


class SelfModificationError(AuthorizationError):
    """An admin targeted their own account with a destructive action."""

    error_type = "self_modification_forbidden"
    default_message = "You cannot perform this action on yourself"
