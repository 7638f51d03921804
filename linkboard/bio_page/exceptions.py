"""Bio page domain exceptions.

Ownership failures live here because every owned resource (profiles,
links, themes) resolves its owner through a profile.
"""

from linkboard.core.exceptions import AuthorizationError, ConflictError, NotFoundError


class ProfileNotFoundError(NotFoundError):
    error_type = "profile_not_found"
    default_message = "Profile not found"


class PageNameTakenError(ConflictError):
    error_type = "page_name_taken"
    default_message = "Page name is already taken"


class NotOwnerError(AuthorizationError):
    error_type = "forbidden"
    default_message = "You do not have access to this resource"
