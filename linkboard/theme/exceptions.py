from linkboard.core.exceptions import NotFoundError


class ThemeNotFoundError(NotFoundError):
    error_type = "theme_not_found"
    default_message = "Theme not found"
