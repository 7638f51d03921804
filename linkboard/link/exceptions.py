from linkboard.core.exceptions import NotFoundError


class LinkNotFoundError(NotFoundError):
    error_type = "link_not_found"
    default_message = "Link not found"
