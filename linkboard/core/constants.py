"""Route prefixes, OpenAPI error responses and the email template environment."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

# JSON routers live under /api; /health and /admin stay at the root.
API_PREFIX = "/api"


@dataclass(frozen=True)
class RouteConfig:
    prefix: str
    tag: str


class Routes:
    AUTH = RouteConfig(prefix="/auth", tag="auth")
    USER = RouteConfig(prefix="/users", tag="users")
    BIO_PAGE = RouteConfig(prefix="/bio-pages", tag="bio-pages")
    PROFILE = RouteConfig(prefix="/profile", tag="profiles")
    LINK = RouteConfig(prefix="/links", tag="links")
    THEME = RouteConfig(prefix="/themes", tag="themes")
    ANALYTICS = RouteConfig(prefix="/analytics", tag="analytics")
    ADMIN = RouteConfig(prefix="/admin", tag="admin")
    HEALTH = RouteConfig(prefix="/health", tag="health")


ERROR_DESCRIPTIONS = {
    400: "Invalid request data",
    401: "No valid session",
    403: "Not the owner, or admin rights required",
    404: "Resource not found",
    409: "Conflicts with an existing resource",
    429: "Too many attempts, retry later",
}


def _documented(status_code: int) -> dict[int, dict[str, Any]]:
    return {status_code: {"description": ERROR_DESCRIPTIONS[status_code]}}


class CommonResponses:
    """``responses=`` fragments, merged with ``**`` at the route."""

    BAD_REQUEST = _documented(400)
    UNAUTHORIZED = _documented(401)
    FORBIDDEN = _documented(403)
    NOT_FOUND = _documented(404)
    CONFLICT = _documented(409)
    TOO_MANY_REQUESTS = _documented(429)


EMAIL_TEMPLATES_DIR = Path(__file__).parent.parent / "templates" / "emails"

email_templates = Environment(
    loader=FileSystemLoader(str(EMAIL_TEMPLATES_DIR)),
    autoescape=select_autoescape(["html", "xml"]),
)
