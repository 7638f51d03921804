"""Field validators shared by request schemas."""

from pydantic import HttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

_http_url = TypeAdapter(HttpUrl)


def validate_http_url(value: str) -> str:
    """Reject anything that is not an absolute http(s) URL.

    The value is returned exactly as submitted, not normalized.
    """
    try:
        _http_url.validate_python(value)
    except PydanticValidationError:
        raise ValueError("must be a valid http(s) URL") from None
    return value


def validate_optional_http_url(value: str | None) -> str | None:
    """Like validate_http_url, but empty or missing means "no URL"."""
    if value is None or value.strip() == "":
        return None
    return validate_http_url(value)
