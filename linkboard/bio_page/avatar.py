"""Avatar lookup for new bio pages.

When a page is created without an image we try the owner's Gravatar. The
lookup is an optional enrichment: any failure means "no image", never a
failed request.
"""

import hashlib
import logging
from functools import lru_cache
from typing import Annotated, Protocol

import httpx
from fastapi import Depends

from linkboard.core.http import get_outbound_client
from linkboard.core.retry import with_retry
from linkboard.core.settings import get_settings

logger = logging.getLogger(__name__)

GRAVATAR_BASE_URL = "https://www.gravatar.com/avatar"


def _is_transient(response: httpx.Response) -> bool:
    return response.status_code == 429 or response.status_code >= 500


class AvatarResolver(Protocol):
    """Protocol for avatar lookups (enables mocking in tests)."""

    async def resolve(self, email: str) -> str | None: ...


class NullAvatarResolver:
    """Resolver used when avatar lookups are disabled."""

    async def resolve(self, email: str) -> str | None:
        return None


class GravatarResolver:
    """Resolve avatars from Gravatar.

    ``d=404`` makes Gravatar answer 404 for addresses without an avatar
    instead of serving a generated placeholder.
    """

    def __init__(self, client: httpx.AsyncClient | None = None, size: int = 200) -> None:
        self._client = client
        self.size = size

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client or get_outbound_client()

    @staticmethod
    def avatar_url(email: str) -> str:
        digest = hashlib.sha256(email.strip().lower().encode()).hexdigest()
        return f"{GRAVATAR_BASE_URL}/{digest}"

    async def resolve(self, email: str) -> str | None:
        url = self.avatar_url(email)
        try:
            response = await with_retry(
                lambda: self.client.head(url, params={"d": "404"}),
                exceptions=(httpx.TransportError,),
                retry_if=_is_transient,
            )
        except httpx.HTTPError as e:
            logger.warning("Gravatar lookup failed: %s", e)
            return None

        if response.status_code != 200:
            return None
        return f"{url}?s={self.size}"


@lru_cache
def get_avatar_resolver() -> AvatarResolver:
    """Get the configured avatar resolver (cached)."""
    if not get_settings().gravatar_enabled:
        return NullAvatarResolver()
    return GravatarResolver()


AvatarResolverDep = Annotated[AvatarResolver, Depends(get_avatar_resolver)]


async def resolve_avatar(resolver: AvatarResolver, email: str) -> str | None:
    """Best-effort lookup: resolver errors are logged and treated as no image."""
    try:
        return await resolver.resolve(email)
    except Exception as e:
        logger.warning("Avatar resolution failed for new page: %s", e, exc_info=True)
        return None
