"""Bio page domain schemas."""

import uuid
from typing import Annotated

from pydantic import BaseModel, Field, StringConstraints, field_validator

from linkboard.core.schemas import TimestampRead
from linkboard.core.validators import validate_optional_http_url
from linkboard.link.schemas import LinkRead

PAGE_NAME_PATTERN = r"^[A-Za-z0-9_-]+$"

PageName = Annotated[
    str, StringConstraints(min_length=1, max_length=50, pattern=PAGE_NAME_PATTERN)
]
DisplayName = Annotated[str, StringConstraints(min_length=1, max_length=100)]
Bio = Annotated[str, StringConstraints(min_length=1, max_length=500)]


class BioPageCreate(BaseModel):
    page_name: PageName
    display_name: DisplayName
    bio: Bio
    profile_image_url: str | None = None

    @field_validator("profile_image_url")
    @classmethod
    def _check_image_url(cls, value: str | None) -> str | None:
        return validate_optional_http_url(value)


class BioPageUpdate(BaseModel):
    """Partial update; ownership, counters and the default flag are not editable."""

    page_name: PageName | None = None
    display_name: DisplayName | None = None
    bio: Bio | None = None
    profile_image_url: str | None = Field(default=None)

    @field_validator("profile_image_url")
    @classmethod
    def _check_image_url(cls, value: str | None) -> str | None:
        return validate_optional_http_url(value)


class ProfileRead(TimestampRead):
    id: uuid.UUID
    user_id: uuid.UUID
    page_name: str
    display_name: str
    bio: str
    profile_image_url: str | None
    profile_views: int
    link_clicks: int
    is_default: bool


class PublicProfileRead(BaseModel):
    """Profile fields shown to anonymous visitors."""

    id: uuid.UUID
    page_name: str
    display_name: str
    bio: str
    profile_image_url: str | None
    profile_views: int


class PublicProfileResponse(BaseModel):
    profile: PublicProfileRead
    links: list[LinkRead]
