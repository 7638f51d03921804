"""Link domain schemas."""

import uuid
from typing import Annotated

from pydantic import BaseModel, Field, StringConstraints, field_validator

from linkboard.core.schemas import TimestampRead
from linkboard.core.validators import validate_http_url

Platform = Annotated[str, StringConstraints(min_length=1, max_length=50)]
Title = Annotated[str, StringConstraints(min_length=1, max_length=100)]


class LinkCreate(BaseModel):
    profile_id: uuid.UUID
    platform: Platform
    title: Title
    url: str = Field(max_length=2048)
    description: str | None = Field(default=None, max_length=500)
    order: int | None = Field(default=None, ge=0)
    is_active: bool = True

    @field_validator("url")
    @classmethod
    def _check_url(cls, value: str) -> str:
        return validate_http_url(value)


class LinkUpdate(BaseModel):
    """Partial link update. A link cannot be moved to another profile."""

    platform: Platform | None = None
    title: Title | None = None
    url: str | None = Field(default=None, max_length=2048)
    description: str | None = Field(default=None, max_length=500)
    order: int | None = Field(default=None, ge=0)
    is_active: bool | None = None

    @field_validator("url")
    @classmethod
    def _check_url(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return validate_http_url(value)


class LinkRead(TimestampRead):
    id: uuid.UUID
    profile_id: uuid.UUID
    platform: str
    title: str
    url: str
    description: str | None
    order: int
    is_active: bool
    clicks: int


class LinkReorderRequest(BaseModel):
    """Every link of the page, in the new order."""

    link_ids: list[uuid.UUID] = Field(min_length=1)

    @field_validator("link_ids")
    @classmethod
    def _no_duplicates(cls, value: list[uuid.UUID]) -> list[uuid.UUID]:
        if len(set(value)) != len(value):
            raise ValueError("link_ids must not repeat a link")
        return value


class LinkClickResponse(BaseModel):
    url: str
