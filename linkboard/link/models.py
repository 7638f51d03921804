"""Social link table."""

import uuid

from sqlmodel import Field, SQLModel

from linkboard.core.mixins import PreciseTimestampMixin


class SocialLink(PreciseTimestampMixin, SQLModel, table=True):
    """A link shown on a profile page.

    Ownership is derived through ``profile_id``; links never carry a user id.
    Display order is ``(order, created_at, id)``.
    """

    __tablename__: str = "social_links"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    profile_id: uuid.UUID = Field(foreign_key="profiles.id", index=True)
    platform: str = Field(max_length=50)
    title: str = Field(max_length=100)
    url: str = Field(max_length=2048)
    description: str | None = Field(default=None, max_length=500)
    order: int = Field(default=0)
    is_active: bool = Field(default=True)
    clicks: int = Field(default=0)
