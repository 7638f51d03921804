"""Bio page (profile) table.

A user owns one or more profiles; exactly one of them is the default page
shown after login.
"""

import uuid

from sqlalchemy import Index, text
from sqlmodel import Field, SQLModel

from linkboard.core.mixins import TimestampMixin


class Profile(TimestampMixin, SQLModel, table=True):
    __tablename__: str = "profiles"
    __table_args__ = (
        # At most one default page per user; the service keeps it at exactly one.
        Index(
            "uq_profiles_one_default_per_user",
            "user_id",
            unique=True,
            sqlite_where=text("is_default"),
            postgresql_where=text("is_default"),
        ),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: uuid.UUID = Field(foreign_key="users.id", index=True)
    page_name: str = Field(index=True, unique=True, max_length=50)
    display_name: str = Field(max_length=100)
    bio: str = Field(max_length=500)
    profile_image_url: str | None = Field(default=None, max_length=2048)
    profile_views: int = Field(default=0)
    link_clicks: int = Field(default=0)
    is_default: bool = Field(default=False)
