"""Theme table.

Visual settings are stored as JSON sub-documents; their shape is enforced by
the schemas in ``theme/schemas.py`` before anything is written.
"""

import uuid
from typing import Any

from sqlalchemy import JSON, Column, Index, text
from sqlmodel import Field, SQLModel

from linkboard.core.mixins import TimestampMixin


class Theme(TimestampMixin, SQLModel, table=True):
    __tablename__: str = "themes"
    __table_args__ = (
        Index(
            "uq_themes_one_active_per_profile",
            "profile_id",
            unique=True,
            sqlite_where=text("is_active"),
            postgresql_where=text("is_active"),
        ),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    profile_id: uuid.UUID = Field(foreign_key="profiles.id", index=True)
    name: str = Field(max_length=100)
    is_active: bool = Field(default=False)
    colors: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    gradients: dict[str, Any] = Field(
        default_factory=dict, sa_column=Column(JSON, nullable=False)
    )
    fonts: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    layout: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
