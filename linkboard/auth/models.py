"""Auth domain models.

Server-side login sessions. The browser only holds a signed session id.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class SessionRecord(SQLModel, table=True):
    __tablename__: str = "sessions"

    sid: str = Field(primary_key=True, max_length=64)
    sess: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    expire: datetime = Field(index=True)
