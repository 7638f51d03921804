"""User domain models.

SQLModel table definition for User.
"""

import uuid
from datetime import datetime

from pydantic import EmailStr
from sqlmodel import Field, SQLModel

from linkboard.core.mixins import TimestampMixin


class User(TimestampMixin, SQLModel, table=True):
    """User database model.

    Note: password_hash and the verification/reset tokens are internal-only
    and must never be exposed in API responses.
    """

    __tablename__: str = "users"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    email: EmailStr = Field(index=True, unique=True, max_length=255)
    password_hash: str | None = Field(default=None, max_length=255)
    first_name: str | None = Field(default=None, max_length=50)
    last_name: str | None = Field(default=None, max_length=50)
    profile_image_url: str | None = Field(default=None, max_length=2048)
    email_verified: bool = Field(default=False)
    email_verification_token: str | None = Field(
        default=None, index=True, max_length=64
    )
    email_verification_expires: datetime | None = Field(default=None)
    password_reset_token: str | None = Field(default=None, index=True, max_length=64)
    password_reset_expires: datetime | None = Field(default=None)
    is_admin: bool = Field(default=False)

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)
