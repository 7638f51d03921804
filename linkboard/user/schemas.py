"""Account payloads.

Password hashes and one-time tokens live only on the table model; nothing
here may carry them.
"""

import uuid

from pydantic import EmailStr, Field, field_validator
from sqlmodel import SQLModel

from linkboard.core.schemas import TimestampRead
from linkboard.core.validators import validate_optional_http_url


class UserBase(SQLModel):
    """Fields every caller may see about an account."""

    email: EmailStr
    email_verified: bool
    first_name: str | None
    last_name: str | None
    profile_image_url: str | None


class UserRead(TimestampRead, UserBase):
    """Response schema for user data (self and admin contexts).

    ``is_admin`` is included so the client can show the admin entry point.
    """

    id: uuid.UUID
    is_admin: bool


class UserUpdateMe(SQLModel):
    """Self-service edits: names and picture only.

    Unknown keys such as ``is_admin`` or ``email`` are dropped, not rejected.
    """

    first_name: str | None = Field(default=None, max_length=50)
    last_name: str | None = Field(default=None, max_length=50)
    profile_image_url: str | None = None

    @field_validator("profile_image_url")
    @classmethod
    def _check_image_url(cls, value: str | None) -> str | None:
        return validate_optional_http_url(value)


class AdminToggleRequest(SQLModel):
    is_admin: bool
