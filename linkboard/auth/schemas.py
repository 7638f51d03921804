"""Auth domain schemas.

Request and response schemas for authentication operations.
"""

import uuid
from typing import Annotated

from pydantic import BaseModel, EmailStr, Field

from linkboard.bio_page.schemas import ProfileRead
from linkboard.core.security import PASSWORD_MAX_LENGTH, PASSWORD_MIN_LENGTH
from linkboard.user.schemas import UserRead

Password = Annotated[
    str, Field(min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)
]


class AuthRegister(BaseModel):
    """Request schema for user registration."""

    email: EmailStr
    password: Password
    first_name: str | None = Field(default=None, max_length=50)
    last_name: str | None = Field(default=None, max_length=50)


class RegisterResponse(BaseModel):
    message: str
    user_id: uuid.UUID


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class LoginResponse(BaseModel):
    message: str
    user: UserRead


class AuthMessage(BaseModel):
    """Generic auth message response."""

    message: str


class VerifyEmailResponse(BaseModel):
    message: str
    redirect_to: str


class EmailRequest(BaseModel):
    """Request schema for forgot-password and resend-verification."""

    email: EmailStr


class ResetPasswordRequest(BaseModel):
    token: str = Field(min_length=1)
    new_password: Password


class UpdatePasswordRequest(BaseModel):
    """Request schema for updating password (authenticated user)."""

    current_password: str
    new_password: Password


class CurrentUserResponse(BaseModel):
    user: UserRead
    profile: ProfileRead | None
    is_impersonating: bool = False
