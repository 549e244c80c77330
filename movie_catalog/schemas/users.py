"""Request/response schemas for account endpoints."""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from movie_catalog.core.security import BCRYPT_MAX_BYTES
from movie_catalog.models.user import UserRole

NAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 8
LOGIN_PASSWORD_MIN_LEN = 6
LOGIN_PASSWORD_MAX_LEN = 128

STRONG_PASSWORD_MESSAGE = (
    "Password needs at least 8 characters with 1 lowercase, 1 uppercase, "
    "1 number and 1 symbol."
)


def is_strong_password(password: str) -> bool:
    """At least PASSWORD_MIN_LEN chars with a lowercase, uppercase, digit and symbol."""
    return (
        len(password) >= PASSWORD_MIN_LEN
        and re.search(r"[a-z]", password) is not None
        and re.search(r"[A-Z]", password) is not None
        and re.search(r"[0-9]", password) is not None
        and re.search(r"[^A-Za-z0-9]", password) is not None
    )


class UserForm(BaseModel):
    """Fields accepted by register and update (multipart form, avatar sent separately)."""

    name: str = Field(..., min_length=1, max_length=NAME_MAX_LEN, description="Display name")
    email: EmailStr = Field(..., description="Login email")
    password: str = Field(..., description="Plain password; stored only as a bcrypt hash")
    role: UserRole = Field(..., description="USER or ADMIN")

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if not is_strong_password(v):
            raise ValueError(STRONG_PASSWORD_MESSAGE)
        if len(v.encode("utf-8")) > BCRYPT_MAX_BYTES:
            raise ValueError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes.")
        return v


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: EmailStr = Field(..., description="Login email")
    password: str = Field(
        ...,
        min_length=LOGIN_PASSWORD_MIN_LEN,
        max_length=LOGIN_PASSWORD_MAX_LEN,
        description="Password",
    )


class UserOut(BaseModel):
    """User record as returned by the API (never includes the password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    avatar: str
    role: UserRole
    is_active: bool
    created_at: datetime | None = None


class AuthResponse(BaseModel):
    """Account plus a bearer token, returned by register and login."""

    user: UserOut
    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")


class MessageResponse(BaseModel):
    message: str
