"""Request/response schemas for authentication endpoints."""

from __future__ import annotations

from pydantic import EmailStr, Field, field_validator

from cryptosports.db.models import CamelModel


class RegisterRequest(CamelModel):
    """Register with username + password + email."""

    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1, max_length=128)
    email: EmailStr
    wallet_address: str | None = Field(None, max_length=128)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        """Usernames are compared verbatim, minus surrounding whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("Username cannot be blank")
        return v


class LoginRequest(CamelModel):
    """Login with username + password."""

    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1, max_length=128)


class UserResponse(CamelModel):
    """Public view of the logged-in user."""

    id: int
    username: str
    email: str
