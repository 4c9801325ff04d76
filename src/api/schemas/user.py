"""Pydantic schemas for registration, login and the current user."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic_core import PydanticCustomError

from api.schemas.common import require_text
from infrastructure.auth.passwords import MAX_PASSWORD_BYTES


class RegisterRequest(BaseModel):
    """Schema for registering a user."""

    name: str = Field(..., max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return require_text(v, "Name")

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise PydanticCustomError(
                "password_too_long",
                "Password must be at most {limit} bytes",
                {"limit": MAX_PASSWORD_BYTES},
            )
        return v


class LoginRequest(BaseModel):
    """Schema for logging in."""

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class TokenResponse(BaseModel):
    """Session token issued on registration or login."""

    token: str


class UserResponse(BaseModel):
    """Public view of the current user (never includes the password hash)."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "name": "Alice",
                "email": "alice@example.com",
                "avatar": "https://www.gravatar.com/avatar/0bc8?s=200&r=pg&d=mm",
                "created_at": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    name: str
    email: str
    avatar: str | None = None
    created_at: datetime
