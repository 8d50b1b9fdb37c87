"""User-related Pydantic schemas."""
from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from .common import CamelModel

if TYPE_CHECKING:
    from ideaboard.models import User


class RegisterRequest(BaseModel):
    """Schema for account registration."""

    username: str = Field(..., description="3-30 letters, digits or underscores")
    email: str = Field(..., description="Email address used to log in")
    password: str = Field(..., description="At least 8 characters with a letter and a digit")


class LoginRequest(BaseModel):
    """Schema for login submissions."""

    email: str
    password: str


class UserUpdate(BaseModel):
    """Partial profile update; absent fields are left untouched."""

    username: str | None = None
    email: str | None = None


class PublicUser(CamelModel):
    """User fields safe to expose outside the auth boundary."""

    id: str
    username: str
    email: str
    created_at: datetime
    updated_at: datetime


class UserStats(CamelModel):
    idea_count: int
    feedback_count: int


class UserProfile(PublicUser):
    """Public user plus live activity counts."""

    idea_count: int
    feedback_count: int


class AuthResponse(CamelModel):
    """Response returned after registration or login."""

    user: PublicUser
    token: str


def to_public_user(user: User) -> PublicUser:
    """Map a user row to its public shape, dropping the password hash."""
    return PublicUser(
        id=user.id,
        username=user.username,
        email=user.email,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )
