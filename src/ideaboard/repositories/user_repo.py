"""Data access helpers for users."""
from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import or_, select, update
from sqlalchemy.orm import Session

from ideaboard.models import User

__all__ = ["UserRepository"]


class UserRepository:
    """Thin wrapper around database access for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_id(self, user_id: str) -> User | None:
        return self.session.execute(select(User).where(User.id == user_id)).scalars().first()

    def get_by_email(self, email: str) -> User | None:
        return self.session.execute(select(User).where(User.email == email)).scalars().first()

    def find_by_email_or_username(self, email: str, username: str) -> User | None:
        """Return any user already holding either identifier."""
        return self.session.execute(
            select(User).where(or_(User.email == email, User.username == username))
        ).scalars().first()

    def username_taken(self, username: str, *, exclude_id: str) -> bool:
        """Return True if another user already holds ``username``."""
        return self.session.execute(
            select(User.id).where(User.username == username, User.id != exclude_id)
        ).first() is not None

    def email_taken(self, email: str, *, exclude_id: str) -> bool:
        """Return True if another user already holds ``email``."""
        return self.session.execute(
            select(User.id).where(User.email == email, User.id != exclude_id)
        ).first() is not None

    def create(
        self,
        *,
        username: str,
        email: str,
        password_hash: str,
        now: datetime,
    ) -> User:
        """Insert a new user and return the flushed ORM instance."""
        user = User(
            username=username,
            email=email,
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )
        self.session.add(user)
        self.session.flush()
        return user

    def update_fields(self, user_id: str, values: dict[str, Any], *, now: datetime) -> int:
        """Apply ``values`` and refresh ``updated_at``; return affected row count."""
        result = self.session.execute(
            update(User)
            .where(User.id == user_id)
            .values(**values, updated_at=now)
            .execution_options(synchronize_session="fetch")
        )
        return int(result.rowcount or 0)
