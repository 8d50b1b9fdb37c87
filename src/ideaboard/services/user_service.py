"""Profile reads and updates for registered users."""
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ideaboard.core.errors import ConflictError, InternalError, NotFoundError, ValidationError
from ideaboard.core.validation import (
    is_valid_email,
    is_valid_username,
    sanitize_email,
    sanitize_string,
)
from ideaboard.db.session import transaction
from ideaboard.db.time import utcnow
from ideaboard.repositories.feedback_repo import FeedbackRepository
from ideaboard.repositories.idea_repo import IdeaRepository
from ideaboard.repositories.user_repo import UserRepository
from ideaboard.schemas.user import (
    PublicUser,
    UserProfile,
    UserStats,
    UserUpdate,
    to_public_user,
)

__all__ = [
    "get_user_by_id",
    "get_user_stats",
    "get_user_profile",
    "update_user",
]

logger = logging.getLogger(__name__)


def get_user_by_id(db: Session, user_id: str) -> PublicUser | None:
    """Return a user's public fields by primary key."""
    user = UserRepository(db).get_by_id(user_id)
    return to_public_user(user) if user is not None else None


def get_user_stats(db: Session, user_id: str) -> UserStats:
    """Count the ideas and feedback entries a user has written."""
    return UserStats(
        idea_count=IdeaRepository(db).count_by_author(user_id),
        feedback_count=FeedbackRepository(db).count_by_author(user_id),
    )


def get_user_profile(db: Session, user_id: str) -> UserProfile | None:
    """Return a user's public fields plus live activity counts, or None."""
    user = get_user_by_id(db, user_id)
    if user is None:
        return None
    stats = get_user_stats(db, user_id)
    return UserProfile(**user.model_dump(), **stats.model_dump())


def _validated_changes(repo: UserRepository, user_id: str, updates: UserUpdate) -> dict[str, Any]:
    changes: dict[str, Any] = {}

    if updates.username is not None:
        username = sanitize_string(updates.username)
        if not is_valid_username(username):
            raise ValidationError(
                "Username must be 3-30 characters and contain only letters, "
                "numbers, and underscores",
                details=[{"field": "username", "message": "Invalid username"}],
            )
        if repo.username_taken(username, exclude_id=user_id):
            raise ConflictError("Username already taken", code="USER_EXISTS")
        changes["username"] = username

    if updates.email is not None:
        email = sanitize_email(updates.email)
        if not is_valid_email(email):
            raise ValidationError(
                "Invalid email format",
                details=[{"field": "email", "message": "Invalid email format"}],
            )
        if repo.email_taken(email, exclude_id=user_id):
            raise ConflictError("Email already registered", code="USER_EXISTS")
        changes["email"] = email

    return changes


def update_user(db: Session, user_id: str, updates: UserUpdate) -> PublicUser:
    """Change a user's username and/or email.

    Every provided field is re-validated and checked for uniqueness against
    all other users. ``updated_at`` is refreshed even if nothing else changes.

    Raises:
        NotFoundError: If the user does not exist.
        ValidationError: If a provided field is malformed.
        ConflictError: If a provided value belongs to another user.
    """
    repo = UserRepository(db)

    with transaction(db):
        if repo.get_by_id(user_id) is None:
            raise NotFoundError("User not found", code="USER_NOT_FOUND")
        changes = _validated_changes(repo, user_id, updates)
        try:
            repo.update_fields(user_id, changes, now=utcnow())
        except IntegrityError as err:
            logger.warning("Profile update for user %s collided with another user", user_id)
            raise ConflictError("Username or email already in use", code="USER_EXISTS") from err

    updated = repo.get_by_id(user_id)
    if updated is None:
        logger.error("User %s missing after update", user_id)
        raise InternalError("Failed to retrieve updated user")

    logger.info("User %s updated fields: %s", user_id, ", ".join(sorted(changes)) or "none")
    return to_public_user(updated)
