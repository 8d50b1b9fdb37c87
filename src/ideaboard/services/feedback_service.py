"""Service-level helpers for written feedback on ideas."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from ideaboard.core.errors import ForbiddenError, InternalError, NotFoundError
from ideaboard.core.validation import check_feedback
from ideaboard.db.session import transaction
from ideaboard.db.time import utcnow
from ideaboard.repositories.feedback_repo import FeedbackRepository
from ideaboard.repositories.idea_repo import IdeaRepository
from ideaboard.schemas.feedback import (
    FeedbackCreate,
    FeedbackOut,
    FeedbackWithAuthor,
    to_feedback_out,
    to_feedback_with_author,
)

__all__ = ["create_feedback", "get_feedback_by_idea"]

logger = logging.getLogger(__name__)


def create_feedback(
    db: Session,
    user_id: str,
    idea_id: str,
    data: FeedbackCreate,
) -> FeedbackOut:
    """Add a feedback entry from ``user_id`` on somebody else's idea.

    A user may leave any number of entries on the same idea.

    Raises:
        NotFoundError: If the idea does not exist.
        ForbiddenError: If the user wrote the idea.
        ValidationError: If the trimmed content is shorter than 10 characters.
    """
    repo = FeedbackRepository(db)

    with transaction(db):
        owner_id = IdeaRepository(db).get_owner_id(idea_id)
        if owner_id is None:
            raise NotFoundError("Idea not found", code="IDEA_NOT_FOUND")
        if owner_id == user_id:
            raise ForbiddenError(
                "Cannot provide feedback on your own idea",
                code="FORBIDDEN_SELF_FEEDBACK",
            )
        content = check_feedback(data.content)
        feedback_id = repo.create(
            idea_id=idea_id, user_id=user_id, content=content, now=utcnow()
        ).id

    created = repo.get_by_id(feedback_id)
    if created is None:
        logger.error("Feedback %s missing immediately after insert", feedback_id)
        raise InternalError("Failed to create feedback")

    logger.info("Feedback %s created on idea %s by user %s", feedback_id, idea_id, user_id)
    return to_feedback_out(created)


def get_feedback_by_idea(db: Session, idea_id: str) -> list[FeedbackWithAuthor]:
    """Return all feedback on an idea, newest first; empty if there is none."""
    return [
        to_feedback_with_author(entry, username)
        for entry, username in FeedbackRepository(db).list_for_idea(idea_id)
    ]
