"""Star ratings on ideas.

Each (idea, user) pair moves from unrated to rated exactly once through
:func:`create_rating`; after that only :func:`update_rating` may change the
score. An idea's author can never rate it.
"""
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ideaboard.core.errors import ConflictError, ForbiddenError, InternalError, NotFoundError
from ideaboard.core.validation import check_rating_score
from ideaboard.db.session import transaction
from ideaboard.db.time import utcnow
from ideaboard.repositories.idea_repo import IdeaRepository
from ideaboard.repositories.rating_repo import RatingRepository
from ideaboard.schemas.rating import RatingOut, RatingScore, RatingStats, to_rating_out
from ideaboard.services import metrics

__all__ = [
    "create_rating",
    "update_rating",
    "get_average_rating",
    "get_rating_count",
    "get_rating_stats",
]

logger = logging.getLogger(__name__)


def _ensure_not_author(db: Session, user_id: str, idea_id: str) -> None:
    owner_id = IdeaRepository(db).get_owner_id(idea_id)
    if owner_id is None:
        raise NotFoundError("Idea not found", code="IDEA_NOT_FOUND")
    if owner_id == user_id:
        raise ForbiddenError("Cannot rate your own idea", code="FORBIDDEN_SELF_RATING")


def _score_of(data: RatingScore | Any) -> Any:
    return data.score if isinstance(data, RatingScore) else data


def create_rating(db: Session, user_id: str, idea_id: str, data: RatingScore | int) -> RatingOut:
    """Record the first rating ``user_id`` gives ``idea_id``.

    Raises:
        NotFoundError: If the idea does not exist.
        ForbiddenError: If the user wrote the idea.
        ValidationError: If the score is not an integer from 1 to 5.
        ConflictError: If the user already rated the idea.
    """
    repo = RatingRepository(db)

    with transaction(db):
        _ensure_not_author(db, user_id, idea_id)
        score = check_rating_score(_score_of(data))
        if repo.get_for_pair(idea_id, user_id) is not None:
            raise ConflictError(
                "User has already rated this idea. Use update instead.",
                code="RATING_EXISTS",
            )
        try:
            rating = repo.create(idea_id=idea_id, user_id=user_id, score=score, now=utcnow())
        except IntegrityError as err:
            # Another request inserted the same pair between the check and the insert.
            logger.warning("Duplicate rating for idea %s by user %s", idea_id, user_id)
            raise ConflictError(
                "User has already rated this idea. Use update instead.",
                code="RATING_EXISTS",
            ) from err
        rating_id = rating.id

    created = repo.get_by_id(rating_id)
    if created is None:
        logger.error("Rating %s missing immediately after insert", rating_id)
        raise InternalError("Failed to create rating")

    logger.info("Rating %s (%d) created for idea %s by user %s", rating_id, score, idea_id, user_id)
    return to_rating_out(created)


def update_rating(db: Session, user_id: str, idea_id: str, data: RatingScore | int) -> RatingOut:
    """Replace the score of an existing rating; ``created_at`` is left untouched.

    Raises:
        NotFoundError: If the idea or the user's rating on it does not exist.
        ForbiddenError: If the user wrote the idea.
        ValidationError: If the score is not an integer from 1 to 5.
    """
    repo = RatingRepository(db)

    with transaction(db):
        _ensure_not_author(db, user_id, idea_id)
        score = check_rating_score(_score_of(data))
        if repo.get_for_pair(idea_id, user_id) is None:
            raise NotFoundError(
                "Rating not found. Create a new rating instead.",
                code="RATING_NOT_FOUND",
            )
        repo.update_score(idea_id=idea_id, user_id=user_id, score=score, now=utcnow())

    updated = repo.get_for_pair(idea_id, user_id)
    if updated is None:
        logger.error("Rating for idea %s by user %s missing after update", idea_id, user_id)
        raise InternalError("Failed to update rating")

    logger.info("Rating %s updated to %d", updated.id, score)
    return to_rating_out(updated)


def get_average_rating(db: Session, idea_id: str) -> float | None:
    """Mean score rounded half-up to one decimal, or None when unrated."""
    return metrics.average_rating(db, idea_id)


def get_rating_count(db: Session, idea_id: str) -> int:
    return metrics.rating_count(db, idea_id)


def get_rating_stats(db: Session, idea_id: str) -> RatingStats:
    return RatingStats(
        average_rating=get_average_rating(db, idea_id),
        count=get_rating_count(db, idea_id),
    )
