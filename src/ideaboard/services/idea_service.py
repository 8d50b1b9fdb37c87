"""Service-level helpers for creating and listing ideas."""
from __future__ import annotations

import logging
import math

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ideaboard.core.errors import InternalError, InvalidReferenceError, ValidationError
from ideaboard.core.settings import settings
from ideaboard.core.validation import RATING_MAX, RATING_MIN, check_idea, sanitize_string
from ideaboard.db.session import transaction
from ideaboard.db.time import utcnow
from ideaboard.repositories.feedback_repo import FeedbackRepository
from ideaboard.repositories.idea_repo import IdeaFilters, IdeaRepository, IdeaSort
from ideaboard.schemas.feedback import to_feedback_with_author
from ideaboard.schemas.idea import (
    IdeaCreate,
    IdeaListResponse,
    IdeaOut,
    IdeaWithDetails,
    IdeaWithEngagement,
    to_idea_out,
    to_idea_with_engagement,
)

__all__ = [
    "create_idea",
    "get_ideas",
    "get_idea_by_id",
    "get_user_ideas",
]

logger = logging.getLogger(__name__)


def create_idea(db: Session, author_id: str, data: IdeaCreate) -> IdeaOut:
    """Persist a new idea for ``author_id``.

    Args:
        db: Active database session.
        author_id: Identifier of the submitting user.
        data: Raw title and description; both are sanitized before validation.

    Returns:
        The stored idea without engagement metrics.

    Raises:
        ValidationError: If the title or description violates its length rule.
        InvalidReferenceError: If ``author_id`` does not match an existing user.
        InternalError: If the idea cannot be read back after the insert.
    """
    title, description = check_idea(data.title, data.description)
    repo = IdeaRepository(db)

    with transaction(db):
        try:
            idea = repo.create(
                user_id=author_id,
                title=title,
                description=description,
                now=utcnow(),
            )
        except IntegrityError as err:
            logger.warning("Rejected idea for unknown author %s", author_id)
            raise InvalidReferenceError(
                "Referenced resource does not exist",
                details=[{"field": "userId", "message": "Author does not exist"}],
            ) from err
        idea_id = idea.id

    created = repo.get_by_id(idea_id)
    if created is None:
        logger.error("Idea %s missing immediately after insert", idea_id)
        raise InternalError("Failed to create idea")

    logger.info("Idea %s created by user %s", idea_id, author_id)
    return to_idea_out(created)


def _clamp_page(page: int | None) -> int:
    if page is None or page < 1:
        return 1
    return page


def _clamp_limit(limit: int | None) -> int:
    if limit is None:
        return settings.default_page_size
    return max(1, min(limit, settings.max_page_size))


def _rating_bound(value: float | None) -> float | None:
    # Out-of-range bounds are rejected by the API layer; here they are ignored.
    if value is None or not RATING_MIN <= value <= RATING_MAX:
        return None
    return value


def get_ideas(
    db: Session,
    page: int | None = 1,
    limit: int | None = None,
    sort_by: IdeaSort | str = IdeaSort.DATE,
    min_rating: float | None = None,
    max_rating: float | None = None,
    search: str | None = None,
) -> IdeaListResponse:
    """Return one page of ideas with engagement metrics.

    ``total_count`` and ``total_pages`` are computed from the same filtered
    query as the page itself. Callers must reject ``min_rating > max_rating``
    before calling.
    """
    try:
        sort = IdeaSort(sort_by)
    except ValueError as err:
        raise ValidationError(
            "Invalid sortBy parameter. Must be one of: date, rating, engagement",
            details=[{"field": "sortBy", "message": "Must be one of: date, rating, engagement"}],
        ) from err

    page = _clamp_page(page)
    limit = _clamp_limit(limit)
    term = sanitize_string(search) if search is not None else ""
    filters = IdeaFilters(
        search=term or None,
        min_rating=_rating_bound(min_rating),
        max_rating=_rating_bound(max_rating),
    )

    repo = IdeaRepository(db)
    rows = repo.list_page(filters=filters, sort=sort, limit=limit, offset=(page - 1) * limit)
    total_count = repo.count(filters)

    return IdeaListResponse(
        ideas=[to_idea_with_engagement(row) for row in rows],
        total_count=total_count,
        page=page,
        total_pages=math.ceil(total_count / limit),
    )


def get_idea_by_id(db: Session, idea_id: str) -> IdeaWithDetails | None:
    """Return an idea with metrics and its full feedback list, or None."""
    row = IdeaRepository(db).get_with_engagement(idea_id)
    if row is None:
        return None

    feedback = [
        to_feedback_with_author(entry, username)
        for entry, username in FeedbackRepository(db).list_for_idea(idea_id)
    ]
    return IdeaWithDetails(
        **to_idea_with_engagement(row).model_dump(),
        feedback=feedback,
    )


def get_user_ideas(db: Session, user_id: str) -> list[IdeaWithEngagement]:
    """Return every idea written by ``user_id``, newest first."""
    return [to_idea_with_engagement(row) for row in IdeaRepository(db).list_by_author(user_id)]
