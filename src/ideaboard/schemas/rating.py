"""Rating-related Pydantic schemas."""
from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from .common import CamelModel

if TYPE_CHECKING:
    from ideaboard.models import Rating


class RatingScore(BaseModel):
    """Body for creating or updating a rating.

    Only JSON integers are accepted; the 1-5 range is enforced by the service.
    """

    score: int = Field(..., strict=True, description="Integer star rating from 1 to 5")


class RatingOut(CamelModel):
    id: str
    idea_id: str
    user_id: str
    score: int
    created_at: datetime
    updated_at: datetime


class RatingStats(CamelModel):
    """Average rating (None when unrated) and number of ratings for an idea."""

    average_rating: float | None
    count: int


def to_rating_out(rating: Rating) -> RatingOut:
    """Convert a Rating ORM instance to an API schema."""
    return RatingOut(
        id=rating.id,
        idea_id=rating.idea_id,
        user_id=rating.user_id,
        score=rating.score,
        created_at=rating.created_at,
        updated_at=rating.updated_at,
    )
