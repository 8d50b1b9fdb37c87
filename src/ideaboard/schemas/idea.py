"""Idea-related Pydantic schemas."""
from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel

from ideaboard.repositories.idea_repo import IdeaSort
from ideaboard.services.metrics import round_average

from .common import AuthorSummary, CamelModel
from .feedback import FeedbackWithAuthor

if TYPE_CHECKING:
    from ideaboard.models import Idea
    from ideaboard.repositories.idea_repo import IdeaEngagementRow


__all__ = [
    "IdeaSort",
    "IdeaCreate",
    "IdeaOut",
    "IdeaWithEngagement",
    "IdeaWithDetails",
    "IdeaListResponse",
    "IdeaEnvelope",
    "IdeaDetailEnvelope",
    "IdeaCollection",
    "to_idea_out",
    "to_idea_with_engagement",
]


class IdeaCreate(BaseModel):
    """Schema for submitting a new idea."""

    title: str
    description: str


class IdeaOut(CamelModel):
    """An idea as stored, without engagement metrics."""

    id: str
    user_id: str
    title: str
    description: str
    created_at: datetime
    updated_at: datetime


class IdeaWithEngagement(IdeaOut):
    author: AuthorSummary
    average_rating: float | None
    rating_count: int
    feedback_count: int


class IdeaWithDetails(IdeaWithEngagement):
    feedback: list[FeedbackWithAuthor]


class IdeaListResponse(CamelModel):
    ideas: list[IdeaWithEngagement]
    total_count: int
    page: int
    total_pages: int


class IdeaEnvelope(BaseModel):
    idea: IdeaOut


class IdeaDetailEnvelope(BaseModel):
    idea: IdeaWithDetails


class IdeaCollection(BaseModel):
    ideas: list[IdeaWithEngagement]


def to_idea_out(idea: Idea) -> IdeaOut:
    """Convert an Idea ORM instance to an API schema."""
    return IdeaOut(
        id=idea.id,
        user_id=idea.user_id,
        title=idea.title,
        description=idea.description,
        created_at=idea.created_at,
        updated_at=idea.updated_at,
    )


def to_idea_with_engagement(row: IdeaEngagementRow) -> IdeaWithEngagement:
    """Convert an aggregated listing row, rounding the raw average once."""
    return IdeaWithEngagement(
        **to_idea_out(row.idea).model_dump(),
        author=AuthorSummary(id=row.idea.user_id, username=row.username),
        average_rating=round_average(row.average_rating),
        rating_count=int(row.rating_count or 0),
        feedback_count=int(row.feedback_count or 0),
    )
