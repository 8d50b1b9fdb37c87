"""Feedback-related Pydantic schemas."""
from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel

from .common import AuthorSummary, CamelModel

if TYPE_CHECKING:
    from ideaboard.models import Feedback


class FeedbackCreate(BaseModel):
    """Schema for submitting feedback on an idea."""

    content: str


class FeedbackOut(CamelModel):
    id: str
    idea_id: str
    user_id: str
    content: str
    created_at: datetime


class FeedbackWithAuthor(FeedbackOut):
    author: AuthorSummary


def to_feedback_out(feedback: Feedback) -> FeedbackOut:
    """Convert a Feedback ORM instance to an API schema."""
    return FeedbackOut(
        id=feedback.id,
        idea_id=feedback.idea_id,
        user_id=feedback.user_id,
        content=feedback.content,
        created_at=feedback.created_at,
    )


def to_feedback_with_author(feedback: Feedback, username: str) -> FeedbackWithAuthor:
    """Convert a Feedback row joined with its author's username."""
    return FeedbackWithAuthor(
        **to_feedback_out(feedback).model_dump(),
        author=AuthorSummary(id=feedback.user_id, username=username),
    )
