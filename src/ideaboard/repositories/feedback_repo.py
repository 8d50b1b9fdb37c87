"""Data access helpers for feedback."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ideaboard.models import Feedback, User

__all__ = ["FeedbackRepository"]


class FeedbackRepository:
    """Thin wrapper around database access for feedback entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_id(self, feedback_id: str) -> Feedback | None:
        return self.session.execute(
            select(Feedback).where(Feedback.id == feedback_id)
        ).scalars().first()

    def create(self, *, idea_id: str, user_id: str, content: str, now: datetime) -> Feedback:
        """Insert a feedback entry and return the flushed ORM instance."""
        feedback = Feedback(idea_id=idea_id, user_id=user_id, content=content, created_at=now)
        self.session.add(feedback)
        self.session.flush()
        return feedback

    def list_for_idea(self, idea_id: str) -> list[tuple[Feedback, str]]:
        """Return feedback on an idea with each author's username, newest first."""
        rows = self.session.execute(
            select(Feedback, User.username)
            .join(User, Feedback.user_id == User.id)
            .where(Feedback.idea_id == idea_id)
            .order_by(Feedback.created_at.desc(), Feedback.id.desc())
        ).all()
        return [(feedback, username) for feedback, username in rows]

    def count_for_idea(self, idea_id: str) -> int:
        return int(
            self.session.execute(
                select(func.count()).select_from(Feedback).where(Feedback.idea_id == idea_id)
            ).scalar()
            or 0
        )

    def count_by_author(self, user_id: str) -> int:
        return int(
            self.session.execute(
                select(func.count()).select_from(Feedback).where(Feedback.user_id == user_id)
            ).scalar()
            or 0
        )
