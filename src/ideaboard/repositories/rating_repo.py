"""Data access helpers for ratings."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from ideaboard.models import Rating

__all__ = ["RatingRepository"]


class RatingRepository:
    """Thin wrapper around database access for rating entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_id(self, rating_id: str) -> Rating | None:
        return self.session.execute(
            select(Rating).where(Rating.id == rating_id)
        ).scalars().first()

    def get_for_pair(self, idea_id: str, user_id: str) -> Rating | None:
        """Return the rating a user left on an idea, if any."""
        return self.session.execute(
            select(Rating).where(Rating.idea_id == idea_id, Rating.user_id == user_id)
        ).scalars().first()

    def create(self, *, idea_id: str, user_id: str, score: int, now: datetime) -> Rating:
        """Insert a rating; created and updated timestamps start out equal."""
        rating = Rating(
            idea_id=idea_id,
            user_id=user_id,
            score=score,
            created_at=now,
            updated_at=now,
        )
        self.session.add(rating)
        self.session.flush()
        return rating

    def update_score(self, *, idea_id: str, user_id: str, score: int, now: datetime) -> int:
        """Replace the score in place and return the number of affected rows."""
        result = self.session.execute(
            update(Rating)
            .where(Rating.idea_id == idea_id, Rating.user_id == user_id)
            .values(score=score, updated_at=now)
            .execution_options(synchronize_session="fetch")
        )
        return int(result.rowcount or 0)

    def average(self, idea_id: str) -> float | None:
        """Return the unrounded mean score, or None when the idea is unrated."""
        value = self.session.execute(
            select(func.avg(Rating.score)).where(Rating.idea_id == idea_id)
        ).scalar()
        return None if value is None else float(value)

    def count(self, idea_id: str) -> int:
        return int(
            self.session.execute(
                select(func.count()).select_from(Rating).where(Rating.idea_id == idea_id)
            ).scalar()
            or 0
        )
