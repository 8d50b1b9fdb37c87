"""Data access helpers for ideas and their aggregated engagement metrics."""
from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime
from typing import Any, NamedTuple

from sqlalchemy import ColumnElement, Select, func, select
from sqlalchemy.orm import Session

from ideaboard.models import Feedback, Idea, Rating, User

__all__ = ["IdeaSort", "IdeaFilters", "IdeaEngagementRow", "IdeaRepository"]


class IdeaSort(str, enum.Enum):
    """Orderings offered by the idea listing."""

    DATE = "date"
    RATING = "rating"
    ENGAGEMENT = "engagement"


@dataclass(frozen=True)
class IdeaFilters:
    """Optional listing filters; ``None`` disables a filter."""

    search: str | None = None
    min_rating: float | None = None
    max_rating: float | None = None


class IdeaEngagementRow(NamedTuple):
    """An idea joined with its author's username and raw aggregates."""

    idea: Idea
    username: str
    average_rating: float | None
    rating_count: int
    feedback_count: int


def _rating_stats() -> Any:
    return (
        select(
            Rating.idea_id.label("idea_id"),
            func.avg(Rating.score).label("average_rating"),
            func.count(Rating.id).label("rating_count"),
        )
        .group_by(Rating.idea_id)
        .subquery("rating_stats")
    )


def _feedback_stats() -> Any:
    return (
        select(
            Feedback.idea_id.label("idea_id"),
            func.count(Feedback.id).label("feedback_count"),
        )
        .group_by(Feedback.idea_id)
        .subquery("feedback_stats")
    )


class IdeaRepository:
    """Thin wrapper around database access for idea entities.

    Ratings and feedback are aggregated per idea in separate grouped
    subqueries before being joined, so neither count is multiplied by the
    other. Filters on the average apply to the aggregated value.
    """

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, idea_id: str) -> Idea | None:
        """Return an idea by identifier."""
        return self.session.execute(select(Idea).where(Idea.id == idea_id)).scalars().first()

    def get_owner_id(self, idea_id: str) -> str | None:
        """Return the author id of an idea, or None if the idea does not exist."""
        return self.session.execute(
            select(Idea.user_id).where(Idea.id == idea_id)
        ).scalar_one_or_none()

    def create(
        self,
        *,
        user_id: str,
        title: str,
        description: str,
        now: datetime,
    ) -> Idea:
        """Insert a new idea and return the flushed ORM instance."""
        idea = Idea(
            user_id=user_id,
            title=title,
            description=description,
            created_at=now,
            updated_at=now,
        )
        self.session.add(idea)
        self.session.flush()
        return idea

    def _engagement_query(self) -> tuple[Select[Any], Any, Any]:
        ratings = _rating_stats()
        feedback = _feedback_stats()
        stmt = (
            select(
                Idea,
                User.username,
                ratings.c.average_rating,
                func.coalesce(ratings.c.rating_count, 0).label("rating_count"),
                func.coalesce(feedback.c.feedback_count, 0).label("feedback_count"),
            )
            .join(User, Idea.user_id == User.id)
            .outerjoin(ratings, ratings.c.idea_id == Idea.id)
            .outerjoin(feedback, feedback.c.idea_id == Idea.id)
        )
        return stmt, ratings, feedback

    def _filtered_query(self, filters: IdeaFilters) -> tuple[Select[Any], Any, Any]:
        stmt, ratings, feedback = self._engagement_query()
        for predicate in self._predicates(filters, ratings):
            stmt = stmt.where(predicate)
        return stmt, ratings, feedback

    @staticmethod
    def _predicates(filters: IdeaFilters, ratings: Any) -> list[ColumnElement[bool]]:
        predicates: list[ColumnElement[bool]] = []
        if filters.search:
            predicates.append(
                func.lower(Idea.title).contains(filters.search.lower(), autoescape=True)
            )
        rounded = func.round(ratings.c.average_rating, 1)
        if filters.min_rating is not None:
            predicates.append(rounded >= filters.min_rating)
        if filters.max_rating is not None:
            predicates.append(rounded <= filters.max_rating)
        return predicates

    @staticmethod
    def _ordering(sort: IdeaSort, ratings: Any, feedback: Any) -> list[Any]:
        newest_first = [Idea.created_at.desc(), Idea.id.desc()]
        orderings = {
            IdeaSort.DATE: newest_first,
            IdeaSort.RATING: [
                func.round(ratings.c.average_rating, 1).desc().nulls_last(),
                *newest_first,
            ],
            IdeaSort.ENGAGEMENT: [
                func.coalesce(feedback.c.feedback_count, 0).desc(),
                *newest_first,
            ],
        }
        return orderings[sort]

    @staticmethod
    def _to_rows(result: Any) -> list[IdeaEngagementRow]:
        return [IdeaEngagementRow(*row) for row in result.all()]

    def list_page(
        self,
        *,
        filters: IdeaFilters,
        sort: IdeaSort,
        limit: int,
        offset: int,
    ) -> list[IdeaEngagementRow]:
        """Return one page of ideas with engagement metrics."""
        stmt, ratings, feedback = self._filtered_query(filters)
        stmt = stmt.order_by(*self._ordering(sort, ratings, feedback)).limit(limit).offset(offset)
        return self._to_rows(self.session.execute(stmt))

    def count(self, filters: IdeaFilters) -> int:
        """Count ideas matching exactly the predicates used by ``list_page``."""
        stmt, _, _ = self._filtered_query(filters)
        count_stmt = select(func.count()).select_from(stmt.subquery("filtered_ideas"))
        return int(self.session.execute(count_stmt).scalar() or 0)

    def get_with_engagement(self, idea_id: str) -> IdeaEngagementRow | None:
        """Return a single idea with engagement metrics."""
        stmt, _, _ = self._engagement_query()
        row = self.session.execute(stmt.where(Idea.id == idea_id)).first()
        return IdeaEngagementRow(*row) if row is not None else None

    def list_by_author(self, user_id: str) -> list[IdeaEngagementRow]:
        """Return every idea written by a user, newest first."""
        stmt, _, _ = self._engagement_query()
        stmt = stmt.where(Idea.user_id == user_id).order_by(Idea.created_at.desc(), Idea.id.desc())
        return self._to_rows(self.session.execute(stmt))

    def count_by_author(self, user_id: str) -> int:
        """Return the number of ideas written by a user."""
        return int(
            self.session.execute(
                select(func.count()).select_from(Idea).where(Idea.user_id == user_id)
            ).scalar()
            or 0
        )
