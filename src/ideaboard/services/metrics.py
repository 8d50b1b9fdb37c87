"""Engagement metrics: average rating, rating count and feedback count.

Averages are never stored. They are recomputed from the ratings table on
every read and rounded exactly once, here.
"""
from __future__ import annotations

import math
from decimal import Decimal
from typing import NamedTuple

from sqlalchemy.orm import Session

from ideaboard.repositories.feedback_repo import FeedbackRepository
from ideaboard.repositories.rating_repo import RatingRepository

__all__ = [
    "EngagementMetrics",
    "round_average",
    "average_rating",
    "rating_count",
    "feedback_count",
    "engagement_metrics",
]


class EngagementMetrics(NamedTuple):
    average_rating: float | None
    rating_count: int
    feedback_count: int


def round_average(value: float | Decimal | None) -> float | None:
    """Round a mean score half-up to one decimal place.

    ``None`` (no ratings) passes through unchanged so that "unrated" stays
    distinguishable from any numeric average.

    >>> round_average(3.25)
    3.3
    >>> round_average(None) is None
    True
    """
    if value is None:
        return None
    return math.floor(float(value) * 10 + 0.5) / 10


def average_rating(db: Session, idea_id: str) -> float | None:
    return round_average(RatingRepository(db).average(idea_id))


def rating_count(db: Session, idea_id: str) -> int:
    return RatingRepository(db).count(idea_id)


def feedback_count(db: Session, idea_id: str) -> int:
    return FeedbackRepository(db).count_for_idea(idea_id)


def engagement_metrics(db: Session, idea_id: str) -> EngagementMetrics:
    """Return all three metrics for one idea using sequential reads."""
    return EngagementMetrics(
        average_rating=average_rating(db, idea_id),
        rating_count=rating_count(db, idea_id),
        feedback_count=feedback_count(db, idea_id),
    )
