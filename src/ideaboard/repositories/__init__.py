"""Persistence gateway: parameterized statements grouped per entity."""

from .feedback_repo import FeedbackRepository
from .idea_repo import IdeaEngagementRow, IdeaFilters, IdeaRepository, IdeaSort
from .rating_repo import RatingRepository
from .user_repo import UserRepository

__all__ = [
    "FeedbackRepository",
    "IdeaEngagementRow",
    "IdeaFilters",
    "IdeaRepository",
    "IdeaSort",
    "RatingRepository",
    "UserRepository",
]
