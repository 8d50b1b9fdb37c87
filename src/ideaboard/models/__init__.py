# src/ideaboard/models/__init__.py
"""SQLAlchemy models for the Ideaboard application."""

from .feedback import Feedback
from .idea import Idea
from .rating import Rating
from .user import User

__all__ = [
    "Feedback",
    "Idea",
    "Rating",
    "User",
]
