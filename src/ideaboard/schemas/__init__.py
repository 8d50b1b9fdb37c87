# src/ideaboard/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .common import AuthorSummary, ErrorResponse
from .feedback import FeedbackCreate, FeedbackOut, FeedbackWithAuthor
from .idea import (
    IdeaCreate,
    IdeaListResponse,
    IdeaOut,
    IdeaSort,
    IdeaWithDetails,
    IdeaWithEngagement,
)
from .rating import RatingOut, RatingScore, RatingStats
from .user import (
    AuthResponse,
    LoginRequest,
    PublicUser,
    RegisterRequest,
    UserProfile,
    UserStats,
    UserUpdate,
)

__all__ = [
    "AuthorSummary", "ErrorResponse",
    "FeedbackCreate", "FeedbackOut", "FeedbackWithAuthor",
    "IdeaCreate", "IdeaListResponse", "IdeaOut", "IdeaSort",
    "IdeaWithDetails", "IdeaWithEngagement",
    "RatingOut", "RatingScore", "RatingStats",
    "AuthResponse", "LoginRequest", "PublicUser", "RegisterRequest",
    "UserProfile", "UserStats", "UserUpdate",
]
