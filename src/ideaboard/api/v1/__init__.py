# src/ideaboard/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    auth_router,
    feedback_router,
    ideas_router,
    ratings_router,
    users_router,
)

__all__ = [
    "auth_router",
    "ideas_router",
    "feedback_router",
    "ratings_router",
    "users_router",
]
