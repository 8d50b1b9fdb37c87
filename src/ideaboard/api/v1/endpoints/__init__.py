# src/ideaboard/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .feedback import router as feedback_router
from .ideas import router as ideas_router
from .ratings import router as ratings_router
from .users import router as users_router

__all__ = [
    "auth_router",
    "ideas_router",
    "feedback_router",
    "ratings_router",
    "users_router",
]
