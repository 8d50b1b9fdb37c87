# src/ideaboard/models/user.py
"""SQLAlchemy model for registered users."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ideaboard.db.session import Base
from ideaboard.db.time import utcnow

from ._ids import new_id

if TYPE_CHECKING:
    from .feedback import Feedback
    from .idea import Idea
    from .rating import Rating


class User(Base):
    """A registered member who can submit ideas, feedback and ratings."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    username: Mapped[str] = mapped_column(String(30), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    # Never leaves the service layer; see schemas.user.PublicUser.
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    ideas: Mapped[list[Idea]] = relationship("Idea", back_populates="author")
    feedback: Mapped[list[Feedback]] = relationship("Feedback", back_populates="author")
    ratings: Mapped[list[Rating]] = relationship("Rating", back_populates="user")
