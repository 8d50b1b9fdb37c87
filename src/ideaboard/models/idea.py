# src/ideaboard/models/idea.py
"""SQLAlchemy model for submitted ideas."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ideaboard.db.session import Base
from ideaboard.db.time import utcnow

from ._ids import new_id

if TYPE_CHECKING:
    from .feedback import Feedback
    from .rating import Rating
    from .user import User


class Idea(Base):
    """An idea owned by exactly one author.

    Average rating, rating count and feedback count are not stored; they are
    aggregated from the ratings and feedback tables on every read.
    """

    __tablename__ = "ideas"
    __table_args__ = (
        Index("ix_ideas_user_id", "user_id"),
        Index("ix_ideas_created_at", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id"),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    author: Mapped[User] = relationship("User", back_populates="ideas")
    feedback: Mapped[list[Feedback]] = relationship("Feedback", back_populates="idea")
    ratings: Mapped[list[Rating]] = relationship("Rating", back_populates="idea")
