# src/ideaboard/models/feedback.py
"""SQLAlchemy model for written feedback on ideas."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ideaboard.db.session import Base
from ideaboard.db.time import utcnow

from ._ids import new_id

if TYPE_CHECKING:
    from .idea import Idea
    from .user import User


class Feedback(Base):
    """Free-text feedback left by a non-author on an idea.

    Feedback is immutable once written, and a user may leave several entries on
    the same idea.
    """

    __tablename__ = "feedback"
    __table_args__ = (
        Index("ix_feedback_idea_id", "idea_id"),
        Index("ix_feedback_user_id", "user_id"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    idea_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("ideas.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id"),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    idea: Mapped[Idea] = relationship("Idea", back_populates="feedback")
    author: Mapped[User] = relationship("User", back_populates="feedback")
