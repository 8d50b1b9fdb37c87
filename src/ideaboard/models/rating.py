# src/ideaboard/models/rating.py
"""Models capturing star ratings on ideas."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    SmallInteger,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ideaboard.db.session import Base
from ideaboard.db.time import utcnow

from ._ids import new_id

if TYPE_CHECKING:
    from .idea import Idea
    from .user import User


class Rating(Base):
    """Per-user star rating on an idea."""

    __tablename__ = "ratings"
    __table_args__ = (
        # Final arbiter for concurrent create attempts on the same pair.
        UniqueConstraint("idea_id", "user_id", name="uq_ratings_idea_user"),
        CheckConstraint("score >= 1 AND score <= 5", name="ck_ratings_score_range"),
        Index("ix_ratings_idea_id", "idea_id"),
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
    score: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    idea: Mapped[Idea] = relationship("Idea", back_populates="ratings")
    user: Mapped[User] = relationship("User", back_populates="ratings")
