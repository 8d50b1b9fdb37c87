"""Unit tests for the ORM models and the constraints they declare.

Constraint checks go through a real SQLite session with foreign keys turned
on, so a violation surfaces as an IntegrityError just as it would in
production.
"""

import pytest
from sqlalchemy.exc import IntegrityError

from ideaboard.core.validation import is_valid_uuid
from ideaboard.models import Feedback, Idea, Rating, User
from ideaboard.models._ids import new_id


def test_table_names():
    """Model classes expose expected __tablename__ values."""
    assert User.__tablename__ == "users"
    assert Idea.__tablename__ == "ideas"
    assert Feedback.__tablename__ == "feedback"
    assert Rating.__tablename__ == "ratings"


def test_generated_ids_are_uuid4():
    assert is_valid_uuid(new_id())
    assert new_id() != new_id()


def test_rating_pair_is_unique(db_session, idea, reviewer, rate):
    rate(reviewer, idea, 3)

    db_session.add(Rating(idea_id=idea.id, user_id=reviewer.id, score=4))
    with pytest.raises(IntegrityError):
        db_session.flush()
    db_session.rollback()


@pytest.mark.parametrize("score", [0, 6])
def test_rating_score_range_is_checked(db_session, idea, reviewer, score):
    db_session.add(Rating(idea_id=idea.id, user_id=reviewer.id, score=score))
    with pytest.raises(IntegrityError):
        db_session.flush()
    db_session.rollback()


def test_idea_author_must_exist(db_session):
    db_session.add(Idea(user_id=new_id(), title="Orphan idea", description="Nobody wrote this"))
    with pytest.raises(IntegrityError):
        db_session.flush()
    db_session.rollback()


def test_username_is_unique(db_session, author):
    db_session.add(User(username=author.username, email="other@example.com", password_hash="x"))
    with pytest.raises(IntegrityError):
        db_session.flush()
    db_session.rollback()
