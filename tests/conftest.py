# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import UTC, datetime, timedelta
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

# The application engine is never used by tests (get_db is overridden), but it
# must not point at a file on disk or create tables on startup.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from ideaboard.core.security import create_access_token, hash_password
from ideaboard.db.session import Base, create_db_engine
from ideaboard.db.session import get_db as app_get_session
from ideaboard.main import app as fastapi_app
from ideaboard.models import Feedback, Idea, Rating, User

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "password123"
BASE_TIME = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)

_USER_COUNTER = count(1)
_IDEA_COUNTER = count(1)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_db_engine(TEST_DB_URL, poolclass=StaticPool)

    # pysqlite never emits BEGIN itself, so the per-test outer transaction
    # would be a no-op; take over transaction control so rollback isolates.
    @event.listens_for(engine, "connect")
    def _disable_pysqlite_autobegin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")

    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    """Session whose commits and rollbacks only touch savepoints.

    The outer transaction is rolled back after each test, so services can
    commit freely without leaking rows into the next test.
    """
    connection = engine.connect()
    transaction = connection.begin()
    session = Session(bind=connection, join_transaction_mode="create_savepoint")
    try:
        yield session
    finally:
        session.close()
        if transaction.is_active:
            transaction.rollback()
        connection.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def auth_headers() -> Callable[[User], dict[str, str]]:
    """Return a helper building bearer headers for a user."""

    def _auth_headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _auth_headers


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Factory persisting users that can log in with ``TEST_PASSWORD``."""

    def _make_user(username: str | None = None, email: str | None = None) -> User:
        n = next(_USER_COUNTER)
        username = username or f"user_{n}"
        user = User(
            username=username,
            email=email or f"{username.lower()}@example.com",
            password_hash=hash_password(TEST_PASSWORD),
            created_at=BASE_TIME,
            updated_at=BASE_TIME,
        )
        db_session.add(user)
        db_session.commit()
        return user

    return _make_user


@pytest.fixture()
def make_idea(db_session: Session) -> Callable[..., Idea]:
    """Factory persisting ideas with strictly increasing creation times."""

    def _make_idea(
        author: User,
        title: str | None = None,
        description: str = "A description long enough to be valid",
        created_at: datetime | None = None,
    ) -> Idea:
        n = next(_IDEA_COUNTER)
        created = created_at or BASE_TIME + timedelta(minutes=n)
        idea = Idea(
            user_id=author.id,
            title=title or f"Idea number {n}",
            description=description,
            created_at=created,
            updated_at=created,
        )
        db_session.add(idea)
        db_session.commit()
        return idea

    return _make_idea


@pytest.fixture()
def rate(db_session: Session) -> Callable[[User, Idea, int], Rating]:
    """Insert a rating directly, bypassing the service-level checks."""

    def _rate(user: User, idea: Idea, score: int) -> Rating:
        rating = Rating(
            idea_id=idea.id,
            user_id=user.id,
            score=score,
            created_at=BASE_TIME,
            updated_at=BASE_TIME,
        )
        db_session.add(rating)
        db_session.commit()
        return rating

    return _rate


@pytest.fixture()
def leave_feedback(db_session: Session) -> Callable[..., Feedback]:
    """Insert a feedback entry directly."""

    def _leave_feedback(
        user: User,
        idea: Idea,
        content: str = "Thoughtful feedback on this idea",
        created_at: datetime | None = None,
    ) -> Feedback:
        feedback = Feedback(
            idea_id=idea.id,
            user_id=user.id,
            content=content,
            created_at=created_at or BASE_TIME,
        )
        db_session.add(feedback)
        db_session.commit()
        return feedback

    return _leave_feedback


@pytest.fixture()
def author(make_user: Callable[..., User]) -> User:
    """The user who writes ideas in most tests."""
    return make_user("author")


@pytest.fixture()
def reviewer(make_user: Callable[..., User]) -> User:
    """A user who rates and comments on other people's ideas."""
    return make_user("reviewer")


@pytest.fixture()
def idea(make_idea: Callable[..., Idea], author: User) -> Idea:
    return make_idea(author, title="Solar powered bikes")
