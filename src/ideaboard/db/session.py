"""Database session configuration."""

from __future__ import annotations

from collections.abc import Generator, Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from ideaboard.core.settings import settings


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


# Ensure model modules are imported so that metadata is populated when create_all runs.
import ideaboard.models  # noqa: E402,F401


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _unicode_lower(value: Any) -> Any:
    return value.lower() if isinstance(value, str) else value


def _register_unicode_lower(dbapi_connection: Any, connection_record: Any) -> None:
    # Built-in lower() only folds ASCII letters.
    dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)


def create_db_engine(url: str, **kwargs: Any) -> Engine:
    """Create an engine for ``url``.

    SQLite does not enforce foreign keys unless asked to on every connection,
    so a connect hook turns them on. A second hook replaces its ASCII-only
    ``lower()`` with one that folds any letter, which title search relies on.
    """
    if url.startswith("sqlite"):
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        db_engine = create_engine(url, connect_args=connect_args, **kwargs)
        event.listen(db_engine, "connect", _enable_sqlite_foreign_keys)
        event.listen(db_engine, "connect", _register_unicode_lower)
        return db_engine
    return create_engine(url, pool_pre_ping=True, **kwargs)


engine = create_db_engine(
    settings.database_url_sync,
    echo=settings.sql_debug,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session for dependency injection."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """Run a block of reads and writes as one unit of work.

    Commits when the block exits normally; rolls back and re-raises on any
    exception.
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise


def create_tables(bind: Engine | None = None) -> None:
    """Create all database tables."""
    Base.metadata.create_all(bind=bind or engine)


def drop_tables(bind: Engine | None = None) -> None:
    """Drop all database tables."""
    Base.metadata.drop_all(bind=bind or engine)


def dispose_engine() -> None:
    """Release pooled connections held by the application engine."""
    engine.dispose()
