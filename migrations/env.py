"""Alembic environment for the Ideaboard schema.

The target URL comes from ``ALEMBIC_URL`` when set, then from
``sqlalchemy.url`` in ``alembic.ini``, then from the application settings.
Online migrations reuse the application's engine factory so SQLite runs
them with foreign keys enforced.
"""
from __future__ import annotations

import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool

from ideaboard.core.settings import settings
from ideaboard.db.session import Base, create_db_engine

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _target_url() -> str:
    return (
        os.getenv("ALEMBIC_URL")
        or config.get_main_option("sqlalchemy.url")
        or settings.database_url_sync
    )


def _skip_bookkeeping(obj, name, type_, reflected, compare_to) -> bool:
    """Keep Alembic's version table out of autogenerated revisions."""
    return not (type_ == "table" and name == "alembic_version")


def _configure(**kwargs) -> None:
    url = _target_url()
    context.configure(
        target_metadata=target_metadata,
        include_object=_skip_bookkeeping,
        # SQLite cannot ALTER most constraints in place.
        render_as_batch=url.startswith("sqlite"),
        compare_type=True,
        **kwargs,
    )


def run_offline() -> None:
    """Emit SQL to stdout without connecting."""
    _configure(
        url=_target_url(),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_online() -> None:
    """Apply migrations over a live connection."""
    engine = create_db_engine(_target_url(), poolclass=pool.NullPool)
    try:
        with engine.connect() as connection:
            _configure(connection=connection)
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_offline()
else:
    run_online()
