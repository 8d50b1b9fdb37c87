"""Create all tables directly from the ORM metadata (local development).

Deployed databases are managed with Alembic (``alembic upgrade head``).
"""

import logging

from ideaboard.core.settings import settings
from ideaboard.db.session import create_tables, engine

logger = logging.getLogger(__name__)


def init_db() -> None:
    """Initialize the database by creating all tables."""
    create_tables()
    # str(URL) masks the password.
    logger.info("Database initialized at %s", engine.url)


if __name__ == "__main__":
    logging.basicConfig(level=settings.log_level.upper())
    init_db()
