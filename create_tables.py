"""
create_tables.py

Run this script once to create all database tables defined in SQLAlchemy models.
This uses the Base.metadata.create_all method with the configured engine.

You should run this after setting up your database URL in `.env`. For
incremental schema changes use Alembic (`alembic upgrade head`).
"""

import logging

from app.core import logging_config  # noqa: F401
from app.db.base import Base
from app.db.session import engine

# Ensure all models are imported before calling create_all
from app.db import models  # noqa: F401

logger = logging.getLogger(__name__)

def init_db():
    logger.info("Creating all database tables...")
    Base.metadata.create_all(bind=engine)
    logger.info("Done.")

if __name__ == "__main__":
    init_db()
