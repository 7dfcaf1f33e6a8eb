from __future__ import annotations

import logging
from typing import Generator

from app.core.config import settings
from app.models import Base
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

logger = logging.getLogger(__name__)

_connect_args = (
    {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}
)

engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,
    connect_args=_connect_args,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create tables (dev convenience) and seed sample books when enabled.

    Production deployments should run ``alembic upgrade head`` instead.
    """
    from app.crud.books import SqlBookStore
    from app.db.seed import seed_books

    Base.metadata.create_all(bind=engine)

    if not settings.seed_demo_data:
        return

    db = SessionLocal()
    try:
        created = seed_books(SqlBookStore(db))
        if created:
            logger.info("seeded %d sample books", created)
    finally:
        db.close()
