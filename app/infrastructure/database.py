"""Database configuration and session management."""

from __future__ import annotations

from typing import Any

import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from app.config import Settings, get_settings


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


settings = get_settings()

logger = logging.getLogger(__name__)


def build_engine_options(settings: Settings) -> dict[str, Any]:
    """Return the ``create_engine`` keyword arguments for ``settings``."""

    options: dict[str, Any] = {"pool_pre_ping": True}
    if settings.database_url.startswith("sqlite"):
        # Sync routes run in a threadpool; SQLite connections must be shareable.
        options["connect_args"] = {"check_same_thread": False}
    return options


engine = create_engine(settings.database_url, **build_engine_options(settings))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def initialize_database() -> None:
    """Ensure all ORM models have corresponding database tables."""

    from app.infrastructure import models  # noqa: F401  # ensure models are imported

    Base.metadata.create_all(bind=engine, checkfirst=True)
    logger.info("Database tables ensured for %s", engine.url.render_as_string())

