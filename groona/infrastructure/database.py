"""Database configuration and session management."""

from __future__ import annotations

from collections.abc import Generator
from functools import lru_cache

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from groona.config import get_settings


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


logger = logging.getLogger(__name__)


def build_engine(database_url: str, **kwargs) -> Engine:
    """Create an engine for ``database_url`` with sensible pool defaults."""

    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        # Alert tasks open sessions from worker threads.
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        kwargs["connect_args"] = connect_args
    else:
        kwargs.setdefault("pool_pre_ping", True)
    return create_engine(url, **kwargs)


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    """Return the process wide engine built from the configured ``DATABASE_URL``."""

    settings = get_settings()
    engine = build_engine(settings.database_url)
    logger.debug("Database engine created for backend %s", engine.url.get_backend_name())
    return engine


@lru_cache(maxsize=1)
def get_session_factory() -> sessionmaker[Session]:
    """Return the shared session factory bound to :func:`get_engine`."""

    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine())


def initialize_database(engine: Engine | None = None) -> None:
    """Ensure all ORM models have corresponding database tables."""

    from groona.infrastructure import models  # noqa: F401  # ensure models are imported

    Base.metadata.create_all(bind=engine or get_engine(), checkfirst=True)


def dispose_engine() -> None:
    """Release pooled connections and forget the cached engine."""

    if get_engine.cache_info().currsize:
        get_engine().dispose()
    get_session_factory.cache_clear()
    get_engine.cache_clear()


def get_db() -> Generator[Session, None, None]:
    """Yield a database session and close it afterwards."""

    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()
