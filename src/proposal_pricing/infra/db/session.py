from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from proposal_pricing.infra.db.config import DatabaseSettings

# Lazy initialization - only create engine/session when a DB path is hit
_engine: Engine | None = None
_session_local: sessionmaker[Session] | None = None


def get_engine() -> Engine:
    """
    Get or create the database engine (lazy initialization).

    Pool sizing comes from DatabaseSettings (DB_POOL_SIZE, DB_MAX_OVERFLOW,
    DB_POOL_RECYCLE_SECONDS). pool_pre_ping is always on: offer reads happen
    on proposal load after arbitrarily long idle periods.
    """
    global _engine
    if _engine is None:
        settings = DatabaseSettings.from_env()
        _engine = create_engine(
            settings.url,
            pool_size=settings.pool_size,
            max_overflow=settings.max_overflow,
            pool_pre_ping=True,
            pool_recycle=settings.pool_recycle,
            echo=settings.echo,
        )
    return _engine


def get_session_local() -> sessionmaker[Session]:
    """Get or create the session factory (lazy initialization)."""
    global _session_local
    if _session_local is None:
        _session_local = sessionmaker(
            bind=get_engine(),
            class_=Session,
            expire_on_commit=False,
        )
    return _session_local


@contextmanager
def get_session() -> Iterator[Session]:
    """Get a database session with automatic commit/rollback."""
    session = get_session_local()()

    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
