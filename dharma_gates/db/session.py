"""Database session management."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from dharma_gates.core.config import get_settings
from dharma_gates.db.models import Base

_settings = get_settings()
_connect_args: dict[str, Any] = (
    {"check_same_thread": False} if _settings.database_url.startswith("sqlite") else {}
)
_engine = create_engine(
    _settings.database_url, pool_pre_ping=True, future=True, connect_args=_connect_args
)
_SessionLocal = sessionmaker(bind=_engine, autocommit=False, autoflush=False, future=True)


def get_engine() -> Engine:
    """Return the configured SQLAlchemy engine."""

    return _engine


def init_db() -> None:
    """Create any missing tables."""

    Base.metadata.create_all(_engine)


def get_session() -> Generator[Session, None, None]:
    """Provide a session for a single request."""

    db = _SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """Context manager wrapper around a database session."""

    session = _SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:  # pragma: no cover - safeguard rollback path
        session.rollback()
        raise
    finally:
        session.close()
