"""Database configuration and session management."""

import logging
from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from recruit_crm.config import settings
from recruit_crm.errors import InternalError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


# Create engine lazily to allow testing without database
_engine = None
_SessionLocal = None


def get_engine():
    """Get or create database engine."""
    global _engine
    if _engine is None:
        if not settings.database_url:
            raise ValueError("DATABASE_URL not configured")
        if settings.database_url.startswith("sqlite"):
            # Requests are served from a threadpool
            _engine = create_engine(settings.database_url, connect_args={"check_same_thread": False})
        else:
            _engine = create_engine(
                settings.database_url,
                pool_pre_ping=True,  # Test connections before use
                pool_recycle=300,  # Recycle connections after 5 minutes
            )
    return _engine


def get_session_factory():
    """Get or create session factory."""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
    return _SessionLocal


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency for database sessions."""
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


def commit(db: Session) -> None:
    """Commit the session, rolling back on failure.

    IntegrityError is re-raised for the caller to map to a conflict; any other
    database failure becomes InternalError.
    """
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(f"Commit failed: {exc.__class__.__name__}", exc_info=exc)
        raise InternalError() from exc


def init_db():
    """Initialize database tables."""
    from recruit_crm.db import tables  # noqa: F401

    Base.metadata.create_all(bind=get_engine())
