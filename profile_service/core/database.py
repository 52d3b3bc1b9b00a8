"""
Database configuration and session management.

This module builds the SQLAlchemy engine for the configured backend, provides the
per-request session dependency and the transaction context manager used by the
service layer for every write.
"""

import logging
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base, Session

from .config import Settings, settings

logger = logging.getLogger(__name__)


def create_db_engine(config: Settings) -> Engine:
    """
    Create the SQLAlchemy engine for the configured database.

    Args:
        config (Settings): Application settings

    Returns:
        Engine: Engine bound to ``config.database_url``
    """
    if config.DB_TYPE == "sqlite":
        return create_engine(
            config.database_url,
            connect_args={"check_same_thread": False},  # Required for SQLite
        )
    return create_engine(
        config.database_url,
        pool_pre_ping=True,  # Enable automatic reconnection
        pool_size=10,  # Set connection pool size
        max_overflow=20,  # Allow up to 20 connections to overflow from the pool
        pool_recycle=1800,  # Recycle connections after 30 minutes
        echo=False,  # Set to True for SQL query logging
    )


engine = create_db_engine(settings)

# Create SessionLocal class with transaction settings
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    expire_on_commit=False  # Prevent expired object access after commit
)

# Create Base class for declarative models
Base = declarative_base()


# PUBLIC_INTERFACE
@contextmanager
def transaction(session: Session) -> Generator[Session, None, None]:
    """
    Context manager committing the session on success and rolling back on error.

    Args:
        session (Session): SQLAlchemy session instance

    Yields:
        Session: The active database session

    Raises:
        SQLAlchemyError: If any database operation fails
    """
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise


def get_db() -> Generator[Session, None, None]:
    """
    Get database session with automatic cleanup.

    Yields:
        Session: Database session

    Note:
        This function should be used as a FastAPI dependency.
        The session is automatically closed after the request is completed.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine = engine) -> None:
    """Create all tables that do not exist yet."""
    # Models must be imported so they are registered on Base.metadata
    from profile_service.models import user  # noqa: F401

    Base.metadata.create_all(bind=bind)
    logger.info("Database tables ready")


@event.listens_for(Session, 'after_rollback')
def receive_after_rollback(session: Session) -> None:
    """
    Event listener that executes after a transaction rollback.
    Ensures all objects in the session are expired after rollback.

    Args:
        session (Session): The database session
    """
    session.expire_all()
