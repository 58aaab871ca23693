"""Database configuration and session management."""

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from rehab_tracker.config import get_settings
from rehab_tracker.errors import StorageError

logger = logging.getLogger(__name__)
settings = get_settings()

# Base class for models
Base = declarative_base()


def build_engine(database_url: str) -> Engine:
    """Create an engine suited to the backing database."""
    if database_url.startswith("sqlite"):
        # Request handlers run in a threadpool
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
        )
    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
    )


def init_db(bind: Engine) -> None:
    """Create all tables that don't exist yet."""
    import rehab_tracker.models  # noqa: F401  (registers tables on Base.metadata)

    Base.metadata.create_all(bind=bind)


# Create engine
engine = build_engine(settings.database_url)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def commit_or_raise(db, failure_message: str) -> None:
    """Commit the session, turning engine failures into StorageError."""
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception(failure_message)
        raise StorageError(failure_message) from exc
