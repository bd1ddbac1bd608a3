"""Database session management."""

from collections.abc import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from backend.app.config import Settings, get_settings

# Create engine - singleton pattern
_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def create_db_engine(settings: Settings) -> Engine:
    """Create a SQLAlchemy engine for the configured database URL.

    Args:
        settings: Application settings containing database URL.

    Returns:
        Configured SQLAlchemy engine.
    """
    if settings.database_url.startswith("sqlite"):
        return create_engine(
            settings.database_url,
            connect_args={"check_same_thread": False},
        )
    return create_engine(
        settings.database_url,
        pool_pre_ping=True,  # Verify connections before using
        pool_size=5,
        max_overflow=10,
    )


def get_engine() -> Engine:
    """Get SQLAlchemy engine singleton."""
    global _engine
    if _engine is None:
        _engine = create_db_engine(get_settings())
    return _engine


def get_session_factory() -> sessionmaker[Session]:
    """Get session factory singleton."""
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(
            bind=get_engine(),
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )
    return _session_factory


def get_session() -> Generator[Session, None, None]:
    """
    Yield a request-scoped database session.

    Used as a FastAPI dependency; the session is always closed afterwards and
    any uncommitted work is rolled back by ``close()``.
    """
    factory = get_session_factory()
    session = factory()
    try:
        yield session
    finally:
        session.close()
