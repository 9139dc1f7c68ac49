"""Database configuration and session management."""

from typing import Optional

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from kennel.config import Settings


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


def get_engine(settings: Optional[Settings] = None) -> Engine:
    """
    Create the database engine for the configured URL.

    In-memory SQLite URLs share a single connection so every session sees
    the same database.

    Args:
        settings: Application settings (loaded from the environment if omitted)

    Returns:
        Engine: The SQLAlchemy engine
    """
    settings = settings or Settings()

    if settings.is_sqlite:
        kwargs = {"connect_args": {"check_same_thread": False}}
        if settings.database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        engine = create_engine(settings.database_url, echo=settings.debug, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_engine(
        settings.database_url,
        echo=settings.debug,  # Log SQL queries in debug mode
        pool_pre_ping=True,  # Verify connections before using them
        pool_size=settings.pool_size,
        max_overflow=10,
    )


def get_session_maker(engine: Engine) -> sessionmaker[Session]:
    """
    Build the session factory used by the entity store.

    Args:
        engine: Engine returned by get_engine

    Returns:
        sessionmaker: Factory producing Session objects
    """
    return sessionmaker(
        engine,
        class_=Session,
        expire_on_commit=False,  # Read models are built after commit
        autoflush=False,
    )


def create_schema(engine: Engine) -> None:
    """Create every mapped table (tests and local development)."""
    import kennel.models  # noqa: F401 - registers the mappers

    Base.metadata.create_all(engine)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
