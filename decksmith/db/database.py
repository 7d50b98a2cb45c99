"""
Database engine and session management for the local store.

The local store is written synchronously from deck mutations, so it uses
a regular (non-async) SQLAlchemy engine.
"""

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from decksmith.config import settings
from decksmith.models.db import Base


def create_local_engine(url: str | None = None) -> Engine:
    """Create an engine for the local store (defaults to settings.local_store_url)."""
    return create_engine(url or settings.local_store_url, echo=settings.debug)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Session factory bound to the given engine."""
    return sessionmaker(engine, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """
    Initialize database tables.

    Creates all tables defined in the ORM models.
    Safe to call repeatedly.
    """
    Base.metadata.create_all(engine)


def drop_db(engine: Engine) -> None:
    """
    Drop all database tables.

    WARNING: Destroys all data. Use only for testing.
    """
    Base.metadata.drop_all(engine)
