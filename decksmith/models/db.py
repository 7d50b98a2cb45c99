"""
SQLAlchemy ORM models for the client-local store.

The local store is a plain key/value table: each row holds one opaque
JSON payload under a fixed key.
"""

from datetime import datetime

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class LocalRecordDB(Base):
    """A single key/value record in the local store."""

    __tablename__ = "local_store"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    payload: Mapped[str] = mapped_column(Text)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<LocalRecordDB(key={self.key})>"
