"""
SQLAlchemy ORM models for persistent storage.

The application persists whole JSON documents under a small set of keys,
so the schema is a single key-value table.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class KeyValueDB(Base):
    """
    One persisted document.

    ``value`` holds any JSON-compatible structure; the collection and deck
    lists are stored as JSON arrays.
    """

    __tablename__ = "kv_store"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[Any] = mapped_column(JSON, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<KeyValueDB(key={self.key})>"
