"""SQLAlchemy Declarative Base: shared base classes for all record types.

Invariants:
    - All models inherit from Document (which inherits Base)
    - Every record carries id, created_at, updated_at and version
    - version starts at 1 and is bumped by DocumentStore.partial_update_one

Design Decisions:
    - Separate file for Base: avoids circular imports between models
    - Generic Uuid type: native on PostgreSQL, CHAR(32) on SQLite test databases
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all CircleNet ORM models."""
    pass


class Document(Base):
    """Store-managed fields shared by every collection."""
    __abstract__ = True

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
    version: Mapped[int] = mapped_column(
        Integer, nullable=False, default=1,
    )
