"""SQLAlchemy Declarative Base — shared base class and timestamp columns for all ORM models.

Invariants:
    - All models inherit from Base
    - Base.metadata is the single source of truth for table definitions
    - Every table carries created_at/updated_at, both set at creation

Design Decisions:
    - Separate file for Base: avoids circular imports between models
    - Enum types built per column with a shared name: check-first DDL creates each type once
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Enum, Integer
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from artist_registry.core.domain_types import GENDERS, GENRES


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def gender_type() -> Enum:
    return Enum(*GENDERS, name="gender")


def genre_type() -> Enum:
    return Enum(*GENRES, name="genre")


class Base(DeclarativeBase):
    """Base class for all registry ORM models."""
    pass


class TimestampedEntity(Base):
    """Surrogate integer id plus creation/modification timestamps."""
    __abstract__ = True

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
