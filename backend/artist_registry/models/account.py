"""Account ORM columns — shared shape of administrators and regular users.

Invariants:
    - email is unique at storage level (unique constraint <table>_email_key)
    - password holds a bcrypt hash, never plaintext
"""

from datetime import date

from sqlalchemy import Date, String
from sqlalchemy.orm import Mapped, mapped_column

from artist_registry.db.base import TimestampedEntity, gender_type


class Account(TimestampedEntity):
    """Abstract person-with-credentials row."""
    __abstract__ = True

    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    password: Mapped[str] = mapped_column(String(500), nullable=False)
    phone: Mapped[str] = mapped_column(String(20), nullable=False)
    dob: Mapped[date] = mapped_column(Date, nullable=False)
    gender: Mapped[str] = mapped_column(gender_type(), nullable=False)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
