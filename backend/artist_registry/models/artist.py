"""Artist ORM — owner of zero or more songs.

Invariants:
    - first_release_year is an integer year (range checked at the API boundary)
    - Songs reference artists.id with ON DELETE CASCADE (see models/song.py)
"""

from datetime import date

from sqlalchemy import Date, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from artist_registry.db.base import TimestampedEntity, gender_type


class Artist(TimestampedEntity):
    __tablename__ = "artists"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    dob: Mapped[date] = mapped_column(Date, nullable=False)
    gender: Mapped[str] = mapped_column(gender_type(), nullable=False)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    first_release_year: Mapped[int] = mapped_column(Integer, nullable=False)
    no_of_albums_released: Mapped[int] = mapped_column(Integer, nullable=False)
