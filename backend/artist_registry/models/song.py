"""Song ORM — owned by exactly one artist.

Invariants:
    - artist_id references artists.id; deleting the artist deletes the song in the same statement
    - genre is one of GENRES (storage enum type "genre")

Design Decisions:
    - Cascade declared on the foreign key (ondelete="CASCADE"), not as an ORM relationship:
      the delete stays a single statement inside the caller's transaction
"""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from artist_registry.db.base import TimestampedEntity, genre_type


class Song(TimestampedEntity):
    __tablename__ = "songs"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    album_name: Mapped[str] = mapped_column(String(255), nullable=False)
    genre: Mapped[str] = mapped_column(genre_type(), nullable=False)
    artist_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("artists.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
