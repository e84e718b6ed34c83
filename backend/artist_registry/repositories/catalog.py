"""Catalog Repositories — artists and the songs they own.

Invariants:
    - A song can only be created for an artist that exists at creation time;
      otherwise ReferenceNotFoundError is raised before any provisioning or transaction
    - An artist deleted between that check and the insert is also ReferenceNotFoundError
    - Deleting an artist removes its songs through the songs.artist_id ON DELETE CASCADE
    - list_songs_for() is not-found for a missing artist and [] before songs are provisioned
    - Artist list items carry "songs", the number of songs the artist owns
"""

import logging
from typing import Any

from sqlalchemy import func, literal, select
from sqlalchemy.exc import IntegrityError

from artist_registry.core.domain_types import EntityKind
from artist_registry.core.errors import ErrorContext, ReferenceNotFoundError
from artist_registry.models import Artist, Song
from artist_registry.repositories.base import EntityRepository

logger = logging.getLogger(__name__)

_FOREIGN_KEY_VIOLATION = "23503"


def is_foreign_key_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate == _FOREIGN_KEY_VIOLATION:
        return True
    return "foreign key" in str(orig).lower()


class ArtistRepository(EntityRepository):
    model = Artist
    kind = EntityKind.ARTIST
    label = "Artist"

    async def _list_statement(self):
        if not await self._provisioner.exists(EntityKind.SONG):
            return select(Artist, literal(0)).order_by(Artist.id)
        return (
            select(Artist, func.count(Song.id))
            .outerjoin(Song, Song.artist_id == Artist.id)
            .group_by(Artist.id)
            .order_by(Artist.id)
        )

    def _list_item(self, row) -> dict[str, Any]:
        artist, song_count = row
        return {**self.to_public(artist), "songs": int(song_count or 0)}

    async def list_songs_for(self, artist_id: int) -> list[dict[str, Any]]:
        """Songs owned by the artist, ordered by id."""
        if not await self.exists(artist_id):
            raise self._not_found(artist_id)
        if not await self._provisioner.exists(EntityKind.SONG):
            return []
        async with self._db.session() as db:
            songs = await db.scalars(
                select(Song).where(Song.artist_id == artist_id).order_by(Song.id),
            )
            return [
                {key: getattr(song, key) for key in ("id", "title", "album_name", "genre")}
                for song in songs.all()
            ]


class SongRepository(EntityRepository):
    model = Song
    kind = EntityKind.SONG
    label = "Song"

    def __init__(self, db, provisioner, artists: ArtistRepository):
        super().__init__(db, provisioner)
        self._artists = artists

    def _missing_artist(self, artist_id) -> ReferenceNotFoundError:
        logger.warning(
            f"Song rejected: artist {artist_id} does not exist",
            extra={"entity": self.kind.value, "error_code": "REFERENCE_NOT_FOUND"},
        )
        return ReferenceNotFoundError(
            "Artist", artist_id, ErrorContext(entity=EntityKind.ARTIST.value),
        )

    async def create(self, fields: dict[str, Any]) -> int:
        artist_id = fields.get("artist_id")
        if artist_id is None or not await self._artists.exists(artist_id):
            raise self._missing_artist(artist_id)
        try:
            return await super().create(fields)
        except IntegrityError as e:
            # Artist deleted between the check and the insert
            if not is_foreign_key_violation(e):
                raise
            raise self._missing_artist(artist_id) from e
