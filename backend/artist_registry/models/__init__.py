"""ORM Models — SQLAlchemy declarative models for all registry entities.

Invariants:
    - All models inherit from Base (db/base.py) through TimestampedEntity
    - MODELS maps each EntityKind to its model; schema provisioning reads it

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata knows every table before provisioning runs
"""

from artist_registry.core.domain_types import EntityKind
from artist_registry.models.admin import Admin
from artist_registry.models.artist import Artist
from artist_registry.models.song import Song
from artist_registry.models.user import User

MODELS = {
    EntityKind.ADMIN: Admin,
    EntityKind.USER: User,
    EntityKind.ARTIST: Artist,
    EntityKind.SONG: Song,
}

__all__ = ["Admin", "User", "Artist", "Song", "MODELS"]
