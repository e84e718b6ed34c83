"""Entity Repositories — one per persisted entity kind, built on EntityRepository."""

from artist_registry.repositories.accounts import AdminRepository, UserRepository
from artist_registry.repositories.catalog import ArtistRepository, SongRepository

__all__ = ["AdminRepository", "UserRepository", "ArtistRepository", "SongRepository"]
