"""Catalog Schemas — artist and song request bodies.

Invariants:
    - first_release_year: integer in [1000, current year]
    - genre is one of GENRES; gender is one of GENDERS
    - Unknown fields are rejected; a song's artist cannot be changed after creation
"""

from datetime import date, datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator

from artist_registry.core.domain_types import Gender, Genre


MIN_RELEASE_YEAR = 1000


def _check_release_year(v: int | None) -> int | None:
    if v is None:
        return v
    if v < MIN_RELEASE_YEAR:
        raise ValueError("Release year must be a valid year")
    if v > datetime.now(timezone.utc).year:
        raise ValueError("Release year must be less than or equal to the current year")
    return v


class ArtistCreate(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=255)
    dob: date
    gender: Gender
    address: str = Field(min_length=1, max_length=255)
    first_release_year: int
    no_of_albums_released: int = Field(ge=0)

    @field_validator("first_release_year")
    @classmethod
    def check_release_year(cls, v: int) -> int:
        return _check_release_year(v)


class ArtistUpdate(BaseModel):
    """Partial artist update — every field optional."""
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    name: str | None = Field(None, min_length=1, max_length=255)
    dob: date | None = None
    gender: Gender | None = None
    address: str | None = Field(None, min_length=1, max_length=255)
    first_release_year: int | None = None
    no_of_albums_released: int | None = Field(None, ge=0)

    @field_validator("first_release_year")
    @classmethod
    def check_release_year(cls, v: int | None) -> int | None:
        return _check_release_year(v)


class SongCreate(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    artist_id: int
    title: str = Field(min_length=1, max_length=255)
    album_name: str = Field(min_length=1, max_length=255)
    genre: Genre


class SongUpdate(BaseModel):
    """Partial song update — title, album and genre only."""
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    title: str | None = Field(None, min_length=1, max_length=255)
    album_name: str | None = Field(None, min_length=1, max_length=255)
    genre: Genre | None = None
