"""Artist Routes — token-gated CRUD over artists plus each artist's song list.

Invariants:
    - Every route requires a valid bearer token (router-level dependency)
    - DELETE removes the artist's songs in the same transaction (storage cascade)
    - GET /{id}/songs is 404 when the artist does not exist
"""

from fastapi import APIRouter, Depends, status

from artist_registry.api.dependencies import (
    get_artist_repository, page_params, require_bearer_token,
)
from artist_registry.core.domain_types import PageRequest
from artist_registry.repositories import ArtistRepository
from artist_registry.schemas.catalog import ArtistCreate, ArtistUpdate

router = APIRouter(
    prefix="/artists", tags=["artists"],
    dependencies=[Depends(require_bearer_token)],
)


@router.get("")
async def list_artists(
    page: PageRequest = Depends(page_params),
    artists: ArtistRepository = Depends(get_artist_repository),
):
    """Artists ordered by id, each with its song count."""
    result = await artists.list(page)
    return {"data": {"artists": result.items, "total": result.total}}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_artist(
    body: ArtistCreate,
    artists: ArtistRepository = Depends(get_artist_repository),
):
    artist_id = await artists.create(body.model_dump())
    return {"data": {"id": artist_id}}


@router.get("/{artist_id}")
async def get_artist(
    artist_id: int, artists: ArtistRepository = Depends(get_artist_repository),
):
    return {"data": {"artist": await artists.get(artist_id)}}


@router.patch("/{artist_id}")
async def update_artist(
    artist_id: int,
    body: ArtistUpdate,
    artists: ArtistRepository = Depends(get_artist_repository),
):
    artist = await artists.update(artist_id, body.model_dump(exclude_unset=True))
    return {"data": {"artist": artist}}


@router.delete("/{artist_id}")
async def delete_artist(
    artist_id: int, artists: ArtistRepository = Depends(get_artist_repository),
):
    await artists.delete(artist_id)
    return {"data": f"Artist with ID {artist_id} deleted successfully"}


@router.get("/{artist_id}/songs")
async def list_artist_songs(
    artist_id: int, artists: ArtistRepository = Depends(get_artist_repository),
):
    return {"data": {"songs": await artists.list_songs_for(artist_id)}}
