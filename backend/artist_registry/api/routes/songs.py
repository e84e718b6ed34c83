"""Song Routes — token-gated CRUD over songs.

Invariants:
    - Every route requires a valid bearer token (router-level dependency)
    - POST with an artist_id that does not exist -> 400, nothing inserted
"""

from fastapi import APIRouter, Depends, status

from artist_registry.api.dependencies import (
    get_song_repository, page_params, require_bearer_token,
)
from artist_registry.core.domain_types import PageRequest
from artist_registry.repositories import SongRepository
from artist_registry.schemas.catalog import SongCreate, SongUpdate

router = APIRouter(
    prefix="/songs", tags=["songs"],
    dependencies=[Depends(require_bearer_token)],
)


@router.get("")
async def list_songs(
    page: PageRequest = Depends(page_params),
    songs: SongRepository = Depends(get_song_repository),
):
    result = await songs.list(page)
    return {"data": {"songs": result.items, "total": result.total}}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_song(
    body: SongCreate, songs: SongRepository = Depends(get_song_repository),
):
    song_id = await songs.create(body.model_dump())
    return {"data": {"id": song_id}}


@router.get("/{song_id}")
async def get_song(
    song_id: int, songs: SongRepository = Depends(get_song_repository),
):
    return {"data": {"song": await songs.get(song_id)}}


@router.patch("/{song_id}")
async def update_song(
    song_id: int,
    body: SongUpdate,
    songs: SongRepository = Depends(get_song_repository),
):
    song = await songs.update(song_id, body.model_dump(exclude_unset=True))
    return {"data": {"song": song}}


@router.delete("/{song_id}")
async def delete_song(
    song_id: int, songs: SongRepository = Depends(get_song_repository),
):
    await songs.delete(song_id)
    return {"data": f"Song with ID {song_id} deleted successfully"}
