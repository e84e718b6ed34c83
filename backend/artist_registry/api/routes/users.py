"""User Routes — token-gated CRUD over regular users.

Invariants:
    - Every route requires a valid bearer token (router-level dependency)
    - Password hashes never appear in responses
"""

from fastapi import APIRouter, Depends, status

from artist_registry.api.dependencies import (
    get_user_repository, page_params, require_bearer_token,
)
from artist_registry.core.domain_types import PageRequest
from artist_registry.repositories import UserRepository
from artist_registry.schemas.accounts import UserCreate, UserUpdate

router = APIRouter(
    prefix="/users", tags=["users"],
    dependencies=[Depends(require_bearer_token)],
)


@router.get("")
async def list_users(
    page: PageRequest = Depends(page_params),
    users: UserRepository = Depends(get_user_repository),
):
    result = await users.list(page)
    return {"data": {"users": result.items, "total": result.total}}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    body: UserCreate, users: UserRepository = Depends(get_user_repository),
):
    user_id = await users.create(body.model_dump())
    return {"data": {"id": user_id}}


@router.get("/{user_id}")
async def get_user(
    user_id: int, users: UserRepository = Depends(get_user_repository),
):
    return {"data": {"user": await users.get(user_id)}}


@router.patch("/{user_id}")
async def update_user(
    user_id: int,
    body: UserUpdate,
    users: UserRepository = Depends(get_user_repository),
):
    """Partial update: only supplied fields change."""
    user = await users.update(user_id, body.model_dump(exclude_unset=True))
    return {"data": {"user": user}}


@router.delete("/{user_id}")
async def delete_user(
    user_id: int, users: UserRepository = Depends(get_user_repository),
):
    await users.delete(user_id)
    return {"data": f"User with ID {user_id} deleted successfully"}
