"""Admin Routes — registration and login, the only routes reachable without a token.

Invariants:
    - Duplicate email -> 409; bad email or password -> 401
    - Responses never contain the password hash
"""

from fastapi import APIRouter, Depends, status

from artist_registry.api.dependencies import get_admin_repository
from artist_registry.repositories import AdminRepository
from artist_registry.schemas.accounts import AdminRegister, LoginRequest

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register_admin(
    body: AdminRegister,
    admins: AdminRepository = Depends(get_admin_repository),
):
    """Register a new administrator."""
    admin_id = await admins.create(body.model_dump())
    return {"data": {"id": admin_id}}


@router.post("/login")
async def login_admin(
    body: LoginRequest,
    admins: AdminRepository = Depends(get_admin_repository),
):
    """Exchange admin credentials for a bearer token."""
    token = await admins.login(body.email, body.password)
    return {"data": {"token": token}}
