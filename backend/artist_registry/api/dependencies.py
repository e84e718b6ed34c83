"""Request Dependencies — repository wiring, pagination, and the bearer-token guard.

Invariants:
    - require_bearer_token runs before any protected handler; a denial never reaches a repository
    - Missing/invalid tokens -> 401, expired tokens -> 403
    - Every repository gets the process-wide DatabaseSessionManager (one session per operation)

Design Decisions:
    - Guard attached per router (dependencies=[...]) so every route in the group is covered
"""

from functools import lru_cache
from typing import Any

from fastapi import Depends, Header, Query

from artist_registry.config import get_settings
from artist_registry.core.access_guard import evaluate_authorization
from artist_registry.core.domain_types import DenialReason, PageRequest, resolve_page
from artist_registry.core.errors import (
    AuthenticationError, InvalidTokenError, RegistryError, TokenExpiredError,
)
from artist_registry.infrastructure.credentials import CredentialService
from artist_registry.infrastructure.database import (
    DatabaseSessionManager, get_db_manager,
)
from artist_registry.infrastructure.schema import SchemaProvisioner
from artist_registry.repositories import (
    AdminRepository, ArtistRepository, SongRepository, UserRepository,
)


@lru_cache
def get_credentials() -> CredentialService:
    return CredentialService.from_settings(get_settings())


def get_provisioner(
    db: DatabaseSessionManager = Depends(get_db_manager),
) -> SchemaProvisioner:
    return SchemaProvisioner(db.engine)


def get_admin_repository(
    db: DatabaseSessionManager = Depends(get_db_manager),
    provisioner: SchemaProvisioner = Depends(get_provisioner),
    credentials: CredentialService = Depends(get_credentials),
) -> AdminRepository:
    return AdminRepository(db, provisioner, credentials, credentials)


def get_user_repository(
    db: DatabaseSessionManager = Depends(get_db_manager),
    provisioner: SchemaProvisioner = Depends(get_provisioner),
    credentials: CredentialService = Depends(get_credentials),
) -> UserRepository:
    return UserRepository(db, provisioner, credentials)


def get_artist_repository(
    db: DatabaseSessionManager = Depends(get_db_manager),
    provisioner: SchemaProvisioner = Depends(get_provisioner),
) -> ArtistRepository:
    return ArtistRepository(db, provisioner)


def get_song_repository(
    db: DatabaseSessionManager = Depends(get_db_manager),
    provisioner: SchemaProvisioner = Depends(get_provisioner),
    artists: ArtistRepository = Depends(get_artist_repository),
) -> SongRepository:
    return SongRepository(db, provisioner, artists)


def page_params(
    page: str | None = Query(None),
    limit: str | None = Query(None),
) -> PageRequest:
    """page/limit as raw strings: non-numeric values fall back to defaults, not 400."""
    return resolve_page(page, limit)


def _denial_error(reason: DenialReason) -> RegistryError:
    if reason is DenialReason.EXPIRED:
        return TokenExpiredError()
    if reason is DenialReason.INVALID:
        return InvalidTokenError()
    return AuthenticationError("Missing token", "MISSING_TOKEN")


async def require_bearer_token(
    authorization: str | None = Header(None),
    credentials: CredentialService = Depends(get_credentials),
) -> dict[str, Any]:
    """Allow the request through with the token's claims, or raise the denial."""
    decision = evaluate_authorization(authorization, credentials)
    if not decision.allowed:
        raise _denial_error(decision.reason)
    return decision.claims
