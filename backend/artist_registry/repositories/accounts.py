"""Account Repositories — administrators and users, with hashed passwords and unique emails.

Invariants:
    - Plaintext passwords are hashed before insert or update; the password column is never returned
    - A duplicate email surfaces as DuplicateResourceError and leaves no new row
    - login() distinguishes unknown email from wrong password (both 401)
"""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from artist_registry.core.domain_types import EntityKind
from artist_registry.core.errors import (
    AuthenticationError, DuplicateResourceError, ErrorContext,
)
from artist_registry.core.repository_protocols import PasswordHasher, TokenIssuer
from artist_registry.infrastructure.database import DatabaseSessionManager
from artist_registry.infrastructure.schema import SchemaProvisioner
from artist_registry.models import Admin, User
from artist_registry.repositories.base import EntityRepository

logger = logging.getLogger(__name__)

_UNIQUE_VIOLATION = "23505"


def is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate == _UNIQUE_VIOLATION:
        return True
    return "unique" in str(orig).lower()


class AccountRepository(EntityRepository):
    """Shared behavior for tables holding credentials."""

    hidden_columns = frozenset({"password"})

    def __init__(
        self,
        db: DatabaseSessionManager,
        provisioner: SchemaProvisioner,
        hasher: PasswordHasher,
    ):
        super().__init__(db, provisioner)
        self._hasher = hasher

    async def create(self, fields: dict[str, Any]) -> int:
        values = dict(fields)
        values["password"] = await self._hasher.hash_password(values["password"])
        try:
            return await super().create(values)
        except IntegrityError as e:
            if not is_unique_violation(e):
                raise
            logger.warning(
                f"Duplicate {self.label.lower()} email rejected",
                extra={"entity": self.kind.value, "error_code": "DUPLICATE_RESOURCE"},
            )
            raise DuplicateResourceError(
                f"{self.label} with the email already exists!", "email",
                ErrorContext(entity=self.kind.value),
            ) from e

    async def update(self, entity_id: int, fields: dict[str, Any]) -> dict[str, Any]:
        values = dict(fields)
        if values.get("password") is not None:
            values["password"] = await self._hasher.hash_password(values["password"])
        return await super().update(entity_id, values)

    async def find_by_email(self, email: str) -> Any | None:
        """The full row, password hash included, for credential checks only."""
        if not await self._provisioner.exists(self.kind):
            return None
        async with self._db.session() as db:
            return await db.scalar(
                select(self.model).where(self.model.email == email),
            )


class AdminRepository(AccountRepository):
    model = Admin
    kind = EntityKind.ADMIN
    label = "Admin"

    def __init__(
        self,
        db: DatabaseSessionManager,
        provisioner: SchemaProvisioner,
        hasher: PasswordHasher,
        issuer: TokenIssuer,
    ):
        super().__init__(db, provisioner, hasher)
        self._issuer = issuer

    async def login(self, email: str, password: str) -> str:
        """Check credentials and return a signed bearer token for the admin."""
        admin = await self.find_by_email(email)
        if admin is None:
            raise AuthenticationError("Invalid email!", "INVALID_EMAIL")
        if not await self._hasher.verify_password(password, admin.password):
            raise AuthenticationError("Incorrect password!", "INCORRECT_PASSWORD")
        logger.info(
            f"Admin {admin.id} logged in",
            extra={"entity": self.kind.value, "entity_id": admin.id},
        )
        return self._issuer.issue_token({"email": admin.email})


class UserRepository(AccountRepository):
    model = User
    kind = EntityKind.USER
    label = "User"
