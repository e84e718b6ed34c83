"""Schema Provisioner — idempotent "create if absent" DDL for each entity kind.

Invariants:
    - ensure(kind) creates the entity's table and the enum types it uses only when absent
    - ensure(SONG) ensures the artists table first (songs.artist_id references it)
    - A lost duplicate-creation race is retried check-first, so the loser's own
      tables still exist when ensure() returns
    - Backend unreachable -> DatabaseError; no internal retry

Design Decisions:
    - metadata.create_all(tables=[...], checkfirst=True): SQLAlchemy emits CREATE TYPE for the
      named enums and CREATE TABLE only for what the catalog lacks
    - No application-level "already provisioned" flags: the storage catalog is the source of truth
"""

import logging

from sqlalchemy import inspect
from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine

from artist_registry.core.domain_types import EntityKind
from artist_registry.core.errors import DatabaseError, ErrorContext
from artist_registry.db.base import Base
from artist_registry.models import MODELS

logger = logging.getLogger(__name__)

_DEPENDS_ON: dict[EntityKind, tuple[EntityKind, ...]] = {
    EntityKind.SONG: (EntityKind.ARTIST,),
}

# duplicate_table, duplicate_object, unique_violation (pg_type race)
_DUPLICATE_SQLSTATES = frozenset({"42P07", "42710", "23505"})

_RACE_ATTEMPTS = 3


def is_duplicate_object_error(exc: DBAPIError) -> bool:
    """True when a CREATE lost a race against an identical concurrent CREATE."""
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate in _DUPLICATE_SQLSTATES:
        return True
    return "already exists" in str(orig).lower()


class SchemaProvisioner:
    """Creates entity tables on demand against one engine."""

    def __init__(self, engine: AsyncEngine):
        self._engine = engine

    def _tables_for(self, kind: EntityKind) -> list:
        kinds = [*_DEPENDS_ON.get(kind, ()), kind]
        return [MODELS[k].__table__ for k in kinds]

    async def _create_missing(self, tables: list) -> None:
        async with self._engine.begin() as conn:
            await conn.run_sync(
                Base.metadata.create_all, tables=tables, checkfirst=True,
            )

    async def ensure(self, kind: EntityKind) -> None:
        """Create the entity's table (and enum types) if absent."""
        tables = self._tables_for(kind)
        for attempt in range(1, _RACE_ATTEMPTS + 1):
            try:
                await self._create_missing(tables)
                return
            except DBAPIError as e:
                if is_duplicate_object_error(e) and attempt < _RACE_ATTEMPTS:
                    # The losing CREATE aborted the whole batch; re-check what is still missing
                    logger.info(
                        f"Concurrent provisioning of {kind.value} detected, re-checking",
                        extra={"entity": kind.value},
                    )
                    continue
                if not isinstance(e, OperationalError):
                    raise
                logger.error(
                    f"Schema provisioning for {kind.value} failed: {e}",
                    extra={"entity": kind.value},
                )
                raise DatabaseError(
                    "Connection or operational error", "provision",
                    ErrorContext(entity=kind.value),
                ) from e

    async def exists(self, kind: EntityKind) -> bool:
        """Whether the entity's table has been provisioned."""
        try:
            async with self._engine.connect() as conn:
                return await conn.run_sync(
                    lambda sync_conn: inspect(sync_conn).has_table(kind.value),
                )
        except OperationalError as e:
            logger.error(f"Schema lookup for {kind.value} failed: {e}")
            raise DatabaseError(
                "Connection or operational error", "inspect",
                ErrorContext(entity=kind.value),
            ) from e
