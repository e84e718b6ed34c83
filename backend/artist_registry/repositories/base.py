"""Entity Repository — shared CRUD, pagination, and partial-update semantics.

Invariants:
    - Every mutation runs inside one DatabaseSessionManager.transaction()
    - Write paths call SchemaProvisioner.ensure() before touching the table
    - Read paths on an unprovisioned table return empty / not-found, never an error
    - Lists are ordered by id ascending
    - update() merges only supplied, non-null fields; it never creates a row
    - Columns named in hidden_columns never leave the repository

Design Decisions:
    - One base class parameterized by model/kind; subclasses add entity rules only
    - delete() is a single DELETE statement so storage-level cascades run in the same transaction
"""

import logging
from typing import Any, ClassVar

from sqlalchemy import delete, func, select

from artist_registry.core.domain_types import EntityKind, Page, PageRequest
from artist_registry.core.errors import ErrorContext, ResourceNotFoundError
from artist_registry.db.base import TimestampedEntity, utcnow
from artist_registry.infrastructure.database import DatabaseSessionManager
from artist_registry.infrastructure.schema import SchemaProvisioner

logger = logging.getLogger(__name__)

_READ_ONLY_COLUMNS = frozenset({"id", "created_at", "updated_at"})


class EntityRepository:
    """CRUD over one entity table."""

    model: ClassVar[type[TimestampedEntity]]
    kind: ClassVar[EntityKind]
    label: ClassVar[str]
    hidden_columns: ClassVar[frozenset[str]] = frozenset()

    def __init__(self, db: DatabaseSessionManager, provisioner: SchemaProvisioner):
        self._db = db
        self._provisioner = provisioner

    # ─── Row shaping ────────────────────────────────────────────

    def _public_columns(self) -> list[str]:
        return [
            c.key for c in self.model.__table__.columns
            if c.key not in self.hidden_columns
        ]

    def to_public(self, row: TimestampedEntity) -> dict[str, Any]:
        return {key: getattr(row, key) for key in self._public_columns()}

    def _writable(self, fields: dict[str, Any]) -> dict[str, Any]:
        columns = {c.key for c in self.model.__table__.columns}
        unknown = set(fields) - columns
        if unknown:
            raise ValueError(
                f"Unknown {self.label} fields: {', '.join(sorted(unknown))}",
            )
        return {
            k: v for k, v in fields.items()
            if k not in _READ_ONLY_COLUMNS and v is not None
        }

    def _not_found(self, entity_id: int) -> ResourceNotFoundError:
        return ResourceNotFoundError(
            self.label, entity_id,
            ErrorContext(entity=self.kind.value, entity_id=entity_id),
        )

    # ─── Operations ─────────────────────────────────────────────

    async def list(self, request: PageRequest | None = None) -> Page:
        """One page of rows ordered by id plus the table's total row count."""
        request = request or PageRequest()
        if not await self._provisioner.exists(self.kind):
            return Page()
        async with self._db.session() as db:
            statement = await self._list_statement()
            rows = await db.execute(
                statement.limit(request.limit).offset(request.offset),
            )
            total = await db.scalar(
                select(func.count(self.model.id)),
            )
            return Page(
                items=[self._list_item(row) for row in rows.all()],
                total=int(total or 0),
            )

    async def _list_statement(self):
        return select(self.model).order_by(self.model.id)

    def _list_item(self, row) -> dict[str, Any]:
        return self.to_public(row[0])

    async def create(self, fields: dict[str, Any]) -> int:
        """Provision the table and insert one row; returns its id."""
        values = self._writable(fields)
        await self._provisioner.ensure(self.kind)
        async with self._db.transaction() as db:
            row = self.model(**values)
            db.add(row)
            await db.flush()
            new_id = row.id
        logger.info(
            f"{self.label} {new_id} created",
            extra={"entity": self.kind.value, "entity_id": new_id},
        )
        return new_id

    async def get(self, entity_id: int) -> dict[str, Any]:
        if not await self._provisioner.exists(self.kind):
            raise self._not_found(entity_id)
        async with self._db.session() as db:
            row = await db.get(self.model, entity_id)
            if row is None:
                raise self._not_found(entity_id)
            return self.to_public(row)

    async def update(self, entity_id: int, fields: dict[str, Any]) -> dict[str, Any]:
        """Merge supplied fields over the stored row and bump updated_at."""
        values = self._writable(fields)
        await self._provisioner.ensure(self.kind)
        async with self._db.transaction() as db:
            row = await db.get(self.model, entity_id)
            if row is None:
                raise self._not_found(entity_id)
            for key, value in values.items():
                setattr(row, key, value)
            row.updated_at = utcnow()
            await db.flush()
            updated = self.to_public(row)
        return updated

    async def delete(self, entity_id: int) -> None:
        await self._provisioner.ensure(self.kind)
        async with self._db.transaction() as db:
            result = await db.execute(
                delete(self.model).where(self.model.id == entity_id),
            )
            if result.rowcount == 0:
                raise self._not_found(entity_id)
        logger.info(
            f"{self.label} {entity_id} deleted",
            extra={"entity": self.kind.value, "entity_id": entity_id},
        )

    async def exists(self, entity_id: int) -> bool:
        if not await self._provisioner.exists(self.kind):
            return False
        async with self._db.session() as db:
            found = await db.scalar(
                select(self.model.id).where(self.model.id == entity_id),
            )
            return found is not None
