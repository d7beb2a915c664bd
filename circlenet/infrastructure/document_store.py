"""Document Store: generic, collection-scoped storage for one record type.

Invariants:
    - One DocumentStore per model; the model's table is the named collection
    - The store assigns id, created_at, updated_at and version; callers never do
    - Filters are field-equality conjunctions; unknown fields raise ValueError
    - "First match" means oldest by created_at (ties broken by id)
    - Each operation runs in its own short session and commits before returning
    - No uniqueness checks: those belong to the concept using the store

Design Decisions:
    - SQLAlchemy Core update/delete statements keyed by id: one round trip per
      mutation and a real rowcount to report "not found" or "lost the race"
    - expected_version on partial_update_one gives concepts an optimistic
      compare-and-set for read-modify-write fields (group members)
    - pop_one reads and deletes inside one transaction; only the caller whose
      DELETE hit a row gets the record back
"""

import logging
import uuid
from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, delete, func, select, update

from circlenet.db.base import Document, utcnow
from circlenet.infrastructure.database import DatabaseSessionManager

logger = logging.getLogger(__name__)

DocT = TypeVar("DocT", bound=Document)

Query = Mapping[str, Any]

# Assigned and maintained by the store only
MANAGED_FIELDS = frozenset({"id", "created_at", "updated_at", "version"})


class DocumentStore(Generic[DocT]):
    """Typed record store over a single SQLAlchemy model."""

    def __init__(self, model: type[DocT], db: DatabaseSessionManager):
        self.model = model
        self._db = db

    @property
    def collection(self) -> str:
        return self.model.__tablename__

    async def create_one(self, fields: Mapping[str, Any]) -> uuid.UUID:
        """Persist a new record and return its identifier."""
        return (await self.insert_one(fields)).id

    async def insert_one(self, fields: Mapping[str, Any]) -> DocT:
        """Persist a new record and return it, detached from its session."""
        self._check_fields(fields)
        now = utcnow()
        doc = self.model(
            id=uuid.uuid4(), created_at=now, updated_at=now, version=1,
            **fields,
        )
        async with self._db.session() as db:
            db.add(doc)
            await db.commit()
        logger.debug(
            "Record created", extra={"collection": self.collection},
        )
        return doc

    async def read_one(self, query: Query) -> DocT | None:
        """Return the first record matching every field in query, or None."""
        async with self._db.session() as db:
            result = await db.execute(self._select(query).limit(1))
            return result.scalar_one_or_none()

    async def read_many(self, query: Query | None = None) -> list[DocT]:
        """Return every matching record in insertion order."""
        async with self._db.session() as db:
            result = await db.execute(self._select(query or {}))
            return list(result.scalars().all())

    async def count(self, query: Query | None = None) -> int:
        stmt = select(func.count()).select_from(self.model)
        clauses = self._where(query or {})
        if clauses:
            stmt = stmt.where(*clauses)
        async with self._db.session() as db:
            result = await db.execute(stmt)
            return int(result.scalar_one())

    async def partial_update_one(
        self,
        query: Query,
        patch: Mapping[str, Any],
        *,
        expected_version: int | None = None,
    ) -> bool:
        """Apply patch to the first match. False if nothing matched.

        With expected_version, the update only lands if the stored version
        still equals it (compare-and-set); a concurrent writer makes it False.
        """
        self._check_fields(patch)
        async with self._db.session() as db:
            doc_id = await self._first_id(db, query)
            if doc_id is None:
                return False
            stmt = update(self.model).where(self.model.id == doc_id)
            if expected_version is not None:
                stmt = stmt.where(self.model.version == expected_version)
            stmt = stmt.values(
                **patch,
                updated_at=utcnow(),
                version=self.model.version + 1,
            ).execution_options(synchronize_session=False)
            result = await db.execute(stmt)
            await db.commit()
            return result.rowcount == 1

    async def delete_one(self, query: Query) -> bool:
        """Remove the first match. False (no error) if none exists."""
        async with self._db.session() as db:
            doc_id = await self._first_id(db, query)
            if doc_id is None:
                return False
            result = await db.execute(
                delete(self.model)
                .where(self.model.id == doc_id)
                .execution_options(synchronize_session=False),
            )
            await db.commit()
            return result.rowcount == 1

    async def pop_one(self, query: Query) -> DocT | None:
        """Read and delete the first match in one transaction."""
        async with self._db.session() as db:
            result = await db.execute(self._select(query).limit(1))
            doc = result.scalar_one_or_none()
            if doc is None:
                return None
            removed = await db.execute(
                delete(self.model)
                .where(self.model.id == doc.id)
                .execution_options(synchronize_session=False),
            )
            await db.commit()
            if removed.rowcount != 1:
                return None
            return doc

    # ─── Query building ──────────────────────────────────────────

    def _where(self, query: Query) -> list:
        columns = self.model.__table__.c
        clauses = []
        for name, value in query.items():
            if name not in columns:
                raise ValueError(
                    f"Unknown field '{name}' for collection '{self.collection}'",
                )
            clauses.append(columns[name] == value)
        return clauses

    def _select(self, query: Query) -> Select:
        stmt = select(self.model)
        clauses = self._where(query)
        if clauses:
            stmt = stmt.where(*clauses)
        return stmt.order_by(self.model.created_at, self.model.id)

    async def _first_id(self, db, query: Query) -> uuid.UUID | None:
        stmt = select(self.model.id)
        clauses = self._where(query)
        if clauses:
            stmt = stmt.where(*clauses)
        stmt = stmt.order_by(self.model.created_at, self.model.id).limit(1)
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    def _check_fields(self, fields: Mapping[str, Any]) -> None:
        columns = self.model.__table__.c
        for name in fields:
            if name not in columns:
                raise ValueError(
                    f"Unknown field '{name}' for collection '{self.collection}'",
                )
            if name in MANAGED_FIELDS:
                raise ValueError(f"Field '{name}' is managed by the store")
