"""SQL Storage — SQLAlchemy-backed RecordStorage, one table per record kind.

Invariants:
    - Every operation runs in its own session under one asyncio.Lock per record kind,
      so uniqueness check + insert/update + commit form a single atomic step in-process
    - The table's UNIQUE constraint is the final guard: an IntegrityError on a unique
      field becomes ConflictError, exactly like InMemoryStorage
    - Returned records are plain dataclasses built from committed rows, never ORM objects
    - Timestamps read back from SQLite (naive) are re-tagged as UTC

Design Decisions:
    - Same RecordLayout as the in-memory implementation: one contract, two backends
    - Search uses fold(column) LIKE with autoescape, where fold is supplied by the
      session manager; on SQLite it is str.casefold, so both backends match the same rows
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from contextlib import AbstractAsyncContextManager
from datetime import datetime, timezone
from typing import Any, Callable, Generic, TypeVar

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from sales_report.core.errors import (
    ConflictError,
    ErrorContext,
    NoFieldsToUpdateError,
    ResourceNotFoundError,
)
from sales_report.core.records import RecordLayout, next_timestamp
from sales_report.core.search_records import normalize_query

logger = logging.getLogger(__name__)

T = TypeVar("T")

SessionProvider = Callable[[], AbstractAsyncContextManager[AsyncSession]]


def _as_utc(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SqlStorage(Generic[T]):
    """RecordStorage backed by one SQLAlchemy table."""

    def __init__(
        self, layout: RecordLayout, model: type, session: SessionProvider,
        fold: Callable = func.lower,
    ):
        self.layout = layout
        self._model = model
        self._session = session
        self._fold = fold
        self._lock = asyncio.Lock()
        self._columns = tuple(c.key for c in model.__table__.columns)

    async def create(self, draft: Any) -> T:
        values = dataclasses.asdict(draft)
        async with self._lock, self._session() as db:
            await self._check_unique(db, values)
            stamp = next_timestamp()
            row = self._model(**values, created_at=stamp, updated_at=stamp)
            db.add(row)
            await self._commit(db, exclude_id=None)
            logger.debug(
                f"{self.layout.kind.value} {row.id} created",
                extra={"entity": self.layout.kind.value, "record_id": row.id},
            )
            return self._to_record(row)

    async def get(self, record_id: int) -> T:
        async with self._lock, self._session() as db:
            return self._to_record(await self._require(db, record_id))

    async def list(self) -> list[T]:
        async with self._lock, self._session() as db:
            result = await db.execute(self._ordered(select(self._model)))
            return [self._to_record(row) for row in result.scalars().all()]

    async def update(self, record_id: int, patch: Any) -> T:
        changes = patch.supplied_fields()
        if not changes:
            raise NoFieldsToUpdateError(ErrorContext(
                entity=self.layout.kind.value, record_id=record_id,
                operation="update",
            ))
        async with self._lock, self._session() as db:
            row = await self._require(db, record_id)
            await self._check_unique(db, changes, exclude_id=record_id)
            for name, value in changes.items():
                setattr(row, name, value)
            row.updated_at = next_timestamp(_as_utc(row.updated_at))
            await self._commit(db, exclude_id=record_id)
            return self._to_record(row)

    async def delete(self, record_id: int) -> None:
        async with self._lock, self._session() as db:
            row = await self._require(db, record_id)
            await db.delete(row)
            await db.commit()

    async def search(self, text: str) -> list[T]:
        query = normalize_query(text)
        if not query:
            return await self.list()
        conditions = [
            self._fold(getattr(self._model, name)).contains(query, autoescape=True)
            for name in self.layout.search_fields
        ]
        async with self._lock, self._session() as db:
            result = await db.execute(
                self._ordered(select(self._model).where(or_(*conditions))),
            )
            return [self._to_record(row) for row in result.scalars().all()]

    async def exists(
        self, field: str, value: Any, exclude_id: int | None = None,
    ) -> bool:
        async with self._lock, self._session() as db:
            return await self._exists(db, field, value, exclude_id)

    async def list_where(self, field: str, value: Any) -> list[T]:
        async with self._lock, self._session() as db:
            stmt = select(self._model).where(getattr(self._model, field) == value)
            result = await db.execute(self._ordered(stmt))
            return [self._to_record(row) for row in result.scalars().all()]

    # ─── Session-scoped helpers ──────────────────────────────────

    def _ordered(self, stmt):
        return stmt.order_by(self._model.created_at.desc(), self._model.id.desc())

    async def _require(self, db: AsyncSession, record_id: int):
        row = await db.get(self._model, record_id)
        if row is None:
            raise ResourceNotFoundError(self.layout.kind.value, record_id)
        return row

    async def _exists(
        self, db: AsyncSession, field: str, value: Any, exclude_id: int | None,
    ) -> bool:
        stmt = select(func.count()).select_from(self._model).where(
            getattr(self._model, field) == value,
        )
        if exclude_id is not None:
            stmt = stmt.where(self._model.id != exclude_id)
        return (await db.execute(stmt)).scalar_one() > 0

    async def _check_unique(
        self, db: AsyncSession, values: dict, exclude_id: int | None = None,
    ) -> None:
        for field in self.layout.unique_fields:
            if field in values and await self._exists(db, field, values[field], exclude_id):
                raise self._conflict(field, exclude_id)

    async def _commit(self, db: AsyncSession, exclude_id: int | None) -> None:
        try:
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            detail = str(e.orig)
            for field in self.layout.unique_fields:
                if field in detail:
                    raise self._conflict(field, exclude_id) from e
            raise

    def _conflict(self, field: str, record_id: int | None) -> ConflictError:
        return ConflictError(
            self.layout.conflict_message(field), field,
            ErrorContext(entity=self.layout.kind.value, record_id=record_id),
        )

    def _to_record(self, row) -> T:
        values = {name: getattr(row, name) for name in self._columns}
        values["created_at"] = _as_utc(values["created_at"])
        values["updated_at"] = _as_utc(values["updated_at"])
        return self.layout.record_type(**values)
