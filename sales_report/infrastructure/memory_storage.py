"""In-Memory Storage — dict-backed RecordStorage guarded by one lock per record kind.

Invariants:
    - One threading.Lock guards the whole record set; every read and write holds it
    - Uniqueness check and identity assignment happen under the same lock acquisition
    - Identities come from a monotonically increasing counter, never reused after delete
    - Records are copied on the way in and out: no caller shares an object with _records
    - No await inside a locked section, so the lock is never held across a suspension

Design Decisions:
    - threading.Lock over asyncio.Lock: callers may be tasks on one loop or plain threads
      driving their own loops; critical sections are short and never block on IO
"""

from __future__ import annotations

import dataclasses
import logging
import threading
from typing import Any, Generic, TypeVar

from sales_report.core.errors import (
    ConflictError,
    ErrorContext,
    NoFieldsToUpdateError,
    ResourceNotFoundError,
)
from sales_report.core.records import RecordLayout, next_timestamp
from sales_report.core.search_records import matches_query, newest_first, normalize_query

logger = logging.getLogger(__name__)

T = TypeVar("T")


class InMemoryStorage(Generic[T]):
    """RecordStorage backed by a process-local dict."""

    def __init__(self, layout: RecordLayout):
        self.layout = layout
        self._records: dict[int, T] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    async def create(self, draft: Any) -> T:
        with self._lock:
            self._check_unique(dataclasses.asdict(draft))
            record_id = self._next_id
            self._next_id += 1
            record = self.layout.build(draft, record_id, next_timestamp())
            self._records[record_id] = record
            logger.debug(
                f"{self.layout.kind.value} {record_id} created",
                extra={"entity": self.layout.kind.value, "record_id": record_id},
            )
            return dataclasses.replace(record)

    async def get(self, record_id: int) -> T:
        with self._lock:
            return dataclasses.replace(self._require(record_id))

    async def list(self) -> list[T]:
        with self._lock:
            snapshot = [dataclasses.replace(r) for r in self._records.values()]
        return newest_first(snapshot)

    async def update(self, record_id: int, patch: Any) -> T:
        changes = patch.supplied_fields()
        if not changes:
            raise NoFieldsToUpdateError(ErrorContext(
                entity=self.layout.kind.value, record_id=record_id,
                operation="update",
            ))
        with self._lock:
            current = self._require(record_id)
            self._check_unique(changes, exclude_id=record_id)
            updated = dataclasses.replace(
                current, **changes,
                updated_at=next_timestamp(current.updated_at),
            )
            self._records[record_id] = updated
            return dataclasses.replace(updated)

    async def delete(self, record_id: int) -> None:
        with self._lock:
            self._require(record_id)
            del self._records[record_id]

    async def search(self, text: str) -> list[T]:
        query = normalize_query(text)
        if not query:
            return await self.list()
        with self._lock:
            hits = [
                dataclasses.replace(r) for r in self._records.values()
                if matches_query(r, self.layout.search_fields, query)
            ]
        return newest_first(hits)

    async def exists(
        self, field: str, value: Any, exclude_id: int | None = None,
    ) -> bool:
        with self._lock:
            return self._find(field, value, exclude_id) is not None

    async def list_where(self, field: str, value: Any) -> list[T]:
        with self._lock:
            hits = [
                dataclasses.replace(r) for r in self._records.values()
                if getattr(r, field) == value
            ]
        return newest_first(hits)

    # ─── Lock-held helpers ───────────────────────────────────────

    def _require(self, record_id: int) -> T:
        record = self._records.get(record_id)
        if record is None:
            raise ResourceNotFoundError(self.layout.kind.value, record_id)
        return record

    def _find(self, field: str, value: Any, exclude_id: int | None) -> T | None:
        for record_id, record in self._records.items():
            if record_id != exclude_id and getattr(record, field) == value:
                return record
        return None

    def _check_unique(self, values: dict, exclude_id: int | None = None) -> None:
        for field in self.layout.unique_fields:
            if field in values and self._find(field, values[field], exclude_id) is not None:
                raise ConflictError(
                    self.layout.conflict_message(field), field,
                    ErrorContext(entity=self.layout.kind.value, record_id=exclude_id),
                )

