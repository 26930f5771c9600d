"""Boundary Protocols — the Storage contract between services and persistence.

Invariants:
    - Services NEVER import a concrete storage — only this Protocol
    - Identity assignment and uniqueness checks are one atomic step inside create/update
    - Every returned record is a copy: callers never hold a reference into storage state
    - Failures are typed: ConflictError, ResourceNotFoundError, NoFieldsToUpdateError,
      StorageUnavailableError (core/errors.py)

Design Decisions:
    - Protocol over ABC: structural subtyping, in-memory and SQL storages share no base class
    - Async in Protocol: the SQL implementation does IO; the in-memory one simply never awaits
"""

from __future__ import annotations

from typing import Any, Protocol, TypeVar

from sales_report.core.records import RecordLayout

T = TypeVar("T")


class RecordStorage(Protocol[T]):
    """Keyed store for one record kind — implemented by infrastructure/."""

    layout: RecordLayout

    async def create(self, draft: Any) -> T: ...
    async def get(self, record_id: int) -> T: ...
    async def list(self) -> list[T]: ...
    async def update(self, record_id: int, patch: Any) -> T: ...
    async def delete(self, record_id: int) -> None: ...
    async def search(self, text: str) -> list[T]: ...
    async def exists(
        self, field: str, value: Any, exclude_id: int | None = None,
    ) -> bool: ...
    async def list_where(self, field: str, value: Any) -> list[T]: ...
