"""Storage fixtures — the same registry contract over both backends.

Invariants:
    - `registry` is parametrized: every test using it runs against memory AND sql
    - SQL tests use a fresh SQLite FILE under tmp_path (not :memory:, which
      aiosqlite would share across one StaticPool connection)
"""

import pytest

from sales_report.infrastructure.database import DatabaseSessionManager
from sales_report.infrastructure.storage_registry import (
    build_memory_registry,
    build_sql_registry,
)


@pytest.fixture
async def sql_manager(tmp_path):
    manager = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path / 'records.db'}")
    await manager.create_schema()
    yield manager
    await manager.dispose()


@pytest.fixture(params=["memory", "sql"])
async def registry(request, tmp_path):
    if request.param == "memory":
        yield build_memory_registry()
        return
    manager = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path / 'records.db'}")
    await manager.create_schema()
    yield build_sql_registry(manager)
    await manager.dispose()
