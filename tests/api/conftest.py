"""API test fixtures — FastAPI app over a fresh in-memory registry.

Invariants:
    - storage_registry.registry is swapped per test and restored afterwards
    - ASGITransport does not run lifespan, so storage is wired here directly
"""

import pytest
from httpx import ASGITransport, AsyncClient

import sales_report.infrastructure.storage_registry as registry_module
from sales_report.infrastructure.storage_registry import build_memory_registry
from sales_report.main import app


@pytest.fixture
async def client():
    original = registry_module.registry
    registry_module.registry = build_memory_registry()
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    registry_module.registry = original
