"""Storage Registry — builds and holds the three record storages for the process.

Invariants:
    - Exactly one storage per record kind per process: the lock inside it is the
      single mutual-exclusion point for that kind
    - Backend chosen once from Settings.storage_backend; services never know which

Design Decisions:
    - Module-level singleton initialized in lifespan, same as db_manager
    - Registry is a plain dataclass so tests can build one directly
"""

import logging
from dataclasses import dataclass

from sales_report.config import Settings
from sales_report.core.domain_types import StorageBackend
from sales_report.core.records import (
    CATEGORY_LAYOUT, COMPANY_LAYOUT, CUSTOMER_LAYOUT,
    Category, Company, Customer,
)
from sales_report.core.repository_protocols import RecordStorage
from sales_report.infrastructure.database import DatabaseSessionManager, init_db
from sales_report.infrastructure.memory_storage import InMemoryStorage
from sales_report.infrastructure.sql_storage import SqlStorage
from sales_report import models

logger = logging.getLogger(__name__)


@dataclass
class StorageRegistry:
    companies: RecordStorage[Company]
    categories: RecordStorage[Category]
    customers: RecordStorage[Customer]


def build_memory_registry() -> StorageRegistry:
    return StorageRegistry(
        companies=InMemoryStorage(COMPANY_LAYOUT),
        categories=InMemoryStorage(CATEGORY_LAYOUT),
        customers=InMemoryStorage(CUSTOMER_LAYOUT),
    )


def build_sql_registry(manager: DatabaseSessionManager) -> StorageRegistry:
    return StorageRegistry(
        companies=SqlStorage(
            COMPANY_LAYOUT, models.Company, manager.session, manager.fold,
        ),
        categories=SqlStorage(
            CATEGORY_LAYOUT, models.Category, manager.session, manager.fold,
        ),
        customers=SqlStorage(
            CUSTOMER_LAYOUT, models.Customer, manager.session, manager.fold,
        ),
    )


# Singleton (initialized on startup)
registry: StorageRegistry | None = None


async def init_storage(settings: Settings) -> StorageRegistry:
    """Create the process-wide registry for the configured backend."""
    global registry
    if settings.storage_backend is StorageBackend.MEMORY:
        registry = build_memory_registry()
    else:
        manager = init_db(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        if settings.auto_create_schema:
            await manager.create_schema()
        registry = build_sql_registry(manager)
    logger.info(f"Storage initialized ({settings.storage_backend.value})")
    return registry


def get_registry() -> StorageRegistry:
    """FastAPI dependency for the storage registry."""
    if registry is None:
        raise RuntimeError("Storage not initialized")
    return registry
