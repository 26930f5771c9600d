"""Category Service — validate, then persist through the category storage."""

from __future__ import annotations

import logging

from sales_report.core.domain_types import CategoryId
from sales_report.core.errors import ErrorContext, NoFieldsToUpdateError
from sales_report.core.records import Category, CategoryDraft, CategoryPatch
from sales_report.core.repository_protocols import RecordStorage
from sales_report.core.validate_category import (
    validate_category_create,
    validate_category_update,
)

logger = logging.getLogger(__name__)


class CategoryService:
    def __init__(self, storage: RecordStorage[Category]):
        self._storage = storage

    def validate_create(self, draft: CategoryDraft) -> CategoryDraft:
        return validate_category_create(draft)

    def validate_update(self, patch: CategoryPatch) -> CategoryPatch:
        return validate_category_update(patch)

    async def create(self, draft: CategoryDraft) -> Category:
        category = await self._storage.create(validate_category_create(draft))
        logger.info(
            f"Category created: {category.name}",
            extra={"entity": "Category", "record_id": category.id, "operation": "create"},
        )
        return category

    async def get_by_id(self, category_id: CategoryId) -> Category:
        return await self._storage.get(category_id)

    async def list(self) -> list[Category]:
        return await self._storage.list()

    async def update(self, category_id: CategoryId, patch: CategoryPatch) -> Category:
        if patch.is_empty:
            raise NoFieldsToUpdateError(ErrorContext(
                entity="Category", record_id=category_id, operation="update",
            ))
        category = await self._storage.update(
            category_id, validate_category_update(patch),
        )
        logger.info(
            f"Category {category_id} updated",
            extra={"entity": "Category", "record_id": category_id, "operation": "update"},
        )
        return category

    async def delete(self, category_id: CategoryId) -> None:
        # No cascade: customers keep their category_id and read back category=None
        await self._storage.delete(category_id)
        logger.info(
            f"Category {category_id} deleted",
            extra={"entity": "Category", "record_id": category_id, "operation": "delete"},
        )

    async def search(self, text: str) -> list[Category]:
        return await self._storage.search(text)
