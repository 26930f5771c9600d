"""Customer Service — validation, category reference policy, and read-time category join.

Invariants:
    - Every customer returned carries a `category` snapshot read at call time
      (None when the referenced category no longer exists)
    - The snapshot is never written back: customer storage only knows category_id
    - STRICT policy rejects writes whose category_id does not resolve; PERMISSIVE skips the lookup

Design Decisions:
    - Join performed here, not in storage: category and customer storage stay independent,
      so deleting a category never cascades into customers
    - list/search fetch categories once per call instead of once per customer
    - STRICT is a check-then-write across two storages, not a transaction: a category
      deleted between the check and the insert leaves a dangling id, same as PERMISSIVE
"""

from __future__ import annotations

import logging

from sales_report.core.domain_types import (
    CategoryId,
    CategoryReferencePolicy,
    CustomerId,
)
from sales_report.core.errors import (
    ErrorContext,
    InvalidFieldError,
    NoFieldsToUpdateError,
    ResourceNotFoundError,
)
from sales_report.core.records import (
    Category,
    Customer,
    CustomerDraft,
    CustomerPatch,
)
from sales_report.core.repository_protocols import RecordStorage
from sales_report.core.validate_customer import (
    validate_customer_create,
    validate_customer_update,
)

logger = logging.getLogger(__name__)


class CustomerService:
    """Customer operations; reads are joined with the category storage."""

    def __init__(
        self,
        storage: RecordStorage[Customer],
        categories: RecordStorage[Category],
        policy: CategoryReferencePolicy = CategoryReferencePolicy.PERMISSIVE,
    ):
        self._storage = storage
        self._categories = categories
        self._policy = policy

    def validate_create(self, draft: CustomerDraft) -> CustomerDraft:
        return validate_customer_create(draft)

    def validate_update(self, patch: CustomerPatch) -> CustomerPatch:
        return validate_customer_update(patch)

    async def create(self, draft: CustomerDraft) -> Customer:
        # ── PURE: validate and trim ──
        clean = validate_customer_create(draft)
        # ── IMPURE: reference check, insert, join ──
        await self._check_category_reference(clean.category_id)
        customer = await self._storage.create(clean)
        logger.info(
            f"Customer created: {customer.report_customer}",
            extra={"entity": "Customer", "record_id": customer.id, "operation": "create"},
        )
        return await self._with_category(customer)

    async def get_by_id(self, customer_id: CustomerId) -> Customer:
        return await self._with_category(await self._storage.get(customer_id))

    async def list(self) -> list[Customer]:
        return await self._with_categories(await self._storage.list())

    async def update(self, customer_id: CustomerId, patch: CustomerPatch) -> Customer:
        if patch.is_empty:
            raise NoFieldsToUpdateError(ErrorContext(
                entity="Customer", record_id=customer_id, operation="update",
            ))
        clean = validate_customer_update(patch)
        if clean.category_id is not None:
            await self._check_category_reference(clean.category_id)
        customer = await self._storage.update(customer_id, clean)
        logger.info(
            f"Customer {customer_id} updated: {sorted(clean.supplied_fields())}",
            extra={"entity": "Customer", "record_id": customer_id, "operation": "update"},
        )
        return await self._with_category(customer)

    async def delete(self, customer_id: CustomerId) -> None:
        await self._storage.delete(customer_id)
        logger.info(
            f"Customer {customer_id} deleted",
            extra={"entity": "Customer", "record_id": customer_id, "operation": "delete"},
        )

    async def search(self, text: str) -> list[Customer]:
        return await self._with_categories(await self._storage.search(text))

    async def list_by_category(self, category_id: CategoryId) -> list[Customer]:
        customers = await self._storage.list_where("category_id", category_id)
        return await self._with_categories(customers)

    # ─── Helpers ─────────────────────────────────────────────────

    async def _check_category_reference(self, category_id: CategoryId) -> None:
        if self._policy is not CategoryReferencePolicy.STRICT:
            return
        try:
            await self._categories.get(category_id)
        except ResourceNotFoundError:
            raise InvalidFieldError("Category does not exist", "category_id")

    async def _with_category(self, customer: Customer) -> Customer:
        try:
            customer.category = await self._categories.get(customer.category_id)
        except ResourceNotFoundError:
            customer.category = None
        return customer

    async def _with_categories(self, customers: list[Customer]) -> list[Customer]:
        if not customers:
            return customers
        by_id = {c.id: c for c in await self._categories.list()}
        for customer in customers:
            customer.category = by_id.get(customer.category_id)
        return customers
