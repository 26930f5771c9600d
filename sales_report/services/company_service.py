"""Company Service — validate, then persist through the company storage.

Invariants:
    - create/update validate first (PURE), then hit storage (IMPURE)
    - GST uniqueness is enforced by storage, not here: the check and the write must be atomic
    - Empty patches fail with NoFieldsToUpdateError before storage is touched
"""

from __future__ import annotations

import logging

from sales_report.core.domain_types import CompanyId
from sales_report.core.errors import ErrorContext, NoFieldsToUpdateError
from sales_report.core.records import Company, CompanyDraft, CompanyPatch
from sales_report.core.repository_protocols import RecordStorage
from sales_report.core.validate_company import (
    validate_company_create,
    validate_company_update,
)

logger = logging.getLogger(__name__)


class CompanyService:
    """Company operations exposed to the command boundary."""

    def __init__(self, storage: RecordStorage[Company]):
        self._storage = storage

    def validate_create(self, draft: CompanyDraft) -> CompanyDraft:
        return validate_company_create(draft)

    def validate_update(self, patch: CompanyPatch) -> CompanyPatch:
        return validate_company_update(patch)

    async def create(self, draft: CompanyDraft) -> Company:
        # ── PURE: validate and trim ──
        clean = validate_company_create(draft)
        # ── IMPURE: unique check + insert ──
        company = await self._storage.create(clean)
        logger.info(
            f"Company created: {company.company_name}",
            extra={"entity": "Company", "record_id": company.id, "operation": "create"},
        )
        return company

    async def get_by_id(self, company_id: CompanyId) -> Company:
        return await self._storage.get(company_id)

    async def list(self) -> list[Company]:
        return await self._storage.list()

    async def update(self, company_id: CompanyId, patch: CompanyPatch) -> Company:
        if patch.is_empty:
            raise NoFieldsToUpdateError(ErrorContext(
                entity="Company", record_id=company_id, operation="update",
            ))
        clean = validate_company_update(patch)
        company = await self._storage.update(company_id, clean)
        logger.info(
            f"Company {company_id} updated: {sorted(clean.supplied_fields())}",
            extra={"entity": "Company", "record_id": company_id, "operation": "update"},
        )
        return company

    async def delete(self, company_id: CompanyId) -> None:
        await self._storage.delete(company_id)
        logger.info(
            f"Company {company_id} deleted",
            extra={"entity": "Company", "record_id": company_id, "operation": "delete"},
        )

    async def search(self, text: str) -> list[Company]:
        return await self._storage.search(text)

    async def gst_exists(self, gst_no: str, exclude_id: int | None = None) -> bool:
        """Live duplicate check for the company form (advisory; create re-checks)."""
        return await self._storage.exists("gst_no", gst_no.strip(), exclude_id)
