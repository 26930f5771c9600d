"""Command Dispatch — explicit routing from command name to entity service call.

Invariants:
    - Every command->handler mapping is visible — no getattr magic, no auto-discovery
    - Unknown commands return UNKNOWN_COMMAND (never raises)
    - Malformed payloads return INVALID_PAYLOAD; domain failures return the error's
      command result — the boundary never raises for bad input
    - Results are JSON-like dicts: {"status": "ok", ...} or {"status": "error", ...}

Payload conventions:
    - create_* / validate_*_create:  the record fields
    - update_*:                      {"id": int, "changes": {fields}}
    - validate_*_update:             the changed fields only
    - get_* / delete_*:              {"id": int}
    - search_*:                      {"query": str}
    - check_gst_exists:              {"gst_no": str, "exclude_id": int | None}
    - list_customers_by_category:    {"category_id": int}

Design Decisions:
    - Explicit dict over getattr: adding a command requires editing this dict
    - One EntityCommands adapter per record kind: the eight CRUD/validate handlers are
      identical in shape, only schemas and result keys differ
    - StorageUnavailableError carries a generic message; the detail is logged, not returned
"""

import logging
from dataclasses import asdict
from typing import Any, Awaitable, Callable

from pydantic import BaseModel, ValidationError

from sales_report.core.errors import SalesReportError
from sales_report.infrastructure.observability import error_log_extra, log_level_for
from sales_report.schemas.category import CategoryCreate, CategoryUpdate
from sales_report.schemas.company import CompanyCreate, CompanyUpdate
from sales_report.schemas.customer import CustomerCreate, CustomerUpdate
from sales_report.services.record_services import RecordServices

logger = logging.getLogger(__name__)

Handler = Callable[[dict], Awaitable[dict]]


class _RecordRef(BaseModel):
    id: int


class _UpdateRequest(BaseModel):
    id: int
    changes: dict[str, Any]


class _SearchRequest(BaseModel):
    query: str = ""


class _GstExistsRequest(BaseModel):
    gst_no: str
    exclude_id: int | None = None


class _CategoryRef(BaseModel):
    category_id: int


class EntityCommands:
    """CRUD + validate handlers for one entity service."""

    def __init__(
        self, service: Any, create_schema: type, update_schema: type,
        one: str, many: str,
    ):
        self._service = service
        self._create_schema = create_schema
        self._update_schema = update_schema
        self._one = one
        self._many = many

    async def create(self, payload: dict) -> dict:
        draft = self._create_schema.model_validate(payload).to_draft()
        record = await self._service.create(draft)
        return {"status": "ok", self._one: record.to_dict()}

    async def get_by_id(self, payload: dict) -> dict:
        ref = _RecordRef.model_validate(payload)
        record = await self._service.get_by_id(ref.id)
        return {"status": "ok", self._one: record.to_dict()}

    async def list(self, payload: dict) -> dict:
        records = await self._service.list()
        return {"status": "ok", self._many: [r.to_dict() for r in records]}

    async def update(self, payload: dict) -> dict:
        request = _UpdateRequest.model_validate(payload)
        patch = self._update_schema.model_validate(request.changes).to_patch()
        record = await self._service.update(request.id, patch)
        return {"status": "ok", self._one: record.to_dict()}

    async def delete(self, payload: dict) -> dict:
        ref = _RecordRef.model_validate(payload)
        await self._service.delete(ref.id)
        return {"status": "ok", "deleted": ref.id}

    async def search(self, payload: dict) -> dict:
        request = _SearchRequest.model_validate(payload)
        records = await self._service.search(request.query)
        return {"status": "ok", self._many: [r.to_dict() for r in records]}

    async def validate_create(self, payload: dict) -> dict:
        draft = self._create_schema.model_validate(payload).to_draft()
        clean = self._service.validate_create(draft)
        return {"status": "ok", "valid": True, self._one: asdict(clean)}

    async def validate_update(self, payload: dict) -> dict:
        patch = self._update_schema.model_validate(payload).to_patch()
        clean = self._service.validate_update(patch)
        return {"status": "ok", "valid": True, self._one: clean.supplied_fields()}


class CommandDispatch:
    """Routes command name -> handler. Explicit registration, no auto-discovery."""

    def __init__(self, services: RecordServices):
        self._services = services
        company = EntityCommands(
            services.companies, CompanyCreate, CompanyUpdate, "company", "companies",
        )
        category = EntityCommands(
            services.categories, CategoryCreate, CategoryUpdate, "category", "categories",
        )
        customer = EntityCommands(
            services.customers, CustomerCreate, CustomerUpdate, "customer", "customers",
        )

        self._handlers: dict[str, Handler] = {
            # Company (9 commands)
            "create_company": company.create,
            "get_company": company.get_by_id,
            "list_companies": company.list,
            "update_company": company.update,
            "delete_company": company.delete,
            "search_companies": company.search,
            "validate_company_create": company.validate_create,
            "validate_company_update": company.validate_update,
            "check_gst_exists": self._check_gst_exists,

            # Category (8 commands)
            "create_category": category.create,
            "get_category": category.get_by_id,
            "list_categories": category.list,
            "update_category": category.update,
            "delete_category": category.delete,
            "search_categories": category.search,
            "validate_category_create": category.validate_create,
            "validate_category_update": category.validate_update,

            # Customer (9 commands)
            "create_customer": customer.create,
            "get_customer": customer.get_by_id,
            "list_customers": customer.list,
            "update_customer": customer.update,
            "delete_customer": customer.delete,
            "search_customers": customer.search,
            "validate_customer_create": customer.validate_create,
            "validate_customer_update": customer.validate_update,
            "list_customers_by_category": self._list_customers_by_category,
        }

    @property
    def commands(self) -> list[str]:
        return sorted(self._handlers)

    async def execute(self, command: str, payload: dict | None = None) -> dict:
        """Route command to handler. Returns result dict, never raises for bad input."""
        handler = self._handlers.get(command)
        if not handler:
            logger.warning(f"Unknown command '{command}'", extra={"command": command})
            return {
                "status": "error",
                "error_code": "UNKNOWN_COMMAND",
                "message": f"Command '{command}' does not exist.",
            }
        try:
            return await handler(payload or {})
        except ValidationError as e:
            logger.warning(
                f"Malformed payload for '{command}': {e.errors()}",
                extra={"command": command, "error_code": "INVALID_PAYLOAD"},
            )
            return {
                "status": "error",
                "error_code": "INVALID_PAYLOAD",
                "message": _describe_validation_error(e),
            }
        except SalesReportError as e:
            logger.log(
                log_level_for(e),
                f"Command '{command}' failed: {e.message}",
                extra=error_log_extra(e, command=command),
            )
            return e.to_command_result()

    async def _check_gst_exists(self, payload: dict) -> dict:
        request = _GstExistsRequest.model_validate(payload)
        exists = await self._services.companies.gst_exists(
            request.gst_no, request.exclude_id,
        )
        return {"status": "ok", "exists": exists}

    async def _list_customers_by_category(self, payload: dict) -> dict:
        ref = _CategoryRef.model_validate(payload)
        customers = await self._services.customers.list_by_category(ref.category_id)
        return {"status": "ok", "customers": [c.to_dict() for c in customers]}


def _describe_validation_error(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "payload"
    return f"Invalid payload: {location}: {first['msg']}"
