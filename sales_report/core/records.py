"""Record Types — Company, Category, Customer plus their create drafts and update patches.

Invariants:
    - id is None until Storage assigns it; immutable afterwards
    - Draft carries every required field; Patch carries only optional fields (None = not supplied)
    - created_at/updated_at are timezone-aware UTC datetimes, serialized ISO-8601 with offset
    - next_timestamp(previous) is strictly later than previous: every mutation moves updated_at

Design Decisions:
    - Plain dataclasses, not ORM rows: the same types flow through both storage backends
    - RecordLayout describes per-kind storage facts (unique + searchable fields) so the
      storage implementations stay generic over the record type
"""

from dataclasses import asdict, dataclass, fields
from datetime import datetime, timedelta, timezone
from typing import Any

from sales_report.core.domain_types import EntityKind


# Smallest increment every supported backend stores without rounding
TIMESTAMP_STEP = timedelta(microseconds=1)


def next_timestamp(previous: datetime | None = None) -> datetime:
    """Current UTC time, strictly after `previous` when one is given.

    A coarse or stepped-back clock would otherwise hand a mutation the same
    stamp as the state it replaces.
    """
    now = datetime.now(timezone.utc)
    if previous is None:
        return now
    return max(now, previous + TIMESTAMP_STEP)


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


class _Patch:
    """Mixin for update payloads — only non-None attributes were supplied."""

    def supplied_fields(self) -> dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    @property
    def is_empty(self) -> bool:
        return not self.supplied_fields()


# ─── Company ─────────────────────────────────────────────────────

@dataclass
class CompanyDraft:
    company_name: str
    gst_no: str
    state_code: str


@dataclass
class CompanyPatch(_Patch):
    company_name: str | None = None
    gst_no: str | None = None
    state_code: str | None = None


@dataclass
class Company:
    company_name: str
    gst_no: str
    state_code: str
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "company_name": self.company_name,
            "gst_no": self.gst_no,
            "state_code": self.state_code,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }


# ─── Category ────────────────────────────────────────────────────

@dataclass
class CategoryDraft:
    name: str


@dataclass
class CategoryPatch(_Patch):
    name: str | None = None


@dataclass
class Category:
    name: str
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }


# ─── Customer ────────────────────────────────────────────────────

@dataclass
class CustomerDraft:
    report_customer: str
    tally_customer: str
    category_id: int
    gst_no: str | None = None
    state_code: str | None = None


@dataclass
class CustomerPatch(_Patch):
    report_customer: str | None = None
    tally_customer: str | None = None
    gst_no: str | None = None
    state_code: str | None = None
    category_id: int | None = None


@dataclass
class Customer:
    report_customer: str
    tally_customer: str
    category_id: int
    gst_no: str | None = None
    state_code: str | None = None
    id: int | None = None
    # Read-time snapshot attached by CustomerService, never stored
    category: Category | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "report_customer": self.report_customer,
            "tally_customer": self.tally_customer,
            "gst_no": self.gst_no,
            "state_code": self.state_code,
            "category_id": self.category_id,
            "category": self.category.to_dict() if self.category else None,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }


# ─── Layouts ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class RecordLayout:
    """Storage-relevant facts about one record kind."""
    kind: EntityKind
    record_type: type
    unique_fields: tuple[str, ...] = ()
    search_fields: tuple[str, ...] = ()

    def build(self, draft: Any, record_id: int, stamp: datetime) -> Any:
        """Materialize a committed record from a validated draft."""
        return self.record_type(
            **asdict(draft), id=record_id, created_at=stamp, updated_at=stamp,
        )

    def conflict_message(self, field: str) -> str:
        label = "GST number" if field == "gst_no" else field
        return f"A {self.kind.value.lower()} with this {label} already exists"


COMPANY_LAYOUT = RecordLayout(
    kind=EntityKind.COMPANY,
    record_type=Company,
    unique_fields=("gst_no",),
    search_fields=("company_name", "gst_no", "state_code"),
)

CATEGORY_LAYOUT = RecordLayout(
    kind=EntityKind.CATEGORY,
    record_type=Category,
    search_fields=("name",),
)

CUSTOMER_LAYOUT = RecordLayout(
    kind=EntityKind.CUSTOMER,
    record_type=Customer,
    search_fields=("report_customer", "tally_customer", "gst_no", "state_code"),
)
