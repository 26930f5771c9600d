"""Customer Schemas — category_id is required on create, category is a read-only snapshot."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from sales_report.core.records import CustomerDraft, CustomerPatch
from sales_report.schemas.category import CategoryResponse


class CustomerCreate(BaseModel):
    report_customer: str
    tally_customer: str
    category_id: int
    gst_no: str | None = None
    state_code: str | None = None

    def to_draft(self) -> CustomerDraft:
        return CustomerDraft(**self.model_dump())


class CustomerUpdate(BaseModel):
    report_customer: str | None = None
    tally_customer: str | None = None
    gst_no: str | None = None
    state_code: str | None = None
    category_id: int | None = None

    def to_patch(self) -> CustomerPatch:
        return CustomerPatch(**self.model_dump())


class CustomerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    report_customer: str
    tally_customer: str
    gst_no: str | None = None
    state_code: str | None = None
    category_id: int
    category: CategoryResponse | None = None
    created_at: datetime
    updated_at: datetime
