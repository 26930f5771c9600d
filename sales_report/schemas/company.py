"""Company Schemas — create/update payloads and the public company shape."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from sales_report.core.records import CompanyDraft, CompanyPatch


class CompanyCreate(BaseModel):
    company_name: str
    gst_no: str
    state_code: str

    def to_draft(self) -> CompanyDraft:
        return CompanyDraft(**self.model_dump())


class CompanyUpdate(BaseModel):
    """Partial update — omitted (or null) fields are left untouched."""
    company_name: str | None = None
    gst_no: str | None = None
    state_code: str | None = None

    def to_patch(self) -> CompanyPatch:
        return CompanyPatch(**self.model_dump())


class CompanyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    company_name: str
    gst_no: str
    state_code: str
    created_at: datetime
    updated_at: datetime


class GstExistsResponse(BaseModel):
    gst_no: str
    exists: bool
