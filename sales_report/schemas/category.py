"""Category Schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from sales_report.core.records import CategoryDraft, CategoryPatch


class CategoryCreate(BaseModel):
    name: str

    def to_draft(self) -> CategoryDraft:
        return CategoryDraft(name=self.name)


class CategoryUpdate(BaseModel):
    name: str | None = None

    def to_patch(self) -> CategoryPatch:
        return CategoryPatch(name=self.name)


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    created_at: datetime
    updated_at: datetime
