"""Category Validation — name is required and at most 100 characters."""

from sales_report.core.records import CategoryDraft, CategoryPatch
from sales_report.core.validate_fields import check_required_name, trim_or_none

CATEGORY_NAME_MAX_LENGTH: int = 100


def validate_category_create(draft: CategoryDraft) -> CategoryDraft:
    check_required_name(
        draft.name, CATEGORY_NAME_MAX_LENGTH, "name", "Category name",
    )
    return CategoryDraft(name=draft.name.strip())


def validate_category_update(patch: CategoryPatch) -> CategoryPatch:
    if patch.name is not None:
        check_required_name(
            patch.name, CATEGORY_NAME_MAX_LENGTH, "name", "Category name",
            updating=True,
        )
    return CategoryPatch(name=trim_or_none(patch.name))
