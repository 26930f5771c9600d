"""Company Validation — pure checks for company create and update payloads.

Invariants:
    - Fail-fast in fixed order: company_name -> gst_no -> state_code
    - Returns a NEW canonicalized (trimmed) payload; input is never mutated
    - Update checks only supplied fields

Design Decisions:
    - Raise InvalidFieldError rather than return error dicts: services and command
      dispatch share one error path through SalesReportError
"""

from sales_report.core.records import CompanyDraft, CompanyPatch
from sales_report.core.validate_fields import (
    check_gst_format,
    check_not_blank,
    check_required_name,
    trim_or_none,
)

COMPANY_NAME_MAX_LENGTH: int = 255


def validate_company_create(draft: CompanyDraft) -> CompanyDraft:
    """Validate a full company payload and return it trimmed."""
    check_required_name(
        draft.company_name, COMPANY_NAME_MAX_LENGTH, "company_name", "Company name",
    )
    check_not_blank(draft.gst_no, "gst_no", "GST number is required")
    check_gst_format(draft.gst_no)
    check_not_blank(draft.state_code, "state_code", "State code is required")
    return CompanyDraft(
        company_name=draft.company_name.strip(),
        gst_no=draft.gst_no.strip(),
        state_code=draft.state_code.strip(),
    )


def validate_company_update(patch: CompanyPatch) -> CompanyPatch:
    """Validate the supplied fields of a company patch and return it trimmed."""
    if patch.company_name is not None:
        check_required_name(
            patch.company_name, COMPANY_NAME_MAX_LENGTH,
            "company_name", "Company name", updating=True,
        )
    if patch.gst_no is not None:
        check_not_blank(patch.gst_no, "gst_no", "GST number cannot be empty")
        check_gst_format(patch.gst_no)
    if patch.state_code is not None:
        check_not_blank(patch.state_code, "state_code", "State code cannot be empty")
    return CompanyPatch(
        company_name=trim_or_none(patch.company_name),
        gst_no=trim_or_none(patch.gst_no),
        state_code=trim_or_none(patch.state_code),
    )
