"""Customer Validation — pure checks for customer create and update payloads.

Invariants:
    - Fail-fast in fixed order: report_customer -> tally_customer -> gst_no -> category_id
    - gst_no is optional; an empty (after trim) value skips the format check
    - state_code is optional and unvalidated, only trimmed
    - category_id must be a positive integer; existence is NOT checked here
      (CustomerService applies the configured reference policy)
"""

from sales_report.core.records import CustomerDraft, CustomerPatch
from sales_report.core.validate_fields import (
    check_optional_gst,
    check_positive_id,
    check_required_name,
    trim_or_none,
)

CUSTOMER_NAME_MAX_LENGTH: int = 255
CATEGORY_REQUIRED_MESSAGE = "Category is required"


def validate_customer_create(draft: CustomerDraft) -> CustomerDraft:
    """Validate a full customer payload and return it trimmed."""
    check_required_name(
        draft.report_customer, CUSTOMER_NAME_MAX_LENGTH,
        "report_customer", "Report customer name",
    )
    check_required_name(
        draft.tally_customer, CUSTOMER_NAME_MAX_LENGTH,
        "tally_customer", "Tally customer name",
    )
    check_optional_gst(draft.gst_no)
    check_positive_id(draft.category_id, "category_id", CATEGORY_REQUIRED_MESSAGE)
    return CustomerDraft(
        report_customer=draft.report_customer.strip(),
        tally_customer=draft.tally_customer.strip(),
        category_id=draft.category_id,
        gst_no=trim_or_none(draft.gst_no),
        state_code=trim_or_none(draft.state_code),
    )


def validate_customer_update(patch: CustomerPatch) -> CustomerPatch:
    """Validate the supplied fields of a customer patch and return it trimmed."""
    if patch.report_customer is not None:
        check_required_name(
            patch.report_customer, CUSTOMER_NAME_MAX_LENGTH,
            "report_customer", "Report customer name", updating=True,
        )
    if patch.tally_customer is not None:
        check_required_name(
            patch.tally_customer, CUSTOMER_NAME_MAX_LENGTH,
            "tally_customer", "Tally customer name", updating=True,
        )
    check_optional_gst(patch.gst_no)
    if patch.category_id is not None:
        check_positive_id(patch.category_id, "category_id", CATEGORY_REQUIRED_MESSAGE)
    return CustomerPatch(
        report_customer=trim_or_none(patch.report_customer),
        tally_customer=trim_or_none(patch.tally_customer),
        gst_no=trim_or_none(patch.gst_no),
        state_code=trim_or_none(patch.state_code),
        category_id=patch.category_id,
    )
