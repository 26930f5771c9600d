"""Error Hierarchy — tests for codes, statuses and both response envelopes.

Tests cover:
    - Each error kind carries its code and HTTP status
    - to_response() nests entity, record_id and field under context
    - to_command_result() flags storage failures as not recoverable
"""

import pytest

from sales_report.core.errors import (
    ConflictError,
    ErrorContext,
    ErrorSeverity,
    InvalidFieldError,
    NoFieldsToUpdateError,
    ResourceNotFoundError,
    SalesReportError,
    StorageUnavailableError,
)


@pytest.mark.parametrize("error,code,status", [
    (InvalidFieldError("bad", "gst_no"), "INVALID_FIELD", 400),
    (ConflictError("dup", "gst_no"), "CONFLICT", 409),
    (ResourceNotFoundError("Company", 7), "NOT_FOUND", 404),
    (NoFieldsToUpdateError(), "NO_FIELDS_TO_UPDATE", 400),
    (StorageUnavailableError("commit"), "STORAGE_UNAVAILABLE", 503),
])
def test_error_codes_and_statuses(error, code, status):
    assert isinstance(error, SalesReportError)
    assert error.code == code
    assert error.http_status == status


def test_not_found_message_names_kind_and_id():
    error = ResourceNotFoundError("Customer", 42)
    assert error.message == "Customer with id 42 not found"
    assert error.context.record_id == 42


def test_to_response_carries_context():
    error = InvalidFieldError("Company name is required", "company_name")
    body = error.to_response()["error"]
    assert body["code"] == "INVALID_FIELD"
    assert body["severity"] == ErrorSeverity.WARNING.value
    assert body["context"]["field"] == "company_name"


def test_field_merged_into_supplied_context():
    ctx = ErrorContext(entity="Company", record_id=3)
    error = ConflictError("dup", "gst_no", ctx)
    assert error.context.entity == "Company"
    assert error.context.field == "gst_no"


def test_command_result_for_domain_error_is_recoverable():
    result = ConflictError("dup", "gst_no").to_command_result()
    assert result == {
        "status": "error",
        "error_code": "CONFLICT",
        "message": "dup",
        "field": "gst_no",
        "recoverable": True,
    }


def test_storage_error_hides_detail_and_is_not_recoverable():
    error = StorageUnavailableError("execute")
    assert error.message == "Storage is unavailable"
    assert error.operation == "execute"
    assert error.to_command_result()["recoverable"] is False
