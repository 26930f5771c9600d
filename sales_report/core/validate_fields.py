"""Field Rules — shared building blocks for the per-entity validators.

Invariants:
    - All functions are PURE: no IO, no shared state
    - Each check raises InvalidFieldError naming the field, or returns None
    - Length is measured in characters on the UNTRIMMED value; the stored value is trimmed

Design Decisions:
    - Length before trim: a value padded past the limit is rejected even if its trimmed
      form would fit (kept deliberately, pinned by tests)
"""

from sales_report.core.errors import InvalidFieldError
from sales_report.core.gst_format import is_valid_gst

GST_FORMAT_MESSAGE = "GST number must be 15 characters and follow GST format"


def check_not_blank(value: str, field: str, message: str) -> None:
    if not value.strip():
        raise InvalidFieldError(message, field)


def check_max_length(value: str, limit: int, field: str, label: str) -> None:
    if len(value) > limit:
        raise InvalidFieldError(
            f"{label} must be {limit} characters or less", field,
        )


def check_required_name(
    value: str, limit: int, field: str, label: str, *, updating: bool = False,
) -> None:
    """Blank check then length check, with create/update wording."""
    suffix = "cannot be empty" if updating else "is required"
    check_not_blank(value, field, f"{label} {suffix}")
    check_max_length(value, limit, field, label)


def check_gst_format(value: str, field: str = "gst_no") -> None:
    if not is_valid_gst(value):
        raise InvalidFieldError(GST_FORMAT_MESSAGE, field)


def check_optional_gst(value: str | None, field: str = "gst_no") -> None:
    """Blank or absent GST numbers are exempt from the format check."""
    if value is not None and value.strip():
        check_gst_format(value, field)


def check_positive_id(value: object, field: str, message: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidFieldError(message, field)


def trim_or_none(value: str | None) -> str | None:
    return value.strip() if value is not None else None
