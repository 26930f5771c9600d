"""GST Format Check — the single predicate every validator uses for GST numbers.

Invariants:
    - Input is trimmed before checking
    - Valid iff exactly GST_LENGTH characters, each an ASCII letter or digit
    - Format only: the embedded state code and PAN are not decoded, case is not normalized
"""

GST_LENGTH: int = 15


def is_valid_gst(text: str) -> bool:
    """True when the trimmed text looks like a GST number."""
    trimmed = text.strip()
    return len(trimmed) == GST_LENGTH and all(
        c.isascii() and c.isalnum() for c in trimmed
    )
