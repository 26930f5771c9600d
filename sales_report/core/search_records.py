"""Record Search & Ordering — pure helpers shared by the storage implementations.

Invariants:
    - Listing order is created_at descending, ties broken by id descending
    - Search is a trimmed, case-insensitive substring match over the layout's search_fields
    - None-valued fields never match
"""

from typing import Any, Iterable


def normalize_query(text: str) -> str:
    return text.strip().casefold()


def matches_query(record: Any, search_fields: Iterable[str], query: str) -> bool:
    """True when any search field contains the (already normalized) query."""
    for name in search_fields:
        value = getattr(record, name, None)
        if value and query in value.casefold():
            return True
    return False


def newest_first(records: Iterable[Any]) -> list[Any]:
    return sorted(
        records, key=lambda r: (r.created_at, r.id), reverse=True,
    )
