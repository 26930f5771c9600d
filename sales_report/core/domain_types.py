"""Domain Types — identity wrappers and enums shared by every layer.

Invariants:
    - CompanyId, CategoryId, CustomerId wrap the storage-assigned int identity
    - All configuration choices encoded as str Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (settings and command results)
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

CompanyId = NewType("CompanyId", int)
CategoryId = NewType("CategoryId", int)
CustomerId = NewType("CustomerId", int)


# ─── Enums ───────────────────────────────────────────────────────

class EntityKind(str, Enum):
    """The three record kinds. Value doubles as the user-facing label."""
    COMPANY = "Company"
    CATEGORY = "Category"
    CUSTOMER = "Customer"


class StorageBackend(str, Enum):
    """Which Storage implementation backs the services."""
    MEMORY = "memory"
    SQL = "sql"


class CategoryReferencePolicy(str, Enum):
    """Whether Customer.category_id must point at an existing Category on write."""
    PERMISSIVE = "permissive"
    STRICT = "strict"
