"""Service test fixtures — services over a fresh in-memory registry.

Invariants:
    - Every test gets its own registry: no state leaks between tests
    - strict_services shares nothing with services
"""

import pytest

from sales_report.core.domain_types import CategoryReferencePolicy
from sales_report.infrastructure.storage_registry import build_memory_registry
from sales_report.services.record_services import build_services


@pytest.fixture
def services():
    return build_services(build_memory_registry())


@pytest.fixture
def strict_services():
    return build_services(build_memory_registry(), CategoryReferencePolicy.STRICT)
