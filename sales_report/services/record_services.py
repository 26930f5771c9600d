"""Record Services — the three entity services bundled for one storage registry.

Invariants:
    - Services are cheap, stateless wrappers: building them per request is fine
    - CustomerService always receives the SAME category storage the category service uses
"""

from dataclasses import dataclass

from sales_report.config import get_settings
from sales_report.core.domain_types import CategoryReferencePolicy
from sales_report.infrastructure.storage_registry import StorageRegistry, get_registry
from sales_report.services.category_service import CategoryService
from sales_report.services.company_service import CompanyService
from sales_report.services.customer_service import CustomerService


@dataclass
class RecordServices:
    companies: CompanyService
    categories: CategoryService
    customers: CustomerService


def build_services(
    registry: StorageRegistry,
    policy: CategoryReferencePolicy = CategoryReferencePolicy.PERMISSIVE,
) -> RecordServices:
    return RecordServices(
        companies=CompanyService(registry.companies),
        categories=CategoryService(registry.categories),
        customers=CustomerService(registry.customers, registry.categories, policy),
    )


def get_services() -> RecordServices:
    """FastAPI dependency — services over the process-wide registry."""
    return build_services(get_registry(), get_settings().customer_category_check)
