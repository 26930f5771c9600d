"""Customer Service — tests for the category join and reference policy.

Tests cover:
    - Returned customers carry a category snapshot read at call time
    - A deleted category leaves customers with category None (no cascade)
    - PERMISSIVE accepts unknown category ids; STRICT rejects them
    - list_by_category filters and joins
"""

import pytest

from sales_report.core.errors import InvalidFieldError
from sales_report.core.records import CategoryDraft, CategoryPatch, CustomerDraft, CustomerPatch


async def _category(services, name="Retail"):
    return await services.categories.create(CategoryDraft(name))


async def test_create_attaches_category(services):
    retail = await _category(services)
    customer = await services.customers.create(
        CustomerDraft("Acme", "ACME LTD", retail.id),
    )
    assert customer.category.name == "Retail"


async def test_category_snapshot_reflects_rename(services):
    retail = await _category(services)
    customer = await services.customers.create(CustomerDraft("Acme", "ACME", retail.id))
    await services.categories.update(retail.id, CategoryPatch(name="Trade"))
    assert (await services.customers.get_by_id(customer.id)).category.name == "Trade"


async def test_deleted_category_leaves_customer_unlinked(services):
    retail = await _category(services)
    customer = await services.customers.create(CustomerDraft("Acme", "ACME", retail.id))
    await services.categories.delete(retail.id)
    loaded = await services.customers.get_by_id(customer.id)
    assert loaded.category_id == retail.id
    assert loaded.category is None
    assert (await services.customers.list())[0].category is None


async def test_permissive_accepts_unknown_category(services):
    customer = await services.customers.create(CustomerDraft("Acme", "ACME", 99))
    assert customer.category_id == 99
    assert customer.category is None


async def test_strict_rejects_unknown_category(strict_services):
    with pytest.raises(InvalidFieldError) as exc:
        await strict_services.customers.create(CustomerDraft("Acme", "ACME", 99))
    assert exc.value.field == "category_id"
    assert await strict_services.customers.list() == []


async def test_strict_rejects_update_to_unknown_category(strict_services):
    retail = await _category(strict_services)
    customer = await strict_services.customers.create(
        CustomerDraft("Acme", "ACME", retail.id),
    )
    with pytest.raises(InvalidFieldError):
        await strict_services.customers.update(customer.id, CustomerPatch(category_id=50))


async def test_list_by_category(services):
    retail = await _category(services)
    trade = await _category(services, "Trade")
    await services.customers.create(CustomerDraft("A", "A", retail.id))
    wanted = await services.customers.create(CustomerDraft("B", "B", trade.id))
    hits = await services.customers.list_by_category(trade.id)
    assert [c.id for c in hits] == [wanted.id]
    assert hits[0].category.name == "Trade"


async def test_search_joins_categories(services):
    retail = await _category(services)
    await services.customers.create(
        CustomerDraft("Acme", "ACME", retail.id, gst_no="27ABCDE1234F1Z5", state_code="27"),
    )
    hits = await services.customers.search("abcde")
    assert hits[0].category.id == retail.id


async def test_strict_check_does_not_guard_later_category_delete(strict_services):
    retail = await _category(strict_services)
    customer = await strict_services.customers.create(
        CustomerDraft("Acme", "ACME", retail.id),
    )
    await strict_services.categories.delete(retail.id)
    loaded = await strict_services.customers.get_by_id(customer.id)
    assert loaded.category_id == retail.id
    assert loaded.category is None
