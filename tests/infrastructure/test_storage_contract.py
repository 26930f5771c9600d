"""Storage Contract — behaviour shared by InMemoryStorage and SqlStorage.

Tests cover:
    - create/get round-trip, identity assignment, ids never reused
    - GST uniqueness on create and update, including concurrent creates
    - N concurrent creates yield N distinct ids
    - update: partial application, NoFieldsToUpdate, updated_at strictly advances
    - delete and NotFound
    - search (trimmed, case-insensitive incl. non-ASCII, over every search field) and ordering
    - exists / list_where
"""

import asyncio
from datetime import datetime, timezone

import pytest

from sales_report.core.errors import (
    ConflictError,
    NoFieldsToUpdateError,
    ResourceNotFoundError,
)
from sales_report.core import records
from sales_report.core.records import (
    CategoryDraft,
    CompanyDraft,
    CompanyPatch,
    CustomerDraft,
    CustomerPatch,
)

GST = "27ABCDE1234F1Z5"
OTHER_GST = "29PQRST6789K1Z2"


def _acme(gst_no: str = GST) -> CompanyDraft:
    return CompanyDraft(company_name="Acme Traders", gst_no=gst_no, state_code="27")


# ─── create / get ────────────────────────────────────────────────

async def test_create_then_get_returns_equal_record(registry):
    created = await registry.companies.create(_acme())
    assert created.id is not None
    assert created.created_at == created.updated_at
    assert await registry.companies.get(created.id) == created


async def test_get_unknown_id_raises_not_found(registry):
    with pytest.raises(ResourceNotFoundError) as exc:
        await registry.companies.get(999)
    assert exc.value.message == "Company with id 999 not found"


async def test_ids_not_reused_after_delete(registry):
    first = await registry.categories.create(CategoryDraft("Retail"))
    await registry.categories.delete(first.id)
    second = await registry.categories.create(CategoryDraft("Wholesale"))
    assert second.id > first.id


async def test_returned_records_are_copies(registry):
    created = await registry.companies.create(_acme())
    created.company_name = "Mutated"
    assert (await registry.companies.get(created.id)).company_name == "Acme Traders"


# ─── uniqueness ──────────────────────────────────────────────────

async def test_duplicate_gst_on_create_conflicts(registry):
    await registry.companies.create(_acme())
    with pytest.raises(ConflictError) as exc:
        await registry.companies.create(_acme())
    assert exc.value.message == "A company with this GST number already exists"
    assert exc.value.field == "gst_no"


async def test_concurrent_duplicate_creates_exactly_one_succeeds(registry):
    results = await asyncio.gather(
        registry.companies.create(_acme()),
        registry.companies.create(_acme()),
        return_exceptions=True,
    )
    conflicts = [r for r in results if isinstance(r, ConflictError)]
    assert len(conflicts) == 1
    assert len(await registry.companies.list()) == 1


async def test_concurrent_creates_get_distinct_ids(registry):
    created = await asyncio.gather(*[
        registry.categories.create(CategoryDraft(f"Category {i}")) for i in range(20)
    ])
    assert len({c.id for c in created}) == 20


async def test_update_to_taken_gst_conflicts(registry):
    await registry.companies.create(_acme())
    other = await registry.companies.create(_acme(OTHER_GST))
    with pytest.raises(ConflictError):
        await registry.companies.update(other.id, CompanyPatch(gst_no=GST))


async def test_update_to_own_gst_is_allowed(registry):
    company = await registry.companies.create(_acme())
    updated = await registry.companies.update(company.id, CompanyPatch(gst_no=GST))
    assert updated.gst_no == GST
    assert updated.updated_at > company.updated_at


async def test_customer_gst_is_not_unique(registry):
    draft = CustomerDraft("Acme", "ACME", 1, gst_no=GST)
    await registry.customers.create(draft)
    await registry.customers.create(draft)
    assert len(await registry.customers.list()) == 2


# ─── update ──────────────────────────────────────────────────────

async def test_update_applies_only_supplied_fields(registry):
    company = await registry.companies.create(_acme())
    updated = await registry.companies.update(company.id, CompanyPatch(state_code="29"))
    assert updated.state_code == "29"
    assert updated.company_name == company.company_name
    assert updated.gst_no == company.gst_no
    assert updated.created_at == company.created_at
    assert updated.updated_at > company.updated_at


async def test_empty_update_leaves_record_unchanged(registry):
    company = await registry.companies.create(_acme())
    with pytest.raises(NoFieldsToUpdateError):
        await registry.companies.update(company.id, CompanyPatch())
    assert await registry.companies.get(company.id) == company


async def test_empty_update_of_unknown_id_reports_no_fields(registry):
    with pytest.raises(NoFieldsToUpdateError):
        await registry.customers.update(404, CustomerPatch())


async def test_update_unknown_id_raises_not_found(registry):
    with pytest.raises(ResourceNotFoundError):
        await registry.companies.update(404, CompanyPatch(state_code="29"))


async def test_update_advances_updated_at_on_a_frozen_clock(registry, monkeypatch):
    frozen = datetime(2026, 1, 1, tzinfo=timezone.utc)

    class FrozenDatetime(datetime):
        @classmethod
        def now(cls, tz=None):
            return frozen

    monkeypatch.setattr(records, "datetime", FrozenDatetime)
    company = await registry.companies.create(_acme())
    first = await registry.companies.update(company.id, CompanyPatch(state_code="29"))
    second = await registry.companies.update(company.id, CompanyPatch(state_code="30"))
    assert company.updated_at < first.updated_at < second.updated_at
    assert (await registry.companies.get(company.id)).updated_at == second.updated_at


# ─── delete ──────────────────────────────────────────────────────

async def test_delete_then_get_raises_not_found(registry):
    category = await registry.categories.create(CategoryDraft("Retail"))
    await registry.categories.delete(category.id)
    with pytest.raises(ResourceNotFoundError):
        await registry.categories.get(category.id)


async def test_delete_unknown_id_raises_not_found(registry):
    with pytest.raises(ResourceNotFoundError):
        await registry.companies.delete(12)


# ─── list / search ───────────────────────────────────────────────

async def test_list_is_newest_first(registry):
    ids = [
        (await registry.categories.create(CategoryDraft(name))).id
        for name in ("A", "B", "C")
    ]
    listed = await registry.categories.list()
    assert [c.id for c in listed] == list(reversed(ids))


async def test_search_by_name_is_case_insensitive(registry):
    company = await registry.companies.create(_acme())
    await registry.companies.create(CompanyDraft("Globex", OTHER_GST, "29"))
    hits = await registry.companies.search("  acme ")
    assert [c.id for c in hits] == [company.id]


async def test_search_by_gst_fragment(registry):
    company = await registry.companies.create(_acme())
    hits = await registry.companies.search("ABCDE1234F1Z5")
    assert [c.id for c in hits] == [company.id]


async def test_blank_search_lists_everything(registry):
    await registry.companies.create(_acme())
    await registry.companies.create(CompanyDraft("Globex", OTHER_GST, "29"))
    assert len(await registry.companies.search("   ")) == 2


async def test_search_folds_non_ascii_case(registry):
    ecole = await registry.categories.create(CategoryDraft("ÉCOLE SUPPLIES"))
    await registry.categories.create(CategoryDraft("Straße Traders"))
    assert [c.id for c in await registry.categories.search("école")] == [ecole.id]
    assert len(await registry.categories.search("STRASSE")) == 1


async def test_search_treats_wildcards_literally(registry):
    await registry.categories.create(CategoryDraft("Retail"))
    assert await registry.categories.search("%") == []


async def test_customer_search_covers_tally_name(registry):
    customer = await registry.customers.create(
        CustomerDraft("Acme", "ACME RETAIL LTD", 1),
    )
    hits = await registry.customers.search("retail ltd")
    assert [c.id for c in hits] == [customer.id]


# ─── exists / list_where ─────────────────────────────────────────

async def test_exists_respects_exclude_id(registry):
    company = await registry.companies.create(_acme())
    assert await registry.companies.exists("gst_no", GST)
    assert not await registry.companies.exists("gst_no", GST, exclude_id=company.id)
    assert not await registry.companies.exists("gst_no", OTHER_GST)


async def test_list_where_filters_by_field(registry):
    await registry.customers.create(CustomerDraft("A", "A", 1))
    wanted = await registry.customers.create(CustomerDraft("B", "B", 2))
    hits = await registry.customers.list_where("category_id", 2)
    assert [c.id for c in hits] == [wanted.id]
