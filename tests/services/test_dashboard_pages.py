"""Dashboard Pages — page data for overview, invoices, customers and the invoice forms.

Tests cover:
    - Overview cards count and total by status
    - Invoice listing search, pagination and currency/date formatting
    - Edit page returns dollars (1234 cents → 12.34); 404 for unknown ids
    - Customers page totals per customer
    - Overview and customers pages refresh after an invoice mutation
    - Cached page variants stay within the cache bound
"""

from datetime import date

import pytest

from acme_dashboard.infrastructure.page_cache import PageCache
from acme_dashboard.main import app
from acme_dashboard.models.invoice import Invoice


@pytest.fixture
async def seed_invoices(seed_customers, test_session_factory):
    async with test_session_factory() as db:
        db.add_all([
            Invoice(id="i1", customer_id="c1", amount=1234, status="pending",
                    date=date(2026, 10, 1)),
            Invoice(id="i2", customer_id="c1", amount=5000, status="paid",
                    date=date(2026, 10, 2)),
            Invoice(id="i3", customer_id="c2", amount=250, status="paid",
                    date=date(2026, 10, 3)),
        ])
        await db.commit()


async def test_overview_cards(signed_in_client, seed_invoices):
    res = await signed_in_client.get("/dashboard")
    assert res.status_code == 200
    body = res.json()
    assert body["cards"] == {
        "number_of_invoices": 3,
        "number_of_customers": 2,
        "total_paid_invoices": "$52.50",
        "total_pending_invoices": "$12.34",
    }
    assert [i["id"] for i in body["latest_invoices"]] == ["i3", "i2", "i1"]


async def test_overview_on_empty_database(signed_in_client):
    res = await signed_in_client.get("/dashboard")
    assert res.json()["cards"]["total_paid_invoices"] == "$0.00"
    assert res.json()["latest_invoices"] == []


async def test_invoice_listing_newest_first(signed_in_client, seed_invoices):
    res = await signed_in_client.get("/dashboard/invoices")
    body = res.json()
    assert [i["id"] for i in body["invoices"]] == ["i3", "i2", "i1"]
    assert body["total_pages"] == 1
    assert body["pagination"] == [1]
    first = body["invoices"][-1]
    assert first["formatted_amount"] == "$12.34"
    assert first["formatted_date"] == "Oct 1, 2026"
    assert first["name"] == "Delba de Oliveira"


async def test_invoice_listing_search_is_case_insensitive(signed_in_client, seed_invoices):
    res = await signed_in_client.get("/dashboard/invoices", params={"query": "LEE"})
    assert [i["id"] for i in res.json()["invoices"]] == ["i3"]


async def test_invoice_listing_search_by_status(signed_in_client, seed_invoices):
    res = await signed_in_client.get("/dashboard/invoices", params={"query": "pending"})
    assert [i["id"] for i in res.json()["invoices"]] == ["i1"]


async def test_invoice_listing_search_treats_wildcards_literally(
    signed_in_client, seed_invoices,
):
    res = await signed_in_client.get("/dashboard/invoices", params={"query": "%"})
    assert res.json()["invoices"] == []


async def test_invoice_listing_paginates(signed_in_client, seed_customers, test_session_factory):
    async with test_session_factory() as db:
        db.add_all([
            Invoice(id=f"p{n:02d}", customer_id="c1", amount=100 * n, status="paid",
                    date=date(2026, 1, n))
            for n in range(1, 14)
        ])
        await db.commit()

    res = await signed_in_client.get("/dashboard/invoices", params={"page": 3})
    body = res.json()
    assert body["total_pages"] == 3
    assert body["current_page"] == 3
    assert [i["id"] for i in body["invoices"]] == ["p01"]


async def test_invoice_listing_rejects_page_zero(signed_in_client):
    res = await signed_in_client.get("/dashboard/invoices", params={"page": 0})
    assert res.status_code == 400


async def test_edit_page_returns_dollars(signed_in_client, seed_invoices):
    res = await signed_in_client.get("/dashboard/invoices/i1/edit")
    assert res.status_code == 200
    body = res.json()
    assert body["invoice"] == {
        "id": "i1", "customer_id": "c1", "amount": 12.34, "status": "pending",
    }
    assert [c["name"] for c in body["customers"]] == ["Delba de Oliveira", "Lee Robinson"]


async def test_edit_page_for_unknown_invoice_is_404(signed_in_client, seed_customers):
    res = await signed_in_client.get("/dashboard/invoices/missing/edit")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_create_page_lists_customers(signed_in_client, seed_customers):
    res = await signed_in_client.get("/dashboard/invoices/create")
    assert res.json() == {
        "customers": [
            {"id": "c1", "name": "Delba de Oliveira"},
            {"id": "c2", "name": "Lee Robinson"},
        ],
    }


async def test_customers_page_totals(signed_in_client, seed_invoices):
    res = await signed_in_client.get("/dashboard/customers")
    delba, lee = res.json()["customers"]
    assert delba["total_invoices"] == 2
    assert delba["total_pending"] == "$12.34"
    assert delba["total_paid"] == "$50.00"
    assert lee["total_invoices"] == 1
    assert lee["total_pending"] == "$0.00"


async def test_customers_page_search(signed_in_client, seed_invoices):
    res = await signed_in_client.get("/dashboard/customers", params={"query": "robinson"})
    assert [c["id"] for c in res.json()["customers"]] == ["c2"]


async def test_delete_invalidates_nested_edit_page(signed_in_client, seed_invoices):
    assert (await signed_in_client.get("/dashboard/invoices/i1/edit")).status_code == 200

    await signed_in_client.delete("/dashboard/invoices/i1")

    res = await signed_in_client.get("/dashboard/invoices/i1/edit")
    assert res.status_code == 404


async def test_overview_refreshes_after_create(signed_in_client, seed_customers):
    before = (await signed_in_client.get("/dashboard")).json()
    assert before["cards"]["number_of_invoices"] == 0

    res = await signed_in_client.post(
        "/dashboard/invoices",
        data={"customerId": "c1", "amount": "25.5", "status": "pending"},
    )
    assert res.status_code == 303

    after = (await signed_in_client.get("/dashboard")).json()
    assert after["cards"]["number_of_invoices"] == 1
    assert after["cards"]["total_pending_invoices"] == "$25.50"
    assert len(after["latest_invoices"]) == 1


async def test_customers_totals_refresh_after_update(signed_in_client, seed_invoices):
    delba, _ = (await signed_in_client.get("/dashboard/customers")).json()["customers"]
    assert delba["total_pending"] == "$12.34"

    await signed_in_client.post(
        "/dashboard/invoices/i1/edit",
        data={"customerId": "c1", "amount": "12.34", "status": "paid"},
    )

    delba, _ = (await signed_in_client.get("/dashboard/customers")).json()["customers"]
    assert delba["total_pending"] == "$0.00"
    assert delba["total_paid"] == "$62.34"


async def test_overview_refreshes_after_delete(signed_in_client, seed_invoices):
    assert (await signed_in_client.get("/dashboard")).json()["cards"]["number_of_invoices"] == 3

    await signed_in_client.delete("/dashboard/invoices/i2")

    cards = (await signed_in_client.get("/dashboard")).json()["cards"]
    assert cards["number_of_invoices"] == 2
    assert cards["total_paid_invoices"] == "$2.50"


async def test_query_variants_do_not_grow_cache_past_bound(signed_in_client, seed_invoices):
    original = app.state.page_cache
    app.state.page_cache = PageCache(max_entries=4)
    try:
        for n in range(20):
            res = await signed_in_client.get(
                "/dashboard/invoices", params={"query": f"nomatch-{n}"},
            )
            assert res.status_code == 200
        assert len(app.state.page_cache) == 4
    finally:
        app.state.page_cache = original
