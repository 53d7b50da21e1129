"""SQL Invoice Store — tests against in-memory SQLite.

Tests cover:
    - insert assigns an id and persists the given row
    - update touches customer_id/amount/status only and reports rows affected
    - delete reports rows affected; a second delete affects zero rows
    - SQLAlchemy failures are rolled back and raised as DatabaseError
"""

from datetime import date
from unittest.mock import AsyncMock

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from acme_dashboard.core.domain_types import InvoiceStatus
from acme_dashboard.core.errors import DatabaseError
from acme_dashboard.core.repository_protocols import InvoiceChanges, NewInvoice
from acme_dashboard.infrastructure.invoice_store import SqlInvoiceStore
from acme_dashboard.models.invoice import Invoice

NEW = NewInvoice(
    customer_id="c1", amount=1234, status=InvoiceStatus.PENDING,
    date=date(2026, 10, 16),
)


async def _all(test_session_factory):
    async with test_session_factory() as db:
        return (await db.execute(select(Invoice))).scalars().all()


async def test_insert_persists_row(test_db, test_session_factory):
    invoice_id = await SqlInvoiceStore(test_db).insert(NEW)

    (row,) = await _all(test_session_factory)
    assert row.id == invoice_id
    assert (row.customer_id, row.amount, row.status, row.date) == (
        "c1", 1234, "pending", date(2026, 10, 16),
    )


async def test_amount_round_trips_through_cents(test_db, test_session_factory):
    await SqlInvoiceStore(test_db).insert(NEW)
    (row,) = await _all(test_session_factory)
    assert row.amount / 100 == 12.34


async def test_update_changes_only_mutable_columns(test_db, test_session_factory):
    store = SqlInvoiceStore(test_db)
    invoice_id = await store.insert(NEW)

    affected = await store.update(
        invoice_id,
        InvoiceChanges(customer_id="c2", amount=999, status=InvoiceStatus.PAID),
    )

    assert affected == 1
    (row,) = await _all(test_session_factory)
    assert row.id == invoice_id
    assert row.date == date(2026, 10, 16)
    assert (row.customer_id, row.amount, row.status) == ("c2", 999, "paid")


async def test_update_of_missing_row_affects_nothing(test_db):
    affected = await SqlInvoiceStore(test_db).update(
        "missing",
        InvoiceChanges(customer_id="c2", amount=999, status=InvoiceStatus.PAID),
    )
    assert affected == 0


async def test_delete_is_idempotent(test_db, test_session_factory):
    store = SqlInvoiceStore(test_db)
    invoice_id = await store.insert(NEW)

    assert await store.delete(invoice_id) == 1
    assert await store.delete(invoice_id) == 0
    assert await _all(test_session_factory) == []


async def test_driver_failure_is_rolled_back_and_translated():
    db = AsyncMock()
    db.execute = AsyncMock(
        side_effect=OperationalError("INSERT", {}, Exception("connection refused")),
    )
    db.rollback = AsyncMock()
    db.commit = AsyncMock()

    with pytest.raises(DatabaseError) as exc_info:
        await SqlInvoiceStore(db).insert(NEW)

    assert exc_info.value.operation == "insert"
    db.rollback.assert_awaited_once()
    db.commit.assert_not_awaited()


async def test_store_is_the_only_source_of_invoice_ids(test_db):
    assert Invoice.__table__.c.id.default is None
    store = SqlInvoiceStore(test_db)

    first = await store.insert(NEW)
    second = await store.insert(NEW)

    assert first != second
    assert len(first) == 36
