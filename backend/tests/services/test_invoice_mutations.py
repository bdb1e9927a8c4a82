"""Invoice Mutation Pipeline — create / update / delete against a real (SQLite) table.

Invariants:
    - Invalid input never writes
    - Valid create inserts exactly one row: cents amount, today's date
    - Update never changes id or date
    - Delete always raises and never removes a row (default configuration)
    - Success revalidates the list view and returns NavigateTo
"""

import uuid
from datetime import date
from unittest.mock import AsyncMock

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from app.core.errors import InvoiceDeletionError
from app.core.mutation_outcomes import (
    FieldValidationError, NavigateTo, PersistenceError,
)
from app.infrastructure.view_cache import ViewCache
from app.models.invoice import Invoice
from app.services.invoice_mutations import InvoiceMutationPipeline

TODAY = date(2026, 3, 14)
INVOICES = "/dashboard/invoices"


@pytest.fixture
def pipeline(test_db, view_cache):
    return InvoiceMutationPipeline(test_db, view_cache, today=lambda: TODAY)


async def _count(db) -> int:
    return (await db.execute(select(func.count(Invoice.id)))).scalar_one()


async def _row(db, invoice_id):
    result = await db.execute(
        select(
            Invoice.id, Invoice.customer_id, Invoice.amount,
            Invoice.status, Invoice.date,
        ).where(Invoice.id == invoice_id),
    )
    return result.one_or_none()


# ─── create ──────────────────────────────────────────────────────

async def test_create_inserts_one_row_in_cents_dated_today(pipeline, test_db):
    outcome = await pipeline.create(
        {"customerId": "c1", "amount": "25.50", "status": "pending"},
    )

    assert outcome == NavigateTo(INVOICES)
    assert await _count(test_db) == 1
    row = (await test_db.execute(
        select(Invoice.customer_id, Invoice.amount, Invoice.status, Invoice.date),
    )).one()
    assert row.customer_id == "c1"
    assert row.amount == 2550
    assert row.status == "pending"
    assert row.date == TODAY


async def test_create_with_empty_customer_writes_nothing(pipeline, test_db):
    outcome = await pipeline.create(
        {"customerId": "", "amount": "50", "status": "paid"},
    )

    assert isinstance(outcome, FieldValidationError)
    assert outcome.errors["customerId"] == ["Please select a customer"]
    assert outcome.message == "Missing Fields. Failed to Create Invoice."
    assert await _count(test_db) == 0


async def test_create_revalidates_invoice_list(pipeline, view_cache):
    view_cache.put(INVOICES, {"stale": True}, "|1")

    await pipeline.create({"customerId": "c1", "amount": "10", "status": "paid"})

    assert INVOICES not in view_cache


async def test_create_invalid_does_not_revalidate(pipeline, view_cache):
    view_cache.put(INVOICES, {"stale": True}, "|1")

    await pipeline.create({"customerId": "c1", "amount": "0", "status": "paid"})

    assert view_cache.get(INVOICES, "|1") == {"stale": True}


async def test_create_constraint_violation_returns_persistence_error(
    pipeline, test_db, view_cache,
):
    """0.004 passes validation but rounds to 0 cents, tripping the CHECK."""
    view_cache.put(INVOICES, {"stale": True})

    outcome = await pipeline.create(
        {"customerId": "c1", "amount": "0.004", "status": "paid"},
    )

    assert outcome == PersistenceError("Database Error: Failed to Create Invoice")
    assert await _count(test_db) == 0
    assert INVOICES in view_cache


async def test_create_connection_failure_returns_persistence_error(view_cache):
    db = AsyncMock()
    db.execute.side_effect = OperationalError("INSERT", {}, Exception("down"))
    pipeline = InvoiceMutationPipeline(db, view_cache, today=lambda: TODAY)

    outcome = await pipeline.create(
        {"customerId": "c1", "amount": "5", "status": "paid"},
    )

    assert outcome == PersistenceError("Database Error: Failed to Create Invoice")
    assert db.execute.await_count == 1
    db.rollback.assert_awaited_once()
    db.commit.assert_not_awaited()


@pytest.mark.parametrize("amount", ["1e27", "99999999999999999999999999999", "21474836.48"])
async def test_create_amount_too_large_to_store_returns_persistence_error(
    pipeline, test_db, view_cache, amount,
):
    view_cache.put(INVOICES, {"cached": True})

    outcome = await pipeline.create(
        {"customerId": "c1", "amount": amount, "status": "paid"},
    )

    assert outcome == PersistenceError("Database Error: Failed to Create Invoice")
    assert await _count(test_db) == 0
    assert INVOICES in view_cache


async def test_create_assigns_distinct_ids(pipeline, test_db):
    for _ in range(2):
        await pipeline.create({"customerId": "c1", "amount": "1", "status": "paid"})
    ids = (await test_db.execute(select(Invoice.id))).scalars().all()
    assert len(set(ids)) == 2


# ─── update ──────────────────────────────────────────────────────

async def test_update_changes_fields_but_not_id_or_date(
    pipeline, test_db, seed_invoice,
):
    outcome = await pipeline.update(
        seed_invoice.id,
        {"customerId": "c2", "amount": "99.99", "status": "paid", "date": "2000-01-01"},
    )

    assert outcome == NavigateTo(INVOICES)
    row = await _row(test_db, seed_invoice.id)
    assert row.id == seed_invoice.id
    assert row.date == date(2024, 1, 15)
    assert row.customer_id == "c2"
    assert row.amount == 9999
    assert row.status == "paid"


async def test_update_invalid_returns_field_errors(pipeline, test_db, seed_invoice):
    outcome = await pipeline.update(
        seed_invoice.id, {"customerId": "c2", "amount": "abc", "status": "void"},
    )

    assert isinstance(outcome, FieldValidationError)
    assert outcome.message == "Missing Fields. Failed to Update Invoice."
    assert set(outcome.errors) == {"amount", "status"}
    row = await _row(test_db, seed_invoice.id)
    assert row.amount == 15795


async def test_update_constraint_violation_returns_persistence_error(
    pipeline, test_db, seed_invoice,
):
    outcome = await pipeline.update(
        seed_invoice.id, {"customerId": "c2", "amount": "0.001", "status": "paid"},
    )

    assert outcome == PersistenceError("Database Error: Failed to Update Invoice")
    row = await _row(test_db, seed_invoice.id)
    assert row.customer_id == "cust-1"


async def test_update_amount_too_large_to_store_returns_persistence_error(
    pipeline, test_db, seed_invoice,
):
    outcome = await pipeline.update(
        seed_invoice.id, {"customerId": "c2", "amount": "1e27", "status": "paid"},
    )

    assert outcome == PersistenceError("Database Error: Failed to Update Invoice")
    row = await _row(test_db, seed_invoice.id)
    assert (row.customer_id, row.amount) == ("cust-1", 15795)


async def test_update_unknown_id_still_navigates(pipeline, test_db):
    outcome = await pipeline.update(
        uuid.uuid4(), {"customerId": "c2", "amount": "1", "status": "paid"},
    )
    assert outcome == NavigateTo(INVOICES)
    assert await _count(test_db) == 0


async def test_update_revalidates_invoice_list(pipeline, view_cache, seed_invoice):
    view_cache.put(INVOICES, {"stale": True})
    await pipeline.update(
        seed_invoice.id, {"customerId": "c2", "amount": "1", "status": "paid"},
    )
    assert INVOICES not in view_cache


# ─── delete ──────────────────────────────────────────────────────

async def test_delete_always_fails_and_keeps_row(
    pipeline, test_db, seed_invoice, view_cache,
):
    view_cache.put(INVOICES, {"cached": True})

    with pytest.raises(InvoiceDeletionError) as exc_info:
        await pipeline.delete(seed_invoice.id)

    assert exc_info.value.message == "Failed to Delete Invoice"
    assert await _row(test_db, seed_invoice.id) is not None
    assert INVOICES in view_cache


async def test_delete_unknown_id_also_fails(pipeline):
    with pytest.raises(InvoiceDeletionError):
        await pipeline.delete(uuid.uuid4())


async def test_delete_never_touches_the_database(view_cache):
    db = AsyncMock()
    pipeline = InvoiceMutationPipeline(db, view_cache)

    with pytest.raises(InvoiceDeletionError):
        await pipeline.delete(uuid.uuid4())

    db.execute.assert_not_awaited()
    db.commit.assert_not_awaited()


async def test_delete_when_enabled_removes_row(test_db, seed_invoice):
    views = ViewCache()
    views.put(INVOICES, {"cached": True})
    pipeline = InvoiceMutationPipeline(test_db, views, delete_enabled=True)

    outcome = await pipeline.delete(seed_invoice.id)

    assert outcome == NavigateTo(INVOICES)
    assert await _row(test_db, seed_invoice.id) is None
    assert INVOICES not in views


async def test_delete_when_enabled_with_malformed_id_fails(test_db, seed_invoice):
    pipeline = InvoiceMutationPipeline(test_db, ViewCache(), delete_enabled=True)

    with pytest.raises(InvoiceDeletionError) as exc_info:
        await pipeline.delete("not-a-uuid")

    assert exc_info.value.context.invoice_id == "not-a-uuid"
    assert await _count(test_db) == 1
