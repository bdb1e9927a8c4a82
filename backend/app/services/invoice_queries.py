"""Invoice Queries — read side of the dashboard: summary cards, list view, edit form.

Invariants:
    - Read-only: never writes, never revalidates
    - List is ordered newest date first, then id for a stable order
    - query filter is case-insensitive over customer_id and status
    - fetch_invoice raises ResourceNotFoundError for an unknown id

Design Decisions:
    - The list view is the cached rendering the mutation pipeline invalidates;
      caching lives in the route, this module always hits the DB
"""

import math

from sqlalchemy import case, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import InvoiceId, InvoiceStatus
from app.core.errors import ErrorContext, ResourceNotFoundError
from app.models.invoice import Invoice
from app.schemas.invoice import (
    DashboardCards, InvoicePage, InvoiceResponse, Pagination,
)

ITEMS_PER_PAGE = 6


async def fetch_card_data(db: AsyncSession) -> DashboardCards:
    """Invoice count plus paid and pending totals, in cents."""
    paid = func.coalesce(func.sum(
        case((Invoice.status == InvoiceStatus.PAID.value, Invoice.amount), else_=0),
    ), 0)
    pending = func.coalesce(func.sum(
        case((Invoice.status == InvoiceStatus.PENDING.value, Invoice.amount), else_=0),
    ), 0)
    result = await db.execute(select(func.count(Invoice.id), paid, pending))
    count, total_paid, total_pending = result.one()
    return DashboardCards(
        number_of_invoices=count,
        total_paid=int(total_paid),
        total_pending=int(total_pending),
    )


def _filtered(query: str):
    stmt = select(Invoice)
    if query:
        pattern = f"%{query.lower()}%"
        stmt = stmt.where(or_(
            func.lower(Invoice.customer_id).like(pattern),
            func.lower(Invoice.status).like(pattern),
        ))
    return stmt


async def fetch_invoice_page(
    db: AsyncSession, query: str = "", page: int = 1,
) -> InvoicePage:
    """One page of invoices matching query."""
    filtered = _filtered(query)
    total = (await db.execute(
        select(func.count()).select_from(filtered.subquery()),
    )).scalar_one()

    result = await db.execute(
        filtered
        .order_by(Invoice.date.desc(), Invoice.id)
        .limit(ITEMS_PER_PAGE)
        .offset((page - 1) * ITEMS_PER_PAGE),
    )
    invoices = result.scalars().all()

    return InvoicePage(
        invoices=[InvoiceResponse.model_validate(i) for i in invoices],
        query=query,
        pagination=Pagination(
            page=page,
            per_page=ITEMS_PER_PAGE,
            total=total,
            total_pages=math.ceil(total / ITEMS_PER_PAGE),
        ),
    )


async def fetch_invoice(db: AsyncSession, invoice_id: InvoiceId) -> InvoiceResponse:
    """Single invoice for the edit form."""
    result = await db.execute(
        select(Invoice).where(Invoice.id == invoice_id),
    )
    invoice = result.scalar_one_or_none()
    if not invoice:
        raise ResourceNotFoundError(
            "Invoice", str(invoice_id),
            ErrorContext(invoice_id=str(invoice_id)),
        )
    return InvoiceResponse.model_validate(invoice)
