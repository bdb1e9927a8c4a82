"""Invoice Routes — dashboard overview, list view, edit form, and mutations.

Invariants:
    - Mutation outcomes rendered uniformly: NavigateTo → 303 See Other,
      FieldValidationError → 400 form state, PersistenceError → 503 form state
    - The list view is served from the view cache until a mutation revalidates it
    - All paths live under /dashboard, behind the authorization gate

Design Decisions:
    - Form fields accepted as a raw JSON object: validation belongs to the
      pipeline so its field errors come back as form state, not a 400 envelope
    - Delete failures are raised (InvoiceDeletionError) and rendered by the
      global DashboardError handler
"""

from typing import Any
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query, status
from fastapi.responses import JSONResponse, RedirectResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import DASHBOARD_PATH, INVOICES_PATH, InvoiceId
from app.core.mutation_outcomes import (
    FieldValidationError, MutationOutcome, NavigateTo,
)
from app.infrastructure.database import get_db
from app.infrastructure.view_cache import ViewCache, get_view_cache
from app.services.invoice_mutations import (
    InvoiceMutationPipeline, get_invoice_pipeline,
)
from app.services.invoice_queries import (
    fetch_card_data, fetch_invoice, fetch_invoice_page,
)

router = APIRouter(tags=["invoices"])


def render_outcome(outcome: MutationOutcome) -> Response:
    """Translate a pipeline outcome into an HTTP response."""
    if isinstance(outcome, NavigateTo):
        return RedirectResponse(
            outcome.path, status_code=status.HTTP_303_SEE_OTHER,
        )
    if isinstance(outcome, FieldValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=outcome.to_state(),
        )
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=outcome.to_state(),
    )


@router.get(DASHBOARD_PATH)
async def dashboard_overview(db: AsyncSession = Depends(get_db)):
    """Summary cards: invoice count and paid / pending totals."""
    cards = await fetch_card_data(db)
    return cards.model_dump(mode="json")


@router.get(INVOICES_PATH)
async def list_invoices(
    query: str = Query("", max_length=200),
    page: int = Query(1, ge=1),
    db: AsyncSession = Depends(get_db),
    views: ViewCache = Depends(get_view_cache),
):
    """Invoice list view, cached per (query, page) until revalidated."""
    variant = f"{query}|{page}"
    cached = views.get(INVOICES_PATH, variant)
    if cached is not None:
        return cached
    invoice_page = await fetch_invoice_page(db, query, page)
    payload = invoice_page.model_dump(mode="json")
    views.put(INVOICES_PATH, payload, variant)
    return payload


@router.get(f"{INVOICES_PATH}/{{invoice_id}}/edit")
async def edit_invoice_form(
    invoice_id: UUID, db: AsyncSession = Depends(get_db),
):
    """Current values for the edit form."""
    invoice = await fetch_invoice(db, InvoiceId(invoice_id))
    return invoice.model_dump(mode="json")


@router.post(INVOICES_PATH)
async def create_invoice(
    raw: dict[str, Any] | None = Body(None),
    pipeline: InvoiceMutationPipeline = Depends(get_invoice_pipeline),
):
    """Create form submission."""
    return render_outcome(await pipeline.create(raw or {}))


@router.put(f"{INVOICES_PATH}/{{invoice_id}}")
async def update_invoice(
    invoice_id: UUID,
    raw: dict[str, Any] | None = Body(None),
    pipeline: InvoiceMutationPipeline = Depends(get_invoice_pipeline),
):
    """Edit form submission."""
    return render_outcome(await pipeline.update(InvoiceId(invoice_id), raw or {}))


@router.delete(f"{INVOICES_PATH}/{{invoice_id}}")
async def delete_invoice(
    invoice_id: str,
    pipeline: InvoiceMutationPipeline = Depends(get_invoice_pipeline),
):
    """Delete button."""
    return render_outcome(await pipeline.delete(invoice_id))
