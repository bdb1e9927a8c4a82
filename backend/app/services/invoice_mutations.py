"""Invoice Mutation Pipeline — validate → convert → single write → revalidate → navigate.

Invariants:
    - Invalid input never touches storage
    - Each mutation issues exactly one parameterized statement, then commits;
      no retry on failure
    - Update never writes id or date
    - Success revalidates the invoice list view and returns NavigateTo; nothing
      runs after that
    - delete raises InvoiceDeletionError before any statement unless deletion
      is explicitly enabled

Design Decisions:
    - Session, view cache, clock, and delete flag are injected per request
      (no module-level connection handle)
    - Database failures are returned as PersistenceError values, not raised:
      the form shows them as a page-level message
    - Core SQL (insert/update/delete) over ORM unit-of-work: one statement per
      operation, matching statement-level atomicity
"""

import logging
import uuid
from datetime import date, datetime, timezone
from typing import Any, Callable, Mapping

from fastapi import Depends
from sqlalchemy import delete, insert, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.core.domain_types import INVOICES_PATH, InvoiceId
from app.core.errors import InvoiceDeletionError
from app.core.money import to_storable_cents
from app.core.mutation_outcomes import (
    FieldValidationError, MutationOutcome, NavigateTo, PersistenceError,
)
from app.core.validate_invoice import Invalid, validate_invoice_form
from app.infrastructure.database import get_db
from app.infrastructure.view_cache import ViewCache, get_view_cache
from app.models.invoice import Invoice

logger = logging.getLogger(__name__)

CREATE_INVALID = "Missing Fields. Failed to Create Invoice."
UPDATE_INVALID = "Missing Fields. Failed to Update Invoice."
CREATE_FAILED = "Database Error: Failed to Create Invoice"
UPDATE_FAILED = "Database Error: Failed to Update Invoice"


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


class InvoiceMutationPipeline:
    """Create, update, and delete invoices from raw form fields."""

    def __init__(
        self,
        db: AsyncSession,
        views: ViewCache,
        today: Callable[[], date] = utc_today,
        delete_enabled: bool = False,
    ):
        self.db = db
        self.views = views
        self.today = today
        self.delete_enabled = delete_enabled

    async def create(self, raw: Mapping[str, Any]) -> MutationOutcome:
        """Validate and insert a new invoice dated today."""
        result = validate_invoice_form(raw)
        if isinstance(result, Invalid):
            return FieldValidationError(result.errors, CREATE_INVALID)

        form = result.fields
        invoice_id = uuid.uuid4()
        cents = to_storable_cents(form.amount)
        if cents is None:
            logger.error(
                f"Amount {form.amount} does not fit the amount column",
                extra={"invoice_id": str(invoice_id)},
            )
            return PersistenceError(CREATE_FAILED)

        try:
            await self.db.execute(
                insert(Invoice).values(
                    id=invoice_id,
                    customer_id=form.customer_id,
                    amount=cents,
                    status=form.status.value,
                    date=self.today(),
                ),
            )
            await self.db.commit()
        except (SQLAlchemyError, OSError) as e:
            await self.db.rollback()
            logger.error(
                f"Failed to create invoice: {e}",
                extra={"invoice_id": str(invoice_id)},
            )
            return PersistenceError(CREATE_FAILED)

        logger.info(
            f"Invoice created for customer {form.customer_id}",
            extra={"invoice_id": str(invoice_id)},
        )
        return self._navigate_to_invoices()

    async def update(
        self, invoice_id: InvoiceId, raw: Mapping[str, Any],
    ) -> MutationOutcome:
        """Validate and overwrite customer, amount, and status of one invoice."""
        result = validate_invoice_form(raw)
        if isinstance(result, Invalid):
            return FieldValidationError(result.errors, UPDATE_INVALID)

        form = result.fields
        cents = to_storable_cents(form.amount)
        if cents is None:
            logger.error(
                f"Amount {form.amount} does not fit the amount column",
                extra={"invoice_id": str(invoice_id)},
            )
            return PersistenceError(UPDATE_FAILED)

        try:
            outcome = await self.db.execute(
                update(Invoice)
                .where(Invoice.id == invoice_id)
                .values(
                    customer_id=form.customer_id,
                    amount=cents,
                    status=form.status.value,
                ),
            )
            await self.db.commit()
        except (SQLAlchemyError, OSError) as e:
            await self.db.rollback()
            logger.error(
                f"Failed to update invoice: {e}",
                extra={"invoice_id": str(invoice_id)},
            )
            return PersistenceError(UPDATE_FAILED)

        if outcome.rowcount == 0:
            logger.warning(
                "Update matched no invoice",
                extra={"invoice_id": str(invoice_id)},
            )
        return self._navigate_to_invoices()

    async def delete(self, invoice_id: InvoiceId | str) -> MutationOutcome:
        """Delete one invoice. Refused unless deletion is enabled.

        Accepts any id string; ids that are not UUIDs fail the same way.
        """
        if not self.delete_enabled:
            logger.error(
                "Invoice deletion refused",
                extra={"invoice_id": str(invoice_id)},
            )
            raise InvoiceDeletionError(str(invoice_id))

        try:
            target = InvoiceId(uuid.UUID(str(invoice_id)))
        except ValueError:
            logger.error(
                "Invoice deletion refused: malformed id",
                extra={"invoice_id": str(invoice_id)},
            )
            raise InvoiceDeletionError(str(invoice_id))

        await self.db.execute(delete(Invoice).where(Invoice.id == target))
        await self.db.commit()
        logger.info("Invoice deleted", extra={"invoice_id": str(invoice_id)})
        return self._navigate_to_invoices()

    def _navigate_to_invoices(self) -> NavigateTo:
        self.views.revalidate(INVOICES_PATH)
        return NavigateTo(INVOICES_PATH)


def get_invoice_pipeline(
    db: AsyncSession = Depends(get_db),
    views: ViewCache = Depends(get_view_cache),
    settings: Settings = Depends(get_settings),
) -> InvoiceMutationPipeline:
    """FastAPI dependency — one pipeline per request."""
    return InvoiceMutationPipeline(
        db, views, delete_enabled=settings.invoice_delete_enabled,
    )
