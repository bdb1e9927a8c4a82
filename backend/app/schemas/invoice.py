"""Invoice Schemas — response shapes for the dashboard read side.

Invariants:
    - amount is always integer cents; amount_display is the formatted major-unit string
    - Pagination pages are 1-based

Design Decisions:
    - from_attributes=True: built straight from ORM rows
"""

import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, computed_field

from app.core.domain_types import InvoiceStatus
from app.core.money import format_currency


class InvoiceResponse(BaseModel):
    """One invoice as shown in the list and the edit form."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    customer_id: str
    amount: int
    status: InvoiceStatus
    date: datetime.date

    @computed_field
    @property
    def amount_display(self) -> str:
        return format_currency(self.amount)


class Pagination(BaseModel):
    page: int
    per_page: int
    total: int
    total_pages: int


class InvoicePage(BaseModel):
    """Filtered, paginated invoice list view."""
    invoices: list[InvoiceResponse]
    query: str
    pagination: Pagination


class DashboardCards(BaseModel):
    """Summary figures for the dashboard overview."""
    number_of_invoices: int
    total_paid: int
    total_pending: int

    @computed_field
    @property
    def total_paid_display(self) -> str:
        return format_currency(self.total_paid)

    @computed_field
    @property
    def total_pending_display(self) -> str:
        return format_currency(self.total_pending)
