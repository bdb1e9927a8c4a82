"""Invoice read-side schemas — display formatting of cent amounts."""

import datetime
from types import SimpleNamespace
from uuid import uuid4

from app.core.domain_types import InvoiceStatus
from app.schemas.invoice import DashboardCards, InvoiceResponse


def test_invoice_response_from_orm_row():
    row = SimpleNamespace(
        id=uuid4(), customer_id="cust-1", amount=15795,
        status="pending", date=datetime.date(2024, 1, 15),
    )
    invoice = InvoiceResponse.model_validate(row)
    assert invoice.status is InvoiceStatus.PENDING
    assert invoice.amount_display == "$157.95"
    assert invoice.model_dump(mode="json")["date"] == "2024-01-15"


def test_dashboard_cards_display_fields():
    cards = DashboardCards(number_of_invoices=2, total_paid=123456, total_pending=0)
    dumped = cards.model_dump()
    assert dumped["total_paid_display"] == "$1,234.56"
    assert dumped["total_pending_display"] == "$0.00"
