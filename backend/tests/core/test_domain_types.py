"""Domain Types — enum values must match the persisted and form strings."""

from app.core.domain_types import InvoiceStatus


def test_invoice_status_values_match_db_check():
    assert {s.value for s in InvoiceStatus} == {"pending", "paid"}


def test_invoice_status_compares_to_raw_string():
    assert InvoiceStatus.PAID == "paid"
