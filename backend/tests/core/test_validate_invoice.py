"""Invoice Form Validation — tests for the pure create/update validator.

Tests cover:
    - Valid input normalizes to customer_id, Decimal amount, InvoiceStatus
    - Each field's violation message, exact text
    - Violations collected across fields, not short-circuited
    - Amount coercion: empty, unparseable, non-finite → 0
    - id and date ignored
"""

from decimal import Decimal

import pytest

from app.core.domain_types import InvoiceStatus
from app.core.validate_invoice import (
    AMOUNT_NOT_POSITIVE,
    CUSTOMER_REQUIRED,
    STATUS_INVALID,
    Invalid,
    Valid,
    coerce_amount,
    validate_invoice_form,
)


def _form(**overrides) -> dict:
    fields = {"customerId": "c1", "amount": "25.50", "status": "pending"}
    fields.update(overrides)
    return fields


# ─── valid input ─────────────────────────────────────────────────

def test_valid_form_normalizes_fields():
    result = validate_invoice_form(_form())
    assert isinstance(result, Valid)
    assert result.fields.customer_id == "c1"
    assert result.fields.amount == Decimal("25.50")
    assert result.fields.status == InvoiceStatus.PENDING


def test_amount_stays_in_major_units():
    result = validate_invoice_form(_form(amount="50"))
    assert result.fields.amount == Decimal("50")


@pytest.mark.parametrize("status", ["pending", "paid"])
def test_known_statuses_never_add_status_error(status):
    result = validate_invoice_form(_form(status=status, customerId=""))
    assert isinstance(result, Invalid)
    assert "status" not in result.errors


def test_id_and_date_are_ignored():
    result = validate_invoice_form(_form(id="forged", date="1999-01-01"))
    assert isinstance(result, Valid)
    assert not hasattr(result.fields, "date")


# ─── customerId ──────────────────────────────────────────────────

@pytest.mark.parametrize("customer_id", ["", "   ", None])
def test_missing_customer_reports_select_customer(customer_id):
    result = validate_invoice_form(_form(customerId=customer_id))
    assert isinstance(result, Invalid)
    assert result.errors["customerId"] == [CUSTOMER_REQUIRED]


def test_absent_customer_key_reports_select_customer():
    fields = _form()
    del fields["customerId"]
    result = validate_invoice_form(fields)
    assert result.errors == {"customerId": ["Please select a customer"]}


def test_empty_customer_with_otherwise_valid_fields():
    result = validate_invoice_form(
        {"customerId": "", "amount": "50", "status": "paid"},
    )
    assert isinstance(result, Invalid)
    assert result.errors == {"customerId": ["Please select a customer"]}


def test_padded_customer_is_trimmed():
    result = validate_invoice_form(_form(customerId="  c1 "))
    assert isinstance(result, Valid)
    assert result.fields.customer_id == "c1"


# ─── amount ──────────────────────────────────────────────────────

@pytest.mark.parametrize("amount", ["0", 0, "abc", "", None, "-5", "NaN", "Infinity"])
def test_non_positive_or_unparseable_amount_rejected(amount):
    result = validate_invoice_form(_form(amount=amount))
    assert isinstance(result, Invalid)
    assert result.errors["amount"] == [
        "Please enter an amount greater than $0.",
    ]


def test_zero_and_garbage_amount_share_message():
    zero = validate_invoice_form(_form(amount=0))
    garbage = validate_invoice_form(_form(amount="abc"))
    assert zero.errors["amount"] == garbage.errors["amount"] == [AMOUNT_NOT_POSITIVE]


def test_tiny_positive_amount_is_valid():
    assert isinstance(validate_invoice_form(_form(amount="0.01")), Valid)


@pytest.mark.parametrize("raw, expected", [
    ("12.5", Decimal("12.5")),
    (" 7 ", Decimal("7")),
    (3, Decimal("3")),
    (1.25, Decimal("1.25")),
    ("", Decimal(0)),
    ("1,000", Decimal(0)),
    (True, Decimal(0)),
    (["1"], Decimal(0)),
    (float("nan"), Decimal(0)),
])
def test_coerce_amount(raw, expected):
    assert coerce_amount(raw) == expected


# ─── status ──────────────────────────────────────────────────────

@pytest.mark.parametrize("status", ["", "PAID", "overdue", None, 1, ["paid"]])
def test_unknown_status_rejected(status):
    result = validate_invoice_form(_form(status=status))
    assert isinstance(result, Invalid)
    assert result.errors["status"] == [STATUS_INVALID]


# ─── collection ──────────────────────────────────────────────────

def test_all_violations_collected():
    result = validate_invoice_form({})
    assert isinstance(result, Invalid)
    assert result.errors == {
        "customerId": [CUSTOMER_REQUIRED],
        "amount": [AMOUNT_NOT_POSITIVE],
        "status": [STATUS_INVALID],
    }
