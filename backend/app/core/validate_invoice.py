"""Invoice Form Validation — turns raw form fields into a ValidationResult.

Invariants:
    - Pure: no IO, no async, no DB, no side effects
    - Every field is checked independently; all violations are collected
    - Error map keys are the form field names (customerId, amount, status)
    - customerId is returned trimmed; whitespace-only counts as missing
    - id and date are never read from input (server-assigned)
    - amount stays in major units here; minor-unit conversion lives in core/money.py

Design Decisions:
    - Pydantic model with before-validators over hand-written checks: one
      ValidationError carries every field failure at once
    - PydanticCustomError keeps messages verbatim (ValueError would prefix
      "Value error, ")
    - Returns Valid/Invalid values instead of raising: callers branch on the
      result type, keeping the error path identical to the success path
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from app.core.domain_types import InvoiceStatus

CUSTOMER_REQUIRED = "Please select a customer"
AMOUNT_NOT_POSITIVE = "Please enter an amount greater than $0."
STATUS_INVALID = "Please select an invoice status"

_STATUS_VALUES = tuple(s.value for s in InvoiceStatus)
_FORM_FIELD_NAMES = {"customer_id": "customerId"}


class InvoiceForm(BaseModel):
    """Normalized invoice fields accepted by create and update."""

    model_config = ConfigDict(
        populate_by_name=True, validate_default=True, frozen=True,
    )

    customer_id: str = Field(None, alias="customerId")
    amount: Decimal = Field(None)
    status: InvoiceStatus = Field(None)

    @field_validator("customer_id", mode="before")
    @classmethod
    def require_customer(cls, v: Any) -> str:
        if not isinstance(v, str) or not v.strip():
            raise PydanticCustomError("customer_required", CUSTOMER_REQUIRED)
        return v.strip()

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount(cls, v: Any) -> Decimal:
        return coerce_amount(v)

    @field_validator("amount")
    @classmethod
    def require_positive_amount(cls, v: Decimal) -> Decimal:
        if not v > 0:
            raise PydanticCustomError("amount_not_positive", AMOUNT_NOT_POSITIVE)
        return v

    @field_validator("status", mode="before")
    @classmethod
    def require_known_status(cls, v: Any) -> str:
        # tuple membership compares by ==, so str-enum members match too
        if not isinstance(v, str) or v not in _STATUS_VALUES:
            raise PydanticCustomError("status_invalid", STATUS_INVALID)
        return v


@dataclass(frozen=True)
class Valid:
    fields: InvoiceForm


@dataclass(frozen=True)
class Invalid:
    errors: dict[str, list[str]]
    message: str = "Missing Fields."


ValidationResult = Valid | Invalid


def coerce_amount(raw: Any) -> Decimal:
    """Coerce a raw form value to a Decimal; empty or unparseable input is 0."""
    if raw is None or isinstance(raw, bool):
        return Decimal(0)
    if isinstance(raw, (int, float, Decimal)):
        candidate = Decimal(str(raw))
    elif isinstance(raw, str):
        text = raw.strip()
        if not text:
            return Decimal(0)
        try:
            candidate = Decimal(text)
        except InvalidOperation:
            return Decimal(0)
    else:
        return Decimal(0)
    return candidate if candidate.is_finite() else Decimal(0)


def validate_invoice_form(raw: Mapping[str, Any]) -> ValidationResult:
    """Validate raw create/update form fields."""
    try:
        form = InvoiceForm.model_validate({
            "customerId": raw.get("customerId"),
            "amount": raw.get("amount"),
            "status": raw.get("status"),
        })
    except ValidationError as e:
        return Invalid(errors=_flatten_errors(e))
    return Valid(fields=form)


def _flatten_errors(exc: ValidationError) -> dict[str, list[str]]:
    """Group pydantic errors by form field name, preserving order."""
    errors: dict[str, list[str]] = {}
    for err in exc.errors():
        name = str(err["loc"][0]) if err["loc"] else "form"
        name = _FORM_FIELD_NAMES.get(name, name)
        errors.setdefault(name, []).append(err["msg"])
    return errors
