"""Money — conversion between major-unit amounts and integer cents.

Invariants:
    - Stored amounts are always integer cents (no float drift)
    - Rounding is half-up, matching how a form total is read by people
    - MAX_STORED_CENTS is the ceiling of the INTEGER amount column
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from app.core.domain_types import Cents

_CENTS_PER_UNIT = Decimal(100)

MAX_STORED_CENTS = 2_147_483_647


def to_minor_units(amount: Decimal) -> Cents:
    """round(amount * 100) as integer cents.

    Raises decimal.InvalidOperation when the result exceeds the decimal
    context precision (28 digits).
    """
    return Cents(int(
        (amount * _CENTS_PER_UNIT).quantize(Decimal(1), rounding=ROUND_HALF_UP),
    ))


def to_storable_cents(amount: Decimal) -> Cents | None:
    """Cents for the amount column, or None when it cannot be stored."""
    try:
        cents = to_minor_units(amount)
    except InvalidOperation:
        return None
    if cents > MAX_STORED_CENTS:
        return None
    return cents


def to_major_units(cents: int) -> Decimal:
    return Decimal(cents) / _CENTS_PER_UNIT


def format_currency(cents: int) -> str:
    """Format cents as a USD string, e.g. 123456 -> '$1,234.56'."""
    major = to_major_units(cents).quantize(Decimal("0.01"))
    sign = "-" if major < 0 else ""
    return f"{sign}${abs(major):,.2f}"
