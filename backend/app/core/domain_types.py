"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - InvoiceId wraps UUIDs — never use bare UUID in domain logic
    - Cents is always an integer count of minor currency units
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and compare equal to the raw form values
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

InvoiceId = NewType("InvoiceId", UUID)


# ─── Value Types ─────────────────────────────────────────────────

Cents = NewType("Cents", int)


# ─── Paths ───────────────────────────────────────────────────────

DASHBOARD_PATH = "/dashboard"
INVOICES_PATH = "/dashboard/invoices"
LOGIN_PATH = "/login"


# ─── Enums ───────────────────────────────────────────────────────

class InvoiceStatus(str, Enum):
    """Invoice payment states — maps to DB `status` column."""
    PENDING = "pending"
    PAID = "paid"


class AuthFailureKind(str, Enum):
    """Categorized sign-in failures surfaced to the login form."""
    CREDENTIALS_SIGNIN = "credentials_signin"
    UNKNOWN = "unknown"


class GateAction(str, Enum):
    """Outcome of the per-request authorization decision."""
    ALLOW = "allow"
    DENY = "deny"
    REDIRECT = "redirect"


# ─── Identities ──────────────────────────────────────────────────

@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity attached to a session after a successful sign-in."""
    id: str
    email: str
    name: str
