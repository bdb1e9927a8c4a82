"""Invoice ORM — one row per invoice issued to an external customer.

Invariants:
    - id is a UUID primary key assigned at creation, never updated
    - amount is integer cents and strictly positive (CHECK constraint)
    - status is one of pending | paid (CHECK constraint)
    - date is the creation date (UTC calendar day), never updated

Design Decisions:
    - customer_id is a plain string reference, not a foreign key: customers
      live outside this service
    - Constraints duplicated in the DB so a bypassed validator still cannot
      persist a non-positive amount
"""

import uuid
import datetime

from sqlalchemy import CheckConstraint, Date, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base


class Invoice(Base):
    """Invoice entity — mutated only through the invoice pipeline."""
    __tablename__ = "invoices"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_invoices_amount_positive"),
        CheckConstraint(
            "status IN ('pending', 'paid')", name="ck_invoices_status",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    customer_id: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    date: Mapped[datetime.date] = mapped_column(
        Date, nullable=False, index=True,
    )
