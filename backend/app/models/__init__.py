"""ORM Models — SQLAlchemy declarative models for persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before
      create_all or alembic autogenerate runs
"""

from app.models.invoice import Invoice  # noqa: F401
from app.models.user import User  # noqa: F401
