"""ORM Models — SQLAlchemy declarative models for all dashboard tables.

Invariants:
    - All models inherit from Base (db/base.py)
    - Ids are opaque UUID strings generated on insert

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from acme_dashboard.models.customer import Customer  # noqa: F401
from acme_dashboard.models.invoice import Invoice  # noqa: F401
from acme_dashboard.models.user import User  # noqa: F401
