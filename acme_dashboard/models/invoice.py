"""Invoice ORM — a billed amount owed by one customer.

Invariants:
    - amount is integer cents, never fractional
    - status is 'pending' or 'paid' (InvoiceStatus)
    - date is set once on insert and never updated

Design Decisions:
    - String(36) UUID ids: opaque text keys that behave the same on
      PostgreSQL and the SQLite test database
    - No column default on id: SqlInvoiceStore assigns it on insert
    - status stored as plain String: values guarded by the form validator,
      no DB enum type to migrate
"""

import datetime

from sqlalchemy import Date, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from acme_dashboard.db.base import Base


class Invoice(Base):
    """Invoice entity."""
    __tablename__ = "invoices"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    customer_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("customers.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)

    customer: Mapped["Customer"] = relationship(
        "Customer", back_populates="invoices",
    )
