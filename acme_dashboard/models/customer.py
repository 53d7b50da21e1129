"""Customer ORM — the party an invoice is billed to.

Invariants:
    - Read-only from the form pipeline's perspective
    - Deleting a customer cascades to its invoices at the DB level
"""

import uuid

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from acme_dashboard.db.base import Base


class Customer(Base):
    """Customer entity."""
    __tablename__ = "customers"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4()),
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    image_url: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    invoices: Mapped[list["Invoice"]] = relationship(
        "Invoice", back_populates="customer", passive_deletes=True,
    )
