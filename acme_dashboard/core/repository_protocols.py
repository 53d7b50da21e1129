"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection (fakes in tests)

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Store methods raise DatabaseError on any data-layer failure; they never
      return partial state
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from typing import Protocol

from acme_dashboard.core.domain_types import (
    Cents, CustomerId, InvoiceId, InvoiceStatus,
)


@dataclass(frozen=True)
class NewInvoice:
    """Row values for one insert. The store assigns the id."""
    customer_id: CustomerId
    amount: Cents
    status: InvoiceStatus
    date: date


@dataclass(frozen=True)
class InvoiceChanges:
    """The only columns an update may touch."""
    customer_id: CustomerId
    amount: Cents
    status: InvoiceStatus


class InvoiceStore(Protocol):
    """Contract for invoice persistence — one SQL statement per call."""
    async def insert(self, invoice: NewInvoice) -> InvoiceId: ...
    async def update(
        self, invoice_id: InvoiceId, changes: InvoiceChanges,
    ) -> int: ...
    async def delete(self, invoice_id: InvoiceId) -> int: ...


class PathInvalidator(Protocol):
    """Contract for marking cached page data stale."""
    def invalidate(self, path: str, nested: bool = True) -> None: ...


class IdentityVerifier(Protocol):
    """Contract for credential verification — raises AuthenticationError."""
    async def verify(
        self, method: str, credentials: Mapping[str, str],
    ) -> None: ...
