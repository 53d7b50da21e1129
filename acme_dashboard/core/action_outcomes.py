"""Action Outcomes — tagged results returned by every form action.

Invariants:
    - Every action returns exactly one of Redirect | FieldErrors | ActionError | ActionMessage
    - Redirect is terminal: nothing runs after it is produced
    - FieldErrors always carries at least one field and a summary message
    - to_state() mirrors the form state a client re-renders: {"errors", "message"}

Design Decisions:
    - Navigation as a returned value, not a raised exception: cleanup and error
      handling in the action can never be skipped by a redirect
      (ADR: the HTTP boundary performs the redirect after the action returns)
    - Frozen dataclasses: outcomes are values, safe to compare in tests
"""

from dataclasses import dataclass, field
from decimal import Decimal

from acme_dashboard.core.domain_types import CustomerId, InvoiceStatus


@dataclass(frozen=True)
class Redirect:
    """Navigate the client to `path`."""
    path: str


@dataclass(frozen=True)
class FieldErrors:
    """Per-field validation messages plus a summary for the form."""
    errors: dict[str, list[str]] = field(default_factory=dict)
    message: str = ""

    def to_state(self) -> dict:
        return {"errors": self.errors, "message": self.message}


@dataclass(frozen=True)
class ActionError:
    """A persistence failure converted to a user-facing message."""
    message: str

    def to_state(self) -> dict:
        return {"message": self.message}


@dataclass(frozen=True)
class ActionMessage:
    """A completed action that reports back instead of navigating."""
    message: str

    def to_state(self) -> dict:
        return {"message": self.message}


ActionResult = Redirect | FieldErrors | ActionError | ActionMessage


@dataclass(frozen=True)
class ValidInvoiceForm:
    """Normalized invoice form fields, ready for persistence."""
    customer_id: CustomerId
    amount: Decimal
    status: InvoiceStatus


InvoiceFormResult = ValidInvoiceForm | FieldErrors
