"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - InvoiceId, CustomerId, UserId wrap str — ids are opaque UUID text
    - Cents is always an integer count of minor currency units
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

InvoiceId = NewType("InvoiceId", str)
CustomerId = NewType("CustomerId", str)
UserId = NewType("UserId", str)


# ─── Value Types ─────────────────────────────────────────────────

Cents = NewType("Cents", int)


# ─── Routes ──────────────────────────────────────────────────────

DASHBOARD_PATH = "/dashboard"
INVOICES_PATH = "/dashboard/invoices"
CUSTOMERS_PATH = "/dashboard/customers"
LOGIN_PATH = "/login"


# ─── Enums ───────────────────────────────────────────────────────

class InvoiceStatus(str, Enum):
    """Invoice payment states — maps to DB `status` column."""
    PENDING = "pending"
    PAID = "paid"


class FormMode(str, Enum):
    """Which mutation a submitted invoice form feeds."""
    CREATE = "create"
    UPDATE = "update"

    @property
    def failure_summary(self) -> str:
        verb = "Create" if self is FormMode.CREATE else "Update"
        return f"Missing Fields. Failed to {verb} Invoice."


class AuthFailureKind(str, Enum):
    """Failure kinds raised by the identity layer."""
    CREDENTIALS_SIGNIN = "CredentialsSignin"
    CALLBACK_ROUTE_ERROR = "CallbackRouteError"
    INVALID_PROVIDER = "InvalidProvider"
