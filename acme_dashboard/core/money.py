"""Money — conversion between submitted decimal amounts and stored minor units.

Invariants:
    - Stored amounts are integer cents: to_cents(a) == round_half_up(a * 100)
    - from_cents(to_cents(a)) == a for any a with at most two decimal places
    - Amounts never pass through float

Design Decisions:
    - Decimal over float: "12.34" * 100 is exactly 1234, no binary drift
    - ROUND_HALF_UP over Python's default banker's rounding: half a cent rounds
      away from zero, as a cashier would
"""

from decimal import Decimal, ROUND_HALF_UP

from acme_dashboard.core.domain_types import Cents

# Invoices.amount is a 32-bit signed INTEGER column
MAX_CENTS = Cents(2**31 - 1)
MAX_AMOUNT = Decimal(MAX_CENTS) / 100

_ONE = Decimal(1)
_CENT = Decimal("0.01")


def to_cents(amount: Decimal) -> Cents:
    """Convert a dollar amount to integer cents, rounding half up."""
    return Cents(int((amount * 100).quantize(_ONE, rounding=ROUND_HALF_UP)))


def from_cents(cents: int) -> Decimal:
    """Convert stored cents back to a two-place dollar amount."""
    return (Decimal(cents) / 100).quantize(_CENT)


def format_currency(cents: int) -> str:
    """Render cents as US dollars, e.g. 123456 -> '$1,234.56'."""
    dollars = from_cents(cents)
    sign = "-" if dollars < 0 else ""
    return f"{sign}${abs(dollars):,.2f}"
