"""Invoice Form Enforcement — pure validation of raw invoice form submissions.

Invariants:
    - Each check_* function returns an error message (str) or None
    - validate_invoice_form accumulates ALL field errors, never just the first
    - Either every field passes (ValidInvoiceForm) or nothing does (FieldErrors)
    - `id` and `date` are never read from the submission
    - No IO, no exceptions for invalid input

Design Decisions:
    - Explicit per-field checks over a declarative schema library: invalid input
      is data, not an exception, and each rule is testable on its own
    - Amount parsed with an explicit numeric-literal pattern before Decimal():
      Decimal alone would accept "NaN", "Infinity" and "1_000"
"""

import re
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation

from acme_dashboard.core.action_outcomes import (
    FieldErrors, InvoiceFormResult, ValidInvoiceForm,
)
from acme_dashboard.core.domain_types import CustomerId, FormMode, InvoiceStatus
from acme_dashboard.core.money import MAX_AMOUNT, to_cents

CUSTOMER_MESSAGE = "Please select a customer."
AMOUNT_MESSAGE = "Please enter an amount greater than $0."
AMOUNT_TOO_LARGE_MESSAGE = "Please enter a smaller amount."
STATUS_MESSAGE = "Please select an invoice status."

_NUMBER = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*$")


def parse_amount(raw: object) -> Decimal | None:
    """Coerce a submitted amount to Decimal, or None if it is not a number."""
    if isinstance(raw, (int, Decimal)) and not isinstance(raw, bool):
        return Decimal(raw)
    if not isinstance(raw, str) or not _NUMBER.match(raw):
        return None
    try:
        return Decimal(raw.strip())
    except InvalidOperation:
        return None


def check_customer_id(raw: object) -> str | None:
    if not isinstance(raw, str) or not raw.strip():
        return CUSTOMER_MESSAGE
    return None


def check_amount(raw: object) -> str | None:
    amount = parse_amount(raw)
    if amount is None or not amount.is_finite() or amount <= 0:
        return AMOUNT_MESSAGE
    if amount > MAX_AMOUNT:
        return AMOUNT_TOO_LARGE_MESSAGE
    # 0.004 is "greater than $0" but would be stored as zero cents
    if to_cents(amount) == 0:
        return AMOUNT_MESSAGE
    return None


def check_status(raw: object) -> str | None:
    if not isinstance(raw, str) or raw not in {s.value for s in InvoiceStatus}:
        return STATUS_MESSAGE
    return None


_FIELD_CHECKS = (
    ("customerId", check_customer_id),
    ("amount", check_amount),
    ("status", check_status),
)


def collect_field_errors(form: Mapping[str, object]) -> dict[str, list[str]]:
    """Run every field check and group failures by field name."""
    errors: dict[str, list[str]] = {}
    for name, check in _FIELD_CHECKS:
        message = check(form.get(name))
        if message:
            errors.setdefault(name, []).append(message)
    return errors


def validate_invoice_form(
    form: Mapping[str, object], mode: FormMode,
) -> InvoiceFormResult:
    """Validate and normalize an invoice form for the given mutation."""
    errors = collect_field_errors(form)
    if errors:
        return FieldErrors(errors=errors, message=mode.failure_summary)
    return ValidInvoiceForm(
        customer_id=CustomerId(str(form["customerId"]).strip()),
        amount=parse_amount(form["amount"]),
        status=InvoiceStatus(form["status"]),
    )
