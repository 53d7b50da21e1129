"""Invoice Actions — form submission → validation → SQL mutation → cache invalidation → redirect.

Invariants:
    - Invalid forms return FieldErrors and never reach the store
    - Each action issues at most one store call (one SQL statement)
    - DatabaseError is caught here and returned as ActionError; never re-raised
    - Cache invalidation happens only after the store call returned (committed)
    - Every page reading invoices is invalidated: the listing and its nested
      routes, customers (totals) and the overview (cards, latest), the last by
      exact path only
    - Redirect is returned last; nothing is sequenced after it
    - Delete of a missing row is success (idempotent delete)

Design Decisions:
    - Store and cache passed in as Protocol handles: routes inject SQL-backed
      instances, tests inject fakes
    - `today` injectable so invoice dates are deterministic under test
    - Update with zero rows affected is logged, not surfaced: last writer wins,
      there is no existence check before the statement
"""

import logging
from collections.abc import Mapping
from datetime import date, datetime, timezone

from acme_dashboard.core.action_outcomes import (
    ActionError, ActionMessage, ActionResult, FieldErrors, Redirect,
)
from acme_dashboard.core.domain_types import (
    CUSTOMERS_PATH, DASHBOARD_PATH, FormMode, INVOICES_PATH, InvoiceId,
)
from acme_dashboard.core.enforce_invoice_form import validate_invoice_form
from acme_dashboard.core.errors import DatabaseError
from acme_dashboard.core.money import to_cents
from acme_dashboard.core.repository_protocols import (
    InvoiceChanges, InvoiceStore, NewInvoice, PathInvalidator,
)

logger = logging.getLogger(__name__)

CREATE_FAILED_MESSAGE = "Database Error: Failed to Create Invoice."
UPDATE_FAILED_MESSAGE = "Database Error: Failed to Update Invoice."
DELETE_FAILED_MESSAGE = "Database Error: Failed to Delete Invoice."
DELETED_MESSAGE = "Deleted Invoice."

# Pages whose data reads the invoices table, as (path, nested)
DEPENDENT_PAGES = (
    (INVOICES_PATH, True),
    (CUSTOMERS_PATH, True),
    (DASHBOARD_PATH, False),
)


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def invalidate_dependents(cache: PathInvalidator) -> None:
    for path, nested in DEPENDENT_PAGES:
        cache.invalidate(path, nested=nested)


async def create_invoice(
    store: InvoiceStore,
    cache: PathInvalidator,
    form: Mapping[str, object],
    today: date | None = None,
) -> ActionResult:
    """Validate a create form and insert one invoice."""
    validated = validate_invoice_form(form, FormMode.CREATE)
    if isinstance(validated, FieldErrors):
        logger.info(
            "Invoice create rejected by validation",
            extra={"fields": sorted(validated.errors)},
        )
        return validated

    new_invoice = NewInvoice(
        customer_id=validated.customer_id,
        amount=to_cents(validated.amount),
        status=validated.status,
        date=today or utc_today(),
    )
    try:
        await store.insert(new_invoice)
    except DatabaseError as e:
        logger.error(
            f"Failed to create invoice: {e.message}",
            extra={"error_code": e.code},
        )
        return ActionError(CREATE_FAILED_MESSAGE)

    invalidate_dependents(cache)
    return Redirect(INVOICES_PATH)


async def update_invoice(
    store: InvoiceStore,
    cache: PathInvalidator,
    invoice_id: InvoiceId,
    form: Mapping[str, object],
) -> ActionResult:
    """Validate an edit form and update customer, amount and status of one invoice."""
    validated = validate_invoice_form(form, FormMode.UPDATE)
    if isinstance(validated, FieldErrors):
        logger.info(
            "Invoice update rejected by validation",
            extra={"invoice_id": invoice_id, "fields": sorted(validated.errors)},
        )
        return validated

    changes = InvoiceChanges(
        customer_id=validated.customer_id,
        amount=to_cents(validated.amount),
        status=validated.status,
    )
    try:
        updated = await store.update(invoice_id, changes)
    except DatabaseError as e:
        logger.error(
            f"Failed to update invoice: {e.message}",
            extra={"invoice_id": invoice_id, "error_code": e.code},
        )
        return ActionError(UPDATE_FAILED_MESSAGE)

    if updated == 0:
        logger.warning(
            "Invoice update matched no rows", extra={"invoice_id": invoice_id},
        )
    invalidate_dependents(cache)
    return Redirect(INVOICES_PATH)


async def delete_invoice(
    store: InvoiceStore,
    cache: PathInvalidator,
    invoice_id: InvoiceId,
) -> ActionResult:
    """Delete one invoice. Reports back instead of redirecting."""
    try:
        deleted = await store.delete(invoice_id)
    except DatabaseError as e:
        logger.error(
            f"Failed to delete invoice: {e.message}",
            extra={"invoice_id": invoice_id, "error_code": e.code},
        )
        return ActionError(DELETE_FAILED_MESSAGE)

    if deleted == 0:
        logger.info(
            "Invoice already absent on delete", extra={"invoice_id": invoice_id},
        )
    invalidate_dependents(cache)
    return ActionMessage(DELETED_MESSAGE)
