"""Invoice Routes — invoice page data and the create/update/delete form actions.

Invariants:
    - Every route requires a signed-in user (router-level dependency)
    - GET page data served through the page cache, keyed by path + query
    - POST/DELETE handlers delegate to services/invoice_actions.py and return
      whatever the action decided via to_response()

Design Decisions:
    - Form actions read raw form fields (not a Pydantic body): validation
      failures are returned as form state, not as 400 request errors
    - Update is POST /{id}/edit so plain HTML forms can submit it
"""

import logging

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from acme_dashboard.api.action_responses import to_response
from acme_dashboard.api.dependencies import (
    get_current_user, get_invoice_store, get_page_cache, read_form, serve_cached,
)
from acme_dashboard.config import Settings, get_settings
from acme_dashboard.core.domain_types import InvoiceId
from acme_dashboard.infrastructure.database import get_db
from acme_dashboard.infrastructure.invoice_store import SqlInvoiceStore
from acme_dashboard.infrastructure.page_cache import PageCache
from acme_dashboard.schemas.invoice import (
    CreateInvoicePage, EditInvoicePage, InvoicesPage,
)
from acme_dashboard.services import dashboard_data, invoice_actions

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/dashboard/invoices", tags=["invoices"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=InvoicesPage)
async def invoices_page(
    request: Request,
    query: str = "",
    page: int = Query(1, ge=1),
    db: AsyncSession = Depends(get_db),
    cache: PageCache = Depends(get_page_cache),
    settings: Settings = Depends(get_settings),
):
    """Filtered, paginated invoices table."""
    return await serve_cached(
        cache, request,
        lambda: dashboard_data.fetch_filtered_invoices(
            db, query, page, settings.invoices_per_page,
        ),
    )


@router.get("/create", response_model=CreateInvoicePage)
async def create_invoice_page(
    request: Request,
    db: AsyncSession = Depends(get_db),
    cache: PageCache = Depends(get_page_cache),
):
    """Customers for the create form."""

    async def build() -> CreateInvoicePage:
        return CreateInvoicePage(
            customers=await dashboard_data.fetch_customers(db),
        )

    return await serve_cached(cache, request, build)


@router.get("/{invoice_id}/edit", response_model=EditInvoicePage)
async def edit_invoice_page(
    invoice_id: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    cache: PageCache = Depends(get_page_cache),
):
    """Existing invoice plus customers for the edit form. 404 if missing."""

    async def build() -> EditInvoicePage:
        invoice = await dashboard_data.fetch_invoice_by_id(db, InvoiceId(invoice_id))
        customers = await dashboard_data.fetch_customers(db)
        return EditInvoicePage(invoice=invoice, customers=customers)

    return await serve_cached(cache, request, build)


@router.post("")
async def create_invoice(
    form: dict[str, str] = Depends(read_form),
    store: SqlInvoiceStore = Depends(get_invoice_store),
    cache: PageCache = Depends(get_page_cache),
):
    result = await invoice_actions.create_invoice(store, cache, form)
    return to_response(result)


@router.post("/{invoice_id}/edit")
async def update_invoice(
    invoice_id: str,
    form: dict[str, str] = Depends(read_form),
    store: SqlInvoiceStore = Depends(get_invoice_store),
    cache: PageCache = Depends(get_page_cache),
):
    result = await invoice_actions.update_invoice(
        store, cache, InvoiceId(invoice_id), form,
    )
    return to_response(result)


@router.delete("/{invoice_id}")
async def delete_invoice(
    invoice_id: str,
    store: SqlInvoiceStore = Depends(get_invoice_store),
    cache: PageCache = Depends(get_page_cache),
):
    result = await invoice_actions.delete_invoice(
        store, cache, InvoiceId(invoice_id),
    )
    return to_response(result)
