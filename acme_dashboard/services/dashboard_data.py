"""Dashboard Data — read queries behind the overview, invoices and customers pages.

Invariants:
    - Read-only: never writes, never commits
    - Every query runs under guard_db_errors: failures surface as DatabaseError
    - Search terms are bound LIKE patterns with %, _ and \\ escaped
    - Amounts leave this module as formatted currency (listings) or dollars (edit form)

Design Decisions:
    - Queries sequential on one AsyncSession: an AsyncSession does not support
      concurrent statements, and the card queries are cheap aggregates
    - Search is case-insensitive across customer name/email, amount, date and status
"""

import logging

from sqlalchemy import String, case, cast, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from acme_dashboard.core.domain_types import InvoiceId, InvoiceStatus
from acme_dashboard.core.errors import ResourceNotFoundError, ErrorContext
from acme_dashboard.core.formatting import format_date_to_local
from acme_dashboard.core.money import format_currency, from_cents
from acme_dashboard.core.pagination import generate_pagination, total_pages
from acme_dashboard.infrastructure.database import guard_db_errors
from acme_dashboard.models.customer import Customer
from acme_dashboard.models.invoice import Invoice
from acme_dashboard.schemas.customer import CustomerField, CustomerSummary, CustomersPage
from acme_dashboard.schemas.invoice import (
    CardData, InvoiceForm, InvoiceRow, InvoicesPage, LatestInvoice, OverviewPage,
)

logger = logging.getLogger(__name__)


def _like_pattern(query: str) -> str:
    escaped = (
        query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    )
    return f"%{escaped}%"


def _invoice_search(query: str):
    pattern = _like_pattern(query)
    return or_(
        Customer.name.ilike(pattern, escape="\\"),
        Customer.email.ilike(pattern, escape="\\"),
        cast(Invoice.amount, String).ilike(pattern, escape="\\"),
        cast(Invoice.date, String).ilike(pattern, escape="\\"),
        Invoice.status.ilike(pattern, escape="\\"),
    )


def _sum_by_status(status: InvoiceStatus):
    return func.coalesce(
        func.sum(case((Invoice.status == status.value, Invoice.amount), else_=0)),
        0,
    )


async def fetch_customers(db: AsyncSession) -> list[CustomerField]:
    """All customers, by name, for the invoice form's select."""
    async with guard_db_errors(db, "query"):
        result = await db.execute(
            select(Customer.id, Customer.name).order_by(Customer.name),
        )
        rows = result.all()
    return [CustomerField(id=r.id, name=r.name) for r in rows]


async def fetch_filtered_invoices(
    db: AsyncSession, query: str, current_page: int, per_page: int,
) -> InvoicesPage:
    """One page of invoices matching `query`, newest first."""
    search = _invoice_search(query)
    async with guard_db_errors(db, "query"):
        count = await db.scalar(
            select(func.count())
            .select_from(Invoice)
            .join(Customer, Invoice.customer_id == Customer.id)
            .where(search),
        )
        result = await db.execute(
            select(
                Invoice.id, Invoice.customer_id, Invoice.amount,
                Invoice.date, Invoice.status,
                Customer.name, Customer.email, Customer.image_url,
            )
            .join(Customer, Invoice.customer_id == Customer.id)
            .where(search)
            .order_by(Invoice.date.desc(), Invoice.id)
            .limit(per_page)
            .offset((current_page - 1) * per_page),
        )
        rows = result.all()

    pages = total_pages(count or 0, per_page)
    return InvoicesPage(
        invoices=[
            InvoiceRow(
                id=r.id,
                customer_id=r.customer_id,
                name=r.name,
                email=r.email,
                image_url=r.image_url,
                date=r.date,
                formatted_date=format_date_to_local(r.date),
                amount=r.amount,
                formatted_amount=format_currency(r.amount),
                status=r.status,
            )
            for r in rows
        ],
        query=query,
        current_page=current_page,
        total_pages=pages,
        pagination=generate_pagination(current_page, pages),
    )


async def fetch_invoice_by_id(
    db: AsyncSession, invoice_id: InvoiceId,
) -> InvoiceForm:
    """An invoice as the edit form shows it. Raises ResourceNotFoundError."""
    async with guard_db_errors(db, "query"):
        invoice = await db.get(Invoice, invoice_id)
    if invoice is None:
        raise ResourceNotFoundError(
            "Invoice", invoice_id, ErrorContext(invoice_id=invoice_id),
        )
    return InvoiceForm(
        id=invoice.id,
        customer_id=invoice.customer_id,
        amount=float(from_cents(invoice.amount)),
        status=invoice.status,
    )


async def fetch_filtered_customers(
    db: AsyncSession, query: str,
) -> CustomersPage:
    """Customers matching `query` with their invoice count and totals."""
    pattern = _like_pattern(query)
    async with guard_db_errors(db, "query"):
        result = await db.execute(
            select(
                Customer.id, Customer.name, Customer.email, Customer.image_url,
                func.count(Invoice.id).label("total_invoices"),
                _sum_by_status(InvoiceStatus.PENDING).label("total_pending"),
                _sum_by_status(InvoiceStatus.PAID).label("total_paid"),
            )
            .outerjoin(Invoice, Invoice.customer_id == Customer.id)
            .where(or_(
                Customer.name.ilike(pattern, escape="\\"),
                Customer.email.ilike(pattern, escape="\\"),
            ))
            .group_by(
                Customer.id, Customer.name, Customer.email, Customer.image_url,
            )
            .order_by(Customer.name),
        )
        rows = result.all()
    return CustomersPage(
        customers=[
            CustomerSummary(
                id=r.id,
                name=r.name,
                email=r.email,
                image_url=r.image_url,
                total_invoices=r.total_invoices,
                total_pending=format_currency(r.total_pending),
                total_paid=format_currency(r.total_paid),
            )
            for r in rows
        ],
        query=query,
    )


async def fetch_overview(db: AsyncSession, latest: int) -> OverviewPage:
    """Summary cards plus the most recent invoices."""
    async with guard_db_errors(db, "query"):
        invoice_count = await db.scalar(select(func.count(Invoice.id)))
        customer_count = await db.scalar(select(func.count(Customer.id)))
        totals = (await db.execute(
            select(
                _sum_by_status(InvoiceStatus.PAID).label("paid"),
                _sum_by_status(InvoiceStatus.PENDING).label("pending"),
            ),
        )).one()
        result = await db.execute(
            select(
                Invoice.id, Invoice.amount,
                Customer.name, Customer.email, Customer.image_url,
            )
            .join(Customer, Invoice.customer_id == Customer.id)
            .order_by(Invoice.date.desc(), Invoice.id)
            .limit(latest),
        )
        rows = result.all()
    return OverviewPage(
        cards=CardData(
            number_of_invoices=invoice_count or 0,
            number_of_customers=customer_count or 0,
            total_paid_invoices=format_currency(totals.paid),
            total_pending_invoices=format_currency(totals.pending),
        ),
        latest_invoices=[
            LatestInvoice(
                id=r.id,
                name=r.name,
                email=r.email,
                image_url=r.image_url,
                amount=format_currency(r.amount),
            )
            for r in rows
        ],
    )
