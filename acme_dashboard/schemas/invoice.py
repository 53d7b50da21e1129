"""Invoice Schemas — page data responses for the invoices pages and overview.

Invariants:
    - Listing amounts are formatted currency strings; form amounts are dollars
    - InvoiceForm.amount is from_cents(stored cents), so 1234 reads back as 12.34

Design Decisions:
    - Page-shaped responses (one model per page): the frontend renders a page from
      a single payload, and the page cache stores exactly what was sent
"""

import datetime
from typing import Literal

from pydantic import BaseModel

from acme_dashboard.schemas.customer import CustomerField


class InvoiceRow(BaseModel):
    """One row of the invoices table, joined with its customer."""
    id: str
    customer_id: str
    name: str
    email: str
    image_url: str
    date: datetime.date
    formatted_date: str
    amount: int
    formatted_amount: str
    status: Literal["pending", "paid"]


class InvoicesPage(BaseModel):
    invoices: list[InvoiceRow]
    query: str = ""
    current_page: int
    total_pages: int
    pagination: list[int | str]


class InvoiceForm(BaseModel):
    """An existing invoice as the edit form needs it."""
    id: str
    customer_id: str
    amount: float
    status: Literal["pending", "paid"]


class CreateInvoicePage(BaseModel):
    customers: list[CustomerField]


class EditInvoicePage(BaseModel):
    invoice: InvoiceForm
    customers: list[CustomerField]


class LatestInvoice(BaseModel):
    id: str
    name: str
    email: str
    image_url: str
    amount: str


class CardData(BaseModel):
    number_of_invoices: int
    number_of_customers: int
    total_paid_invoices: str
    total_pending_invoices: str


class OverviewPage(BaseModel):
    cards: CardData
    latest_invoices: list[LatestInvoice]
