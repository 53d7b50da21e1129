"""Customer Schemas — page data for customer listings and invoice form selects."""

from pydantic import BaseModel


class CustomerField(BaseModel):
    """Customer option for the invoice form's customer select."""
    id: str
    name: str


class CustomerSummary(BaseModel):
    """Customer row with invoice totals, as shown on the customers page."""
    id: str
    name: str
    email: str
    image_url: str
    total_invoices: int
    total_pending: str
    total_paid: str


class CustomersPage(BaseModel):
    customers: list[CustomerSummary]
    query: str = ""
