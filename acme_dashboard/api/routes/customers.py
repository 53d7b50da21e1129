"""Customer Routes — customers page data with invoice totals.

Invariants:
    - Requires a signed-in user
    - Served through the page cache, keyed by path + query
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from acme_dashboard.api.dependencies import get_current_user, get_page_cache, serve_cached
from acme_dashboard.infrastructure.database import get_db
from acme_dashboard.infrastructure.page_cache import PageCache
from acme_dashboard.schemas.customer import CustomersPage
from acme_dashboard.services import dashboard_data

router = APIRouter(
    prefix="/dashboard/customers", tags=["customers"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=CustomersPage)
async def customers_page(
    request: Request,
    query: str = "",
    db: AsyncSession = Depends(get_db),
    cache: PageCache = Depends(get_page_cache),
):
    """Customers matching `query`, with invoice count and totals."""
    return await serve_cached(
        cache, request,
        lambda: dashboard_data.fetch_filtered_customers(db, query),
    )
