"""Overview Route — dashboard landing page data.

Invariants:
    - Requires a signed-in user
    - Served through the page cache under "/dashboard"
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from acme_dashboard.api.dependencies import get_current_user, get_page_cache, serve_cached
from acme_dashboard.config import Settings, get_settings
from acme_dashboard.infrastructure.database import get_db
from acme_dashboard.infrastructure.page_cache import PageCache
from acme_dashboard.schemas.invoice import OverviewPage
from acme_dashboard.services import dashboard_data

router = APIRouter(tags=["overview"], dependencies=[Depends(get_current_user)])


@router.get("/dashboard", response_model=OverviewPage)
async def overview_page(
    request: Request,
    db: AsyncSession = Depends(get_db),
    cache: PageCache = Depends(get_page_cache),
    settings: Settings = Depends(get_settings),
):
    """Card totals and latest invoices."""
    return await serve_cached(
        cache, request,
        lambda: dashboard_data.fetch_overview(db, settings.latest_invoices_count),
    )
