"""Request Dependencies — per-request collaborators injected into routes.

Invariants:
    - Store and credentials provider share the request's AsyncSession (get_db)
    - get_current_user raises LoginRequiredError when the session cookie is
      missing, expired, or forged
    - read_form keeps only text fields; uploads are dropped

Design Decisions:
    - Collaborators resolved through Depends: tests swap them with
      app.dependency_overrides instead of patching modules
"""

from collections.abc import Awaitable, Callable
from typing import TypeVar

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from acme_dashboard.config import Settings, get_settings
from acme_dashboard.core.errors import LoginRequiredError
from acme_dashboard.infrastructure.credentials_provider import CredentialsProvider
from acme_dashboard.infrastructure.database import get_db
from acme_dashboard.infrastructure.invoice_store import SqlInvoiceStore
from acme_dashboard.infrastructure.page_cache import PageCache
from acme_dashboard.infrastructure.session_tokens import SignedInUser, read_session_token

PageT = TypeVar("PageT")


def get_page_cache(request: Request) -> PageCache:
    return request.app.state.page_cache


def get_invoice_store(db: AsyncSession = Depends(get_db)) -> SqlInvoiceStore:
    return SqlInvoiceStore(db)


def get_credentials_provider(
    db: AsyncSession = Depends(get_db),
) -> CredentialsProvider:
    return CredentialsProvider(db)


def get_current_user(
    request: Request, settings: Settings = Depends(get_settings),
) -> SignedInUser:
    token = request.cookies.get(settings.session_cookie_name)
    user = read_session_token(token, settings.auth_secret)
    if user is None:
        callback = request.url.path
        if request.url.query:
            callback = f"{callback}?{request.url.query}"
        raise LoginRequiredError(callback)
    return user


async def read_form(request: Request) -> dict[str, str]:
    form = await request.form()
    return {k: v for k, v in form.items() if isinstance(v, str)}


async def serve_cached(
    cache: PageCache, request: Request, build: Callable[[], Awaitable[PageT]],
) -> PageT:
    """Return cached page data for this path+query, building it on a miss."""
    page = cache.get(request.url.path, request.url.query)
    if page is None:
        page = await build()
        cache.put(request.url.path, request.url.query, page)
    return page
