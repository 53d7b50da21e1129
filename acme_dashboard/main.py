"""Acme Dashboard API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map DashboardError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager
    - One PageCache per app, created with the app (not in lifespan) so it exists
      even when a test transport skips lifespan events

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Four error handler layers (api/error_handlers.py) — never leaks internal details
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import acme_dashboard.infrastructure.database as database
from acme_dashboard.api.error_handlers import register_error_handlers
from acme_dashboard.api.routes import auth, customers, health, invoices, overview
from acme_dashboard.config import get_settings
from acme_dashboard.infrastructure.observability import setup_logging
from acme_dashboard.infrastructure.page_cache import PageCache

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Acme Dashboard API started")
    yield
    logger.info("Acme Dashboard API shutting down")
    if database.db_manager:
        await database.db_manager.dispose()


app = FastAPI(
    title="Acme Dashboard API", version="1.0.0", lifespan=lifespan,
)
settings = get_settings()
app.state.page_cache = PageCache(settings.page_cache_max_entries)

# CORS — configured from settings, not hardcoded
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(overview.router)
app.include_router(invoices.router)
app.include_router(customers.router)

register_error_handlers(app)
