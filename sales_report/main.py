"""Sales Report Records API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map SalesReportError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Storage initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: cleaner cleanup of the database engine
    - Both surfaces (REST routes and /commands) share the same services and errors
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sales_report.api.error_handlers import register_error_handlers
from sales_report.api.routes import categories, commands, companies, customers, health
from sales_report.config import get_settings
from sales_report.infrastructure import database
from sales_report.infrastructure.observability import setup_logging
from sales_report.infrastructure.storage_registry import init_storage

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    await init_storage(settings)
    logger.info("Sales Report Records API started")
    yield
    logger.info("Sales Report Records API shutting down")
    if database.db_manager is not None:
        await database.db_manager.dispose()


app = FastAPI(
    title="Sales Report Records API", version="0.1.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(companies.router)
app.include_router(categories.router)
app.include_router(customers.router)
app.include_router(commands.router)

register_error_handlers(app)
