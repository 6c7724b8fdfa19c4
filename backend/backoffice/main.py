"""Backoffice API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly, one router per resource
    - Every resource router uses GuardedRoute (api/routing.py) as its handler boundary
    - Global error handlers map BackofficeError → {"error", "code"} JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers extracted to api/error_handlers.py
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backoffice.api.error_handlers import register_error_handlers
from backoffice.api.routes import (
    customers, employees, expenses, files, health, investments, orders, products,
)
from backoffice.config import get_settings
from backoffice.infrastructure.database import close_db, init_db
from backoffice.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Backoffice API started")
    yield
    await close_db()
    logger.info("Backoffice API shut down")


app = FastAPI(title="Backoffice API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "PATCH"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(customers.router)
app.include_router(orders.router)
app.include_router(products.router)
app.include_router(employees.router)
app.include_router(expenses.router)
app.include_router(investments.router)
app.include_router(files.router)

register_error_handlers(app)
