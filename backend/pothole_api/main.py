"""Pothole Gateway API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers render every failure as {success: false, error}
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py; this module only wires them
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pothole_api.api.error_handlers import register_error_handlers
from pothole_api.api.routes import (
    budget,
    community,
    health,
    performance,
    reports,
    representatives,
    setup,
    stats,
    weather,
)
from pothole_api.config import get_settings
from pothole_api.infrastructure import database
from pothole_api.infrastructure.observability import setup_logging

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
    logger.info(f"{settings.service_name} {settings.service_version} started")
    yield
    if database.db_manager:
        await database.db_manager.dispose()
    logger.info(f"{settings.service_name} shutting down")


settings = get_settings()
app = FastAPI(
    title="Pothole Gateway API",
    version=settings.service_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(budget.router)
app.include_router(performance.router)
app.include_router(weather.router)
app.include_router(community.router)
app.include_router(reports.router)
app.include_router(representatives.router)
app.include_router(stats.router)
app.include_router(setup.router)

register_error_handlers(app)
