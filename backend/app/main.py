"""Name Dictionary API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map DictionaryError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Three error handler layers: DictionaryError (domain), RequestValidationError
      (Pydantic), Exception (catch-all) — never leaks internal details
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import app.infrastructure.database as database
from app.api.error_handlers import register_error_handlers
from app.api.routes import geolocations, health, names
from app.config import get_settings
from app.infrastructure.observability import setup_logging

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
    logger.info("Name Dictionary API started")
    yield
    if database.db_manager:
        await database.db_manager.dispose()
    logger.info("Name Dictionary API shutting down")


app = FastAPI(
    title="Name Dictionary API", version="1.0.0", lifespan=lifespan,
)

# CORS from settings
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes
app.include_router(health.router)
app.include_router(names.router)
app.include_router(geolocations.router)

register_error_handlers(app)
