"""Artist Registry API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map RegistryError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database pool created on startup and disposed on shutdown via lifespan
    - Tables are NOT created at startup; repositories provision them on first write

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from artist_registry.api.error_handlers import register_error_handlers
from artist_registry.api.routes import admin, artists, health, songs, users
from artist_registry.config import get_settings
from artist_registry.infrastructure.database import init_db
from artist_registry.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Artist Registry API started")
    yield
    await manager.dispose()
    logger.info("Artist Registry API shutting down")


app = FastAPI(
    title="Artist Registry API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(admin.router)
app.include_router(users.router)
app.include_router(artists.router)
app.include_router(songs.router)

register_error_handlers(app)


@app.get("/")
async def root():
    return {"data": "Artist Management System Backend"}
