"""Workflow Tracker API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TrackerError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database, cache and event publisher created on startup and closed on
      shutdown via the lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Cache and publisher stored on app.state and injected through dependencies,
      never imported as module globals by services
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tracker.api.error_handlers import register_error_handlers
from tracker.api.routes import health, projects, stats, tasks, users
from tracker.config import get_settings
from tracker.infrastructure.cache import build_cache
from tracker.infrastructure.database import close_db, init_db
from tracker.infrastructure.events import build_event_publisher
from tracker.infrastructure.observability import setup_logging

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
    app.state.cache = build_cache(settings.redis_url)
    app.state.event_publisher = await build_event_publisher(
        settings.kafka_bootstrap_servers, settings.kafka_client_id,
    )
    logger.info("Workflow Tracker API started")
    yield
    logger.info("Workflow Tracker API shutting down")
    await app.state.event_publisher.close()
    await app.state.cache.close()
    await close_db()


app = FastAPI(
    title="Workflow Tracker API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(users.router)
app.include_router(projects.router)
app.include_router(tasks.router)
app.include_router(stats.router)

register_error_handlers(app)
