"""Lista de Tareas API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TareasError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Connection pool initialized on startup via lifespan; a pool that cannot
      connect aborts startup, so the HTTP server never serves without storage
    - Pool closed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: cleaner cleanup
    - Pool stored on app.state and injected through dependencies (no global pool)
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from lista_tareas.api.error_handlers import register_error_handlers
from lista_tareas.api.routes import health, tasks
from lista_tareas.config import get_settings
from lista_tareas.core.errors import DatabaseConnectError
from lista_tareas.infrastructure.database import ConnectionPool
from lista_tareas.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    pool = ConnectionPool.from_settings(settings)
    try:
        await pool.initialize()
    except DatabaseConnectError:
        logger.critical("Initial database connection failed; HTTP server will not start")
        raise
    if settings.db_auto_create_schema:
        await pool.create_schema()
    app.state.pool = pool
    logger.info("Lista de Tareas API started")
    try:
        yield
    finally:
        logger.info("Lista de Tareas API shutting down")
        await pool.shutdown()
        app.state.pool = None


app = FastAPI(
    title="Lista de Tareas API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(tasks.router)

register_error_handlers(app)

# Static front end — mounted AFTER API routes so /api/* takes precedence
if os.path.isdir(settings.static_dir):
    app.mount(
        "/", StaticFiles(directory=settings.static_dir, html=True), name="static",
    )
