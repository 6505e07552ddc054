"""Graphwalk API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map GraphwalkError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Logging configured on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Three error handler layers registered from api/error_handlers.py
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from graphwalk.api.error_handlers import register_error_handlers
from graphwalk.infrastructure.observability import setup_logging
from graphwalk.config import get_settings
from graphwalk.api.routes import (
    health, ui_strings, graph_lifecycle, graph_editing, traversal_stream,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info("Graphwalk API started (step delay %d ms)", settings.step_delay_ms)
    yield
    for state in graph_lifecycle._sessions.values():
        state.request_cancel()
    logger.info("Graphwalk API shutting down")


app = FastAPI(
    title="Graphwalk API", version="1.0.0", lifespan=lifespan,
)

# CORS — configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(ui_strings.router)
app.include_router(graph_lifecycle.router)
app.include_router(graph_editing.router)
app.include_router(traversal_stream.router)

register_error_handlers(app)

# Static files — serves the front-end build in production
# Mounted AFTER API routes so /api/v1/* takes precedence
if os.path.isdir("static"):
    app.mount("/", StaticFiles(directory="static", html=True), name="static")
