"""
main.py — Event Store API entry point

The FastAPI application instance lives here. All middleware, routers,
exception handlers and startup/shutdown events are registered in this file.

Usage
-----
Development (auto-reloads on file save):
    cd backend
    python run_dev.py

Production (single worker, one shared database connection):
    cd backend
    gunicorn api.main:app -c gunicorn.conf.py

Docs (once running):
    http://localhost:3000/docs    — Swagger UI (interactive)
    http://localhost:3000/redoc   — ReDoc (read-only)
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from api.dependencies import get_store
from api.routers.events import router as events_router
from api.routers.health import VERSION, router as health_router
from core.config import settings
from core.logging import configure_logging
from core.middleware import RequestIDMiddleware, TimingMiddleware
from db.store import StoreError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Lifespan — startup and shutdown hooks
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    # ── Startup ────────────────────────────────────────────────────────────────
    configure_logging(settings.log_level)
    logger.info(
        "Event Store API starting",
        extra={
            "environment": settings.environment,
            "version": VERSION,
            "port": settings.port,
            "db_host": settings.db_host,
            "db_database": settings.db_database,
            "allowed_origins": settings.allowed_origins,
        },
    )
    # A failed connect is logged inside connect(); the API keeps serving and
    # requests fail individually until the database is reachable.
    store = app.dependency_overrides.get(get_store, get_store)()
    store.connect()
    yield
    # ── Shutdown ───────────────────────────────────────────────────────────────
    store.engine.dispose()
    logger.info("Event Store API shutting down")


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Event Store API",
    description="Create, list, update and delete sporting events and their winners.",
    version=VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


# ---------------------------------------------------------------------------
# Middleware  (last added = outermost)
#
#   Request:  CORS → RequestID → Timing → route handler
#   Response: route handler → Timing → RequestID → CORS
# ---------------------------------------------------------------------------

app.add_middleware(TimingMiddleware)
app.add_middleware(RequestIDMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Exception handlers — every error body is {"error": <message>}
# ---------------------------------------------------------------------------

@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Request bodies that are not a JSON object of strings: 400."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = f"Invalid request: {location}: {first.get('msg', 'invalid value')}"
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(StoreError)
async def store_exception_handler(request: Request, exc: StoreError) -> JSONResponse:
    """Database failures: 500 with the driver's message passed through unchanged."""
    logger.error(
        "database error",
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "method": request.method,
            "path": request.url.path,
            "error": exc.message,
        },
    )
    return JSONResponse(status_code=500, content={"error": exc.message})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions: log the traceback, return clean JSON."""
    logger.error(
        "unhandled exception",
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "method": request.method,
            "path": request.url.path,
            "error": str(exc),
        },
        exc_info=True,
    )
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------

app.include_router(health_router)     # /health, /health/db
app.include_router(events_router)     # /events


@app.get("/", tags=["root"], summary="API root")
def root():
    """Confirms the API is running. Returns service name, version, and docs URL."""
    return {
        "service": "Event Store API",
        "version": VERSION,
        "docs": "/docs",
    }
