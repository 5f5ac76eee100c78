"""api/routers/health.py — Health check endpoints.

Routes:
    GET /health        Liveness check — returns env, version, timestamp
    GET /health/db     Readiness check — verifies the database answers SELECT 1
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.dependencies import get_store
from core.config import settings
from db.store import EventStore, StoreError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

VERSION = "1.0.0"


@router.get("/health", summary="Liveness check")
def health():
    """Returns environment, version, and current UTC timestamp."""
    return {
        "status": "ok",
        "environment": settings.environment,
        "version": VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/health/db", summary="Readiness check")
def health_db(store: EventStore = Depends(get_store)):
    """HTTP 200 when the database answers, HTTP 503 with the driver message when not."""
    try:
        store.ping()
    except StoreError as exc:
        logger.warning("health/db: database unreachable — %s", exc.message)
        return JSONResponse(
            status_code=503,
            content={"status": "error", "db": exc.message},
        )
    logger.debug("health/db: database reachable")
    return {"status": "ok", "db": "connected"}
