# taskboard/api/health.py
"""
Health check endpoints.
"""
from datetime import datetime, timezone
from fastapi import APIRouter, Request

from taskboard import db
from taskboard.core.config import settings

router = APIRouter(tags=["Health"])


@router.get("/healthz")
async def healthz():
    """Simple health check."""
    return {"ok": True, "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get("/api/health")
async def api_health(request: Request):
    """API health check, including the document store backend."""
    backend = settings.database.backend
    store_ready = getattr(request.app.state, "store", None) is not None
    payload = {
        "status": "healthy",
        "store": backend,
        "storeReady": store_ready,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if backend == "mongo":
        payload["database"] = "connected" if db.is_connected() else "unavailable"
        if db.get_connection_error():
            payload["databaseError"] = db.get_connection_error()
    return payload
