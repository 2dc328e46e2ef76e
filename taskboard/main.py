# taskboard/main.py
"""
Taskboard Backend
"""
import uvicorn
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse

# Rate limiting
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from taskboard import __version__
from taskboard.core.config import settings
from taskboard.core.exceptions import (
    AuthError,
    PersistenceError,
    RetrievalError,
    TaskboardError,
    TaskNotFoundError,
    ValidationError,
)
from taskboard.core.logging import log, log_section
from taskboard.lib.monitoring import register_monitoring
from taskboard.store.base import DocumentStore


async def _open_store() -> DocumentStore:
    if settings.database.backend == "memory":
        from taskboard.store.memory import InMemoryDocumentStore
        log("STORE", "Using in-memory document store (data is lost on restart)")
        return InMemoryDocumentStore()

    from taskboard.db import connect_db
    from taskboard.store.mongo import BeanieDocumentStore
    await connect_db()
    return BeanieDocumentStore()


# ---------------------------------------------------------------------------
# LIFESPAN
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    log_section("STORE", f"Taskboard {__version__} starting ({settings.database.backend} store)")
    app.state.store = await _open_store()

    yield

    log("STORE", "🔌 Shutting down...")
    await app.state.store.close()
    if settings.database.backend == "mongo":
        from taskboard.db import disconnect_db
        await disconnect_db()


# ---------------------------------------------------------------------------
# APP INITIALIZATION
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Taskboard",
    version=__version__,
    lifespan=lifespan,
)

# Monitoring
register_monitoring(app)

cors_origins = settings.cors_origins or ["*"]
if cors_origins == ["*"] and not settings.debug:
    log("API", "⚠️ [CORS] Using allow_origins=['*'] - consider setting CORS_ORIGINS in production")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=cors_origins != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Rate limiting, per client address
limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)


# ---------------------------------------------------------------------------
# ERRORS
# ---------------------------------------------------------------------------

ERROR_STATUS = {
    AuthError: 401,
    TaskNotFoundError: 404,
    ValidationError: 422,
    PersistenceError: 502,
    RetrievalError: 503,
}


def status_for(exc: TaskboardError) -> int:
    for error_type, status_code in ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return status_code
    return 500


@app.exception_handler(TaskboardError)
async def taskboard_error_handler(request: Request, exc: TaskboardError):
    status_code = status_for(exc)
    if status_code >= 500:
        log("API", f"❌ {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": exc.code, "message": exc.message}},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed query or body, reported in the same envelope as ValidationError."""
    message = "Invalid request"
    errors = exc.errors()
    if errors:
        location = ".".join(str(part) for part in errors[0].get("loc", ()))
        message = f"{location}: {errors[0].get('msg', message)}"
    return JSONResponse(
        status_code=422,
        content={"error": {"code": ValidationError.code, "message": message}},
    )


# ---------------------------------------------------------------------------
# API ROUTES
# ---------------------------------------------------------------------------

from taskboard.api import health, session, tasks  # noqa: E402

app.include_router(health.router)
app.include_router(session.router)
app.include_router(tasks.router)


# ---------------------------------------------------------------------------
# RUN
# ---------------------------------------------------------------------------

def run() -> None:
    uvicorn.run(
        "taskboard.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
