# taskboard/db/__init__.py
"""
Database module.
"""
from typing import Optional

from taskboard.core.config import settings
from taskboard.core.logging import log

# Motor client instance
_client = None
_db = None
_connection_error: Optional[str] = None


async def connect_db():
    """
    Connect to MongoDB and register the task document with Beanie.

    If MongoDB is not available, stores the error for later retrieval
    rather than failing startup. Reads then fail per request.
    """
    global _client, _db, _connection_error
    try:
        from motor.motor_asyncio import AsyncIOMotorClient

        mongo_url = settings.database.mongo_url
        _client = AsyncIOMotorClient(
            mongo_url,
            serverSelectionTimeoutMS=settings.database.server_selection_timeout_ms,
        )

        try:
            _db = _client.get_default_database()
        except Exception:
            _db = _client[settings.database.db_name]

        # Fail fast if MongoDB is not running
        await _client.admin.command("ping")
        log("DB", "✅ Connected to MongoDB")

        from beanie import init_beanie
        from taskboard.models.task import TaskDocument

        await init_beanie(database=_db, document_models=[TaskDocument])
        log("DB", "✅ Beanie ODM initialized")
        _connection_error = None
    except Exception as e:
        error_msg = str(e)
        log("DB", f"⚠️ MongoDB not available: {error_msg}")
        log("DB", f"ℹ️ Task reads will fail until {settings.database.mongo_url} is reachable")
        _client = None
        _db = None
        _connection_error = error_msg


async def disconnect_db():
    """Disconnect from MongoDB."""
    global _client, _db
    if _client:
        _client.close()
        log("DB", "Disconnected from MongoDB")
    _client = None
    _db = None


def is_connected() -> bool:
    """Check if database is connected."""
    return _db is not None


def get_connection_error() -> Optional[str]:
    """Get connection error message if connection failed."""
    return _connection_error
