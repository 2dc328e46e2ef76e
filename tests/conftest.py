# tests/conftest.py
"""
Shared pytest fixtures for Taskboard tests.

Provides:
- In-memory document store and a repository on a fixed clock (UTC days)
- Seeded tasks for two users
- ASGI client against the FastAPI app
"""
import os

# Must be set before taskboard.core.config builds its settings singleton
os.environ.setdefault("TASKBOARD_STORE", "memory")
os.environ.setdefault("TASKBOARD_AUTH_MODE", "proxy")
os.environ.setdefault("RATE_LIMIT", "10000/minute")

from datetime import datetime, timezone
from typing import Dict

import pytest
import pytest_asyncio
from faker import Faker
from httpx import AsyncClient, ASGITransport

from taskboard.store.memory import InMemoryDocumentStore
from taskboard.tasks.repository import TaskRepository

UTC = timezone.utc
ALICE = "alice-uid"
BOB = "bob-uid"

fake = Faker()


def millis(*args) -> int:
    """Epoch millis for a UTC wall-clock time, e.g. millis(2024, 3, 10, 9, 30)."""
    return int(datetime(*args, tzinfo=UTC).timestamp() * 1000)


def auth_headers(uid: str = ALICE, name: str = "Alice") -> Dict[str, str]:
    return {"X-Forwarded-User": uid, "X-Forwarded-Preferred-Username": name}


class FakeClock:
    """Epoch-millis clock that only moves when told to."""

    def __init__(self, now: int) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int = 1000) -> None:
        self.now += ms


# ═══════════════════════════════════════════════════════
# FIXTURES - Store / Repository
# ═══════════════════════════════════════════════════════

@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def clock():
    return FakeClock(millis(2024, 3, 10, 12, 0))


@pytest.fixture
def repository(store, clock):
    return TaskRepository(store, tz=UTC, clock=clock)


@pytest_asyncio.fixture
async def seeded(store) -> Dict[str, str]:
    """
    Five stored documents, written straight to the store:
    three for Alice, one for Bob, one legacy row for Alice without category.
    """
    rows = {
        "alice_old": {
            "title": "File taxes", "description": "", "status": "completed",
            "createdAt": millis(2024, 3, 8, 9, 0), "userId": ALICE, "category": "Personal",
        },
        "alice_mid": {
            "title": "Quarterly report", "description": "Q1 numbers", "status": "started",
            "createdAt": millis(2024, 3, 9, 23, 59, 59), "userId": ALICE, "category": "Work",
        },
        "alice_new": {
            "title": "Call plumber", "description": "", "status": "not started",
            "createdAt": millis(2024, 3, 10, 0, 0, 0), "userId": ALICE, "category": "Personal",
        },
        "bob_task": {
            "title": "Bob's secret", "description": "", "status": "not started",
            "createdAt": millis(2024, 3, 10, 8, 0), "userId": BOB, "category": "Work",
        },
        "alice_legacy": {
            "title": "Water plants", "status": "not started",
            "createdAt": millis(2024, 3, 9, 7, 0), "userId": ALICE,
        },
    }
    ids = {}
    for name, fields in rows.items():
        ids[name] = await store.create(fields)
    return ids


# ═══════════════════════════════════════════════════════
# FIXTURES - HTTP
# ═══════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def async_client(store, clock):
    """Async HTTP client for testing FastAPI endpoints, backed by the memory store."""
    from taskboard.main import app
    from taskboard.api.deps import get_repository

    app.state.store = store
    app.dependency_overrides[get_repository] = lambda: TaskRepository(store, tz=UTC, clock=clock)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
    app.state.store = None


@pytest.fixture
def client(async_client):
    """Alias for async_client - use either name in tests."""
    return async_client
