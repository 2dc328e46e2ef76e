# taskboard/api/__init__.py
"""
API module - All route handlers.
"""
from . import health, session, tasks

__all__ = [
    "health",
    "session",
    "tasks",
]
