# taskboard/core/__init__.py
"""
Core module - configuration, logging and the error taxonomy.
"""
from .config import settings
from .exceptions import (
    TaskboardError,
    AuthError,
    RetrievalError,
    ValidationError,
    PersistenceError,
    TaskNotFoundError,
)

__all__ = [
    "settings",
    "TaskboardError",
    "AuthError",
    "RetrievalError",
    "ValidationError",
    "PersistenceError",
    "TaskNotFoundError",
]
