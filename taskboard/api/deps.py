# taskboard/api/deps.py
"""
Shared FastAPI dependencies.
"""
from datetime import date as Date
from typing import Optional

from fastapi import Depends, Query, Request
from pydantic import ValidationError as PydanticValidationError

from taskboard.core.config import settings
from taskboard.core.exceptions import RetrievalError, ValidationError
from taskboard.models.schemas import TaskFilters
from taskboard.store.base import DocumentStore
from taskboard.tasks.filters import resolve_timezone
from taskboard.tasks.repository import TaskRepository


def get_store(request: Request) -> DocumentStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise RetrievalError("Task store is not available")
    return store


def get_repository(store: DocumentStore = Depends(get_store)) -> TaskRepository:
    return TaskRepository(
        store,
        tz=resolve_timezone(settings.tasks.timezone),
        default_category=settings.tasks.default_category,
    )


def get_filters(
    date: Optional[Date] = Query(None, description="Only tasks created on this day"),
    status: Optional[str] = Query(None, description="not started | started | completed"),
    category: Optional[str] = Query(None),
) -> TaskFilters:
    try:
        return TaskFilters(date=date, status=status, category=category)
    except PydanticValidationError as e:
        raise ValidationError("status", f"Invalid task status: {status!r}") from e
