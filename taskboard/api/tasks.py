# taskboard/api/tasks.py
"""
Task routes.

Every mutation writes to the store and then answers with a fresh full read
of the caller's list (same filter query parameters as GET), so the client
never patches its list locally.
"""
from typing import Optional

from fastapi import APIRouter, Depends, status

from taskboard.auth.dependencies import get_identity
from taskboard.auth.identity import Identity
from taskboard.core.config import settings
from taskboard.core.exceptions import TaskNotFoundError
from taskboard.core.logging import log
from taskboard.models.schemas import (
    StatusOption,
    TaskCreate,
    TaskFieldsUpdate,
    TaskFilters,
    TaskListResponse,
    TaskOptions,
    TaskStatusUpdate,
)
from taskboard.models.task import Task, TaskStatus
from taskboard.tasks.repository import TaskRepository

from .deps import get_filters, get_repository

router = APIRouter(prefix="/api/tasks", tags=["Tasks"])


async def _listing(
    repository: TaskRepository,
    identity: Identity,
    filters: Optional[TaskFilters] = None,
) -> TaskListResponse:
    tasks = await repository.fetch_all(identity.uid, filters)
    return TaskListResponse(data=tasks, total=len(tasks))


async def _owned_task(repository: TaskRepository, task_id: str, identity: Identity) -> Task:
    task = await repository.get(task_id, identity.uid)
    if task is None:
        log("API", f"Task {task_id} not visible", user_id=identity.uid)
        raise TaskNotFoundError(task_id)
    return task


@router.get("", response_model=TaskListResponse)
async def list_tasks(
    filters: TaskFilters = Depends(get_filters),
    identity: Identity = Depends(get_identity),
    repository: TaskRepository = Depends(get_repository),
):
    """The caller's tasks, newest first, optionally filtered."""
    return await _listing(repository, identity, filters)


@router.get("/options", response_model=TaskOptions)
async def task_options():
    """Values offered by the status and category controls."""
    return TaskOptions(
        statuses=[
            StatusOption(value=s.value, label=s.label, slug=s.slug)
            for s in TaskStatus
        ],
        categories=settings.tasks.categories,
        defaultCategory=settings.tasks.default_category,
    )


@router.post("", response_model=TaskListResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    payload: TaskCreate,
    filters: TaskFilters = Depends(get_filters),
    identity: Identity = Depends(get_identity),
    repository: TaskRepository = Depends(get_repository),
):
    await repository.create(payload.title, payload.category, identity.uid)
    return await _listing(repository, identity, filters)


@router.patch("/{task_id}/status", response_model=TaskListResponse)
async def update_task_status(
    task_id: str,
    payload: TaskStatusUpdate,
    filters: TaskFilters = Depends(get_filters),
    identity: Identity = Depends(get_identity),
    repository: TaskRepository = Depends(get_repository),
):
    task = await _owned_task(repository, task_id, identity)
    await repository.update_status(task, payload.status)
    return await _listing(repository, identity, filters)


@router.put("/{task_id}", response_model=TaskListResponse)
async def update_task_fields(
    task_id: str,
    payload: TaskFieldsUpdate,
    filters: TaskFilters = Depends(get_filters),
    identity: Identity = Depends(get_identity),
    repository: TaskRepository = Depends(get_repository),
):
    await _owned_task(repository, task_id, identity)
    await repository.update_fields(task_id, payload.title, payload.description)
    return await _listing(repository, identity, filters)


@router.delete("/{task_id}", response_model=TaskListResponse)
async def delete_task(
    task_id: str,
    filters: TaskFilters = Depends(get_filters),
    identity: Identity = Depends(get_identity),
    repository: TaskRepository = Depends(get_repository),
):
    await _owned_task(repository, task_id, identity)
    await repository.delete(task_id)
    return await _listing(repository, identity, filters)
