from .task import DEFAULT_CATEGORY, TaskStatus, Task, TaskDocument
from .schemas import (
    TaskFilters,
    TaskCreate,
    TaskStatusUpdate,
    TaskFieldsUpdate,
    TaskListResponse,
    StatusOption,
    TaskOptions,
)

__all__ = [
    "DEFAULT_CATEGORY",
    "TaskStatus",
    "Task",
    "TaskDocument",
    "TaskFilters",
    "TaskCreate",
    "TaskStatusUpdate",
    "TaskFieldsUpdate",
    "TaskListResponse",
    "StatusOption",
    "TaskOptions",
]
