# taskboard/core/exceptions.py
"""
Custom exceptions for the application.

Every failure is scoped to a single user action; none of these is fatal to
the process and none is retried automatically.
"""
from typing import Optional, Dict, Any


class TaskboardError(Exception):
    """Base exception for all Taskboard errors."""
    code = "TASKBOARD_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class AuthError(TaskboardError):
    """Identity provider failure or missing identity."""
    code = "AUTH_ERROR"


class RetrievalError(TaskboardError):
    """Collection read failed; callers keep their previous list."""
    code = "RETRIEVAL_ERROR"

    def __init__(self, message: str = "Error fetching tasks", cause: Optional[BaseException] = None):
        super().__init__(message, {"cause": repr(cause)} if cause else None)


class ValidationError(TaskboardError):
    """Rejected input (empty title, unknown status)."""
    code = "VALIDATION_ERROR"

    def __init__(self, field: str, message: str):
        super().__init__(message, {"field": field})
        self.field = field


class PersistenceError(TaskboardError):
    """Store write failed for create / update / delete."""
    code = "PERSISTENCE_ERROR"

    def __init__(self, operation: str, message: str, task_id: Optional[str] = None):
        super().__init__(
            f"Cannot {operation} task{f' {task_id}' if task_id else ''}: {message}",
            {"operation": operation, "task_id": task_id}
        )
        self.operation = operation
        self.task_id = task_id


class TaskNotFoundError(TaskboardError):
    """No task with this id (or not visible to the caller)."""
    code = "TASK_NOT_FOUND"

    def __init__(self, task_id: str):
        super().__init__("Task not found", {"task_id": task_id})
        self.task_id = task_id
