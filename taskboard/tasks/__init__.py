# taskboard/tasks/__init__.py
"""
Task logic: repository, list controller and editor.
"""
from .repository import TaskRepository
from .controller import TaskListController, FETCH_ERROR_MESSAGE
from .editor import TaskEditor

__all__ = ["TaskRepository", "TaskListController", "TaskEditor", "FETCH_ERROR_MESSAGE"]
