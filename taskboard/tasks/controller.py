# taskboard/tasks/controller.py
"""
TaskListController: the signed-in user's task list view state.

Owns the only shared mutable resource, the current task list. The list is
a disposable cache: it is replaced wholesale by refresh() after every
mutation and every filter change, and never patched locally.
"""
from datetime import date
from typing import Any, List, Optional, Union

from taskboard.core.exceptions import RetrievalError, TaskboardError, ValidationError
from taskboard.core.logging import log
from taskboard.models.schemas import TaskFilters
from taskboard.models.task import Task, TaskStatus

from .editor import TaskEditor
from .repository import TaskRepository

FETCH_ERROR_MESSAGE = "Error fetching tasks"


class TaskListController:

    def __init__(self, repository: TaskRepository, user_id: str) -> None:
        self.repository = repository
        self.user_id = user_id
        self.tasks: List[Task] = []
        self.filters = TaskFilters()
        self.loading = False
        self.error: Optional[str] = None
        # "Add New Task" form draft
        self.new_title = ""
        self.new_category = repository.default_category
        self.editor: Optional[TaskEditor] = None

    @property
    def count(self) -> int:
        return len(self.tasks)

    async def refresh(self) -> List[Task]:
        """Re-read the collection. On failure the previous list is kept."""
        self.loading = True
        try:
            self.tasks = await self.repository.fetch_all(self.user_id, self.filters)
            self.error = None
        except RetrievalError as e:
            self.error = FETCH_ERROR_MESSAGE
            log("TASKS", f"{FETCH_ERROR_MESSAGE}: {e.details.get('cause')}", user_id=self.user_id)
        finally:
            self.loading = False
        return self.tasks

    # ------------------------------------------------------------------
    # Filters
    # ------------------------------------------------------------------

    async def set_filters(self, **changes: Any) -> List[Task]:
        """Change one or more of date / status / category and refetch."""
        merged = {**self.filters.model_dump(), **changes}
        self.filters = TaskFilters(**merged)
        return await self.refresh()

    async def set_date_filter(self, day: Optional[Union[date, str]]) -> List[Task]:
        return await self.set_filters(date=day or None)

    async def clear_date_filter(self) -> List[Task]:
        return await self.set_filters(date=None)

    async def clear_filters(self) -> List[Task]:
        self.filters = TaskFilters()
        return await self.refresh()

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def add_task(self, title: Optional[str] = None, category: Optional[str] = None) -> bool:
        if title is not None:
            self.new_title = title
        if category is not None:
            self.new_category = category

        try:
            await self.repository.create(self.new_title, self.new_category, self.user_id)
        except ValidationError:
            # Rejected silently; the draft stays in the form
            return False
        except TaskboardError as e:
            log("TASKS", f"❌ Add failed: {e.message}", user_id=self.user_id)
            return False

        self.new_title = ""
        await self.refresh()
        return True

    async def change_status(self, task: Task, new_status: Union[TaskStatus, str]) -> bool:
        try:
            await self.repository.update_status(task, new_status)
        except TaskboardError as e:
            log("TASKS", f"❌ Status change failed: {e.message}", user_id=self.user_id)
            return False
        await self.refresh()
        return True

    async def delete_task(self, task_id: str) -> bool:
        try:
            await self.repository.delete(task_id)
        except TaskboardError as e:
            log("TASKS", f"❌ Delete failed: {e.message}", user_id=self.user_id)
            return False
        await self.refresh()
        return True

    # ------------------------------------------------------------------
    # Editor
    # ------------------------------------------------------------------

    def open_editor(self, task: Task) -> TaskEditor:
        if self.editor is not None and self.editor.is_open:
            self.editor.sync(task)
        else:
            self.editor = TaskEditor(task, self.repository, on_close=self._editor_closed)
        return self.editor

    async def _editor_closed(self) -> None:
        self.editor = None
        await self.refresh()
