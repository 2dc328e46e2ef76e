# taskboard/tasks/editor.py
"""
TaskEditor: modal draft of one task's title and description.

The draft lives only here until a successful submit; cancelling throws it
away. There is no autosave.
"""
from typing import Awaitable, Callable, Optional

from taskboard.core.exceptions import TaskboardError, ValidationError
from taskboard.core.logging import log
from taskboard.models.task import Task

from .repository import TaskRepository

OnClose = Callable[[], Awaitable[None]]


class TaskEditor:

    def __init__(
        self,
        task: Task,
        repository: TaskRepository,
        on_close: Optional[OnClose] = None,
    ) -> None:
        self.repository = repository
        self._on_close = on_close
        self.is_open = True
        self.is_submitting = False
        self.last_error: Optional[str] = None
        self._load(task)

    def _load(self, task: Task) -> None:
        self.task = task
        self.title = task.title
        self.description = task.description or ""

    def sync(self, task: Task) -> None:
        """Reset the draft when a different (or changed) task is passed in."""
        if task != self.task:
            self._load(task)

    @property
    def submit_label(self) -> str:
        return "Saving..." if self.is_submitting else "Save Changes"

    async def submit(self) -> bool:
        """
        Persist the draft. Returns True when saved and closed.

        A submit issued while another is in flight is ignored. On a rejected
        title or a failed write the editor stays open with the draft intact.
        """
        if self.is_submitting or not self.is_open:
            return False

        self.is_submitting = True
        try:
            if not self.title.strip():
                log("EDITOR", "Title cannot be empty.")
                return False

            try:
                await self.repository.update_fields(self.task.id, self.title, self.description)
            except ValidationError as e:
                log("EDITOR", e.message)
                return False
            except TaskboardError as e:
                # PersistenceError, or TaskNotFoundError if the task was deleted meanwhile
                log("EDITOR", f"❌ Error updating task {self.task.id}: {e.message}")
                self.last_error = e.message
                return False

            self.last_error = None
            await self._close()
            return True
        finally:
            self.is_submitting = False

    async def cancel(self) -> bool:
        """Discard the draft and close without writing."""
        if self.is_submitting or not self.is_open:
            return False
        self._load(self.task)
        await self._close()
        return True

    async def _close(self) -> None:
        self.is_open = False
        if self._on_close is not None:
            await self._on_close()
