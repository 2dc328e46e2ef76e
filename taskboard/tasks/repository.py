# taskboard/tasks/repository.py
"""
TaskRepository: per-user task retrieval and CRUD over a DocumentStore.

Reads are always full scans followed by in-process filtering:
scan -> owner filter -> date/status/category filters -> newest first.
Writes never touch any local list; callers refetch afterwards.
"""
import time
from datetime import tzinfo
from typing import Any, Callable, Dict, List, Optional, Union

from taskboard.core.exceptions import (
    PersistenceError,
    RetrievalError,
    TaskNotFoundError,
    ValidationError,
)
from taskboard.core.logging import log
from taskboard.lib.monitoring import record_write
from taskboard.models.schemas import TaskFilters
from taskboard.models.task import DEFAULT_CATEGORY, Task, TaskStatus
from taskboard.store.base import DocumentStore

from .filters import apply_filters, newest_first


def epoch_millis() -> int:
    return int(time.time() * 1000)


class TaskRepository:

    def __init__(
        self,
        store: DocumentStore,
        *,
        tz: Optional[tzinfo] = None,
        default_category: str = DEFAULT_CATEGORY,
        clock: Callable[[], int] = epoch_millis,
    ) -> None:
        self.store = store
        self.tz = tz
        self.default_category = default_category
        self.clock = clock

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def fetch_all(self, user_id: str, filters: Optional[TaskFilters] = None) -> List[Task]:
        """
        All tasks owned by ``user_id`` matching ``filters``, newest first.

        Raises:
            RetrievalError: the store read failed
        """
        try:
            records = await self.store.read_all()
        except Exception as e:
            log("TASKS", f"❌ Error fetching tasks: {e}", user_id=user_id)
            raise RetrievalError(cause=e) from e

        owned = [
            Task.from_record(doc_id, fields, self.default_category)
            for doc_id, fields in records
            if fields.get("userId") == user_id
        ]
        visible = newest_first(apply_filters(owned, filters, self.tz))
        log(
            "FILTER",
            f"{len(records)} scanned, {len(owned)} owned, {len(visible)} visible",
            data=filters.model_dump(exclude_none=True) if filters else None,
            user_id=user_id,
        )
        return visible

    async def get(self, task_id: str, user_id: str) -> Optional[Task]:
        """Point read by scan; None when missing or owned by someone else."""
        for task in await self.fetch_all(user_id):
            if task.id == task_id:
                return task
        return None

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create(self, title: str, category: Optional[str], user_id: Optional[str]) -> str:
        """
        Persist a new task and return its id.

        Raises:
            ValidationError: empty title or no signed-in user (nothing written)
            PersistenceError: the store write failed
        """
        clean_title = (title or "").strip()
        if not clean_title:
            log("TASKS", "Title cannot be empty.", user_id=user_id)
            raise ValidationError("title", "Title cannot be empty.")
        if not user_id:
            log("TASKS", "Cannot add a task without a signed-in user.")
            raise ValidationError("userId", "A signed-in user is required.")

        clean_category = (category or "").strip() or self.default_category
        fields: Dict[str, Any] = {
            "title": clean_title,
            "description": "",
            "status": TaskStatus.NOT_STARTED.value,
            "createdAt": self.clock(),
            "userId": user_id,
            "category": clean_category,
        }
        task_id = await self._write("create", None, self.store.create, fields)
        log("TASKS", f"➕ Task added {task_id} [{clean_category}]", user_id=user_id)
        return task_id

    async def update_status(self, task: Union[Task, str], new_status: Union[TaskStatus, str]) -> None:
        task_id = task.id if isinstance(task, Task) else task
        try:
            status = TaskStatus.parse(new_status)
        except ValueError as e:
            log("TASKS", str(e))
            raise ValidationError("status", str(e)) from e

        await self._write("update", task_id, self.store.update, task_id, {"status": status.value})
        log("TASKS", f"🔁 Task {task_id} -> {status.value}")

    async def update_fields(self, task_id: str, title: str, description: Optional[str]) -> None:
        """
        Persist an edited title/description.

        Raises:
            ValidationError: the trimmed title is empty (nothing written)
            PersistenceError: the store write failed
        """
        clean_title = (title or "").strip()
        if not clean_title:
            log("TASKS", "Title cannot be empty.")
            raise ValidationError("title", "Title cannot be empty.")

        await self._write("update", task_id, self.store.update, task_id, {
            "title": clean_title,
            "description": (description or "").strip(),
        })
        log("TASKS", f"✏️ Task {task_id} edited")

    async def delete(self, task_id: str) -> None:
        await self._write("delete", task_id, self.store.delete, task_id)
        log("TASKS", f"🗑️ Task {task_id} deleted")

    async def _write(self, operation: str, task_id: Optional[str], call, *args):
        try:
            result = await call(*args)
        except TaskNotFoundError:
            record_write(operation, "not_found")
            raise
        except Exception as e:
            record_write(operation, "error")
            log("TASKS", f"❌ Error during {operation}: {e}")
            raise PersistenceError(operation, str(e), task_id=task_id) from e
        record_write(operation, "ok")
        return result
