# taskboard/models/task.py
from enum import Enum
from typing import Any, Dict, Optional

from beanie import Document
from pydantic import BaseModel, ConfigDict, Field


DEFAULT_CATEGORY = "Personal"


def _as_millis(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


class TaskStatus(str, Enum):
    NOT_STARTED = "not started"
    STARTED = "started"
    COMPLETED = "completed"

    @property
    def label(self) -> str:
        return self.value.title()

    @property
    def slug(self) -> str:
        """CSS-friendly form, e.g. "not-started"."""
        return self.value.replace(" ", "-")

    @classmethod
    def parse(cls, raw: Any) -> "TaskStatus":
        """Accept the stored value, its slug or its underscore form."""
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            raise ValueError(f"Invalid task status: {raw!r}")
        normalized = raw.strip().lower().replace("-", " ").replace("_", " ")
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"Invalid task status: {raw!r}") from None

    @classmethod
    def from_db(cls, raw: Optional[str]) -> "TaskStatus":
        if not raw:
            return cls.NOT_STARTED
        try:
            return cls.parse(raw)
        except ValueError:
            return cls.NOT_STARTED


class Task(BaseModel):
    """
    Read-side snapshot of one stored task.

    Field names follow the stored document keys so that the JSON surface and
    the collection agree.
    """

    id: str
    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.NOT_STARTED
    createdAt: int
    userId: str
    category: str = DEFAULT_CATEGORY

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_record(
        cls,
        task_id: str,
        fields: Dict[str, Any],
        default_category: str = DEFAULT_CATEGORY,
    ) -> "Task":
        # Documents are schemaless: older rows may lack description/category
        category = fields.get("category")
        if not isinstance(category, str) or not category.strip():
            category = default_category
        return cls(
            id=str(task_id),
            title=str(fields.get("title") or ""),
            description=str(fields.get("description") or ""),
            status=TaskStatus.from_db(fields.get("status")),
            createdAt=_as_millis(fields.get("createdAt")),
            userId=str(fields.get("userId") or ""),
            category=category,
        )


class TaskDocument(Document):
    """
    MongoDB mapping of the tasks collection.

    Every field is optional because the collection carries no schema.
    Reads bypass this model (see BeanieDocumentStore.read_all) and are
    normalised by Task.from_record instead.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = Field(default=TaskStatus.NOT_STARTED.value)
    createdAt: Optional[int] = None
    userId: Optional[str] = None
    category: Optional[str] = None

    class Settings:
        name = "tasks"


__all__ = ["DEFAULT_CATEGORY", "TaskStatus", "Task", "TaskDocument"]
