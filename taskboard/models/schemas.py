# taskboard/models/schemas.py
"""
Request / response payloads and the filter selection.
"""
from datetime import date as Date
from typing import List, Optional

from pydantic import BaseModel, field_validator

from .task import Task, TaskStatus


def _parse_status(value):
    if value is None or value == "":
        return None
    return TaskStatus.parse(value)


class TaskFilters(BaseModel):
    """Current filter selection; an unset field means "no filter"."""

    date: Optional[Date] = None
    status: Optional[TaskStatus] = None
    category: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, value):
        return _parse_status(value)

    @field_validator("category", mode="before")
    @classmethod
    def blank_category(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def is_empty(self) -> bool:
        return self.date is None and self.status is None and self.category is None


class TaskCreate(BaseModel):
    title: str
    category: Optional[str] = None


class TaskStatusUpdate(BaseModel):
    status: TaskStatus

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, value):
        return TaskStatus.parse(value)


class TaskFieldsUpdate(BaseModel):
    title: str
    description: str = ""


class TaskListResponse(BaseModel):
    data: List[Task]
    total: int


class StatusOption(BaseModel):
    value: str
    label: str
    slug: str


class TaskOptions(BaseModel):
    statuses: List[StatusOption]
    categories: List[str]
    defaultCategory: str
