# taskboard/tasks/filters.py
"""
Client-side filtering and ordering of a fetched task snapshot.

Day boundaries are computed in a configurable time zone and default to the
server's local zone, so results around midnight depend on that zone.
"""
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Iterable, List, Optional, Tuple
from zoneinfo import ZoneInfo

from taskboard.models.schemas import TaskFilters
from taskboard.models.task import Task


def resolve_timezone(name: Optional[str]) -> Optional[tzinfo]:
    """IANA name -> tzinfo; None/empty means server local time."""
    if not name:
        return None
    return ZoneInfo(name)


def _midnight(day: date, tz: Optional[tzinfo]) -> datetime:
    naive = datetime.combine(day, time.min)
    if tz is None:
        return naive.astimezone()
    return naive.replace(tzinfo=tz)


def day_bounds(day: date, tz: Optional[tzinfo] = None) -> Tuple[int, int]:
    """
    Epoch-millisecond range covering ``day``.

    Returns (start, end) where start is midnight of ``day`` and end is
    midnight of the following day; a timestamp t is on ``day`` when
    start <= t < end.
    """
    start = _midnight(day, tz)
    end = _midnight(day + timedelta(days=1), tz)
    return int(start.timestamp() * 1000), int(end.timestamp() * 1000)


def matches(task: Task, filters: TaskFilters, tz: Optional[tzinfo] = None) -> bool:
    if filters.status is not None and task.status != filters.status:
        return False
    if filters.category is not None and task.category != filters.category:
        return False
    if filters.date is not None:
        start, end = day_bounds(filters.date, tz)
        if not start <= task.createdAt < end:
            return False
    return True


def apply_filters(
    tasks: Iterable[Task],
    filters: Optional[TaskFilters],
    tz: Optional[tzinfo] = None,
) -> List[Task]:
    if filters is None or filters.is_empty:
        return list(tasks)
    return [task for task in tasks if matches(task, filters, tz)]


def newest_first(tasks: Iterable[Task]) -> List[Task]:
    """Sort by createdAt descending; equal timestamps keep their scan order."""
    return sorted(tasks, key=lambda task: task.createdAt, reverse=True)
