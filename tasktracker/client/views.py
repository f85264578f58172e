"""Presentation helpers: search, status filter, calendar layout, counters."""

import calendar
from collections import defaultdict
from collections.abc import Iterable
from datetime import date

from tasktracker.schemas.enums import TaskStatus
from tasktracker.schemas.task import TaskResponse, TaskStats, completion_rate

# Calendar weeks start on Sunday
FIRST_WEEKDAY = calendar.SUNDAY


def filter_tasks(
    tasks: Iterable[TaskResponse],
    search: str = "",
    status: TaskStatus | None = None,
) -> list[TaskResponse]:
    """Case-insensitive title search combined with an optional status filter."""
    needle = search.strip().lower()
    return [
        task
        for task in tasks
        if needle in task.title.lower() and (status is None or task.status == status)
    ]


def tasks_by_day(
    tasks: Iterable[TaskResponse], year: int, month: int
) -> dict[date, list[TaskResponse]]:
    """Group tasks due in the given month by due date. Undated tasks are skipped."""
    days: dict[date, list[TaskResponse]] = defaultdict(list)
    for task in tasks:
        due = task.due_date
        if due is not None and due.year == year and due.month == month:
            days[due].append(task)
    return dict(sorted(days.items()))


def month_grid(year: int, month: int) -> list[list[date]]:
    """Whole weeks covering the month, padded with days of adjacent months."""
    return calendar.Calendar(firstweekday=FIRST_WEEKDAY).monthdatescalendar(year, month)


def summarize(tasks: Iterable[TaskResponse]) -> TaskStats:
    """Dashboard counters over an already-loaded task list."""
    stats = TaskStats()
    for task in tasks:
        stats.total += 1
        if task.status == TaskStatus.PENDING:
            stats.pending += 1
        elif task.status == TaskStatus.IN_PROGRESS:
            stats.in_progress += 1
        elif task.status == TaskStatus.COMPLETED:
            stats.completed += 1
    stats.completion_rate = completion_rate(stats.completed, stats.total)
    return stats
