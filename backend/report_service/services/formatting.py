"""
Derived values — everything a report shows that is not in the input verbatim.

All functions here are pure and total. They never raise on odd input:
absent dates become "-", short date strings are shown as-is, and a user
with zero assigned tasks simply has no completion rate.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from report_service.schemas.reports import Task, UserStats

MISSING = "-"


def completion_rate(stats: UserStats) -> Optional[float]:
    """Percentage of assigned tasks that are completed.

    Returns None (not 0.0) when nothing is assigned, so callers can omit
    the figure instead of printing a misleading "0.0%".
    """
    if stats.assigned > 0:
        return stats.completed * 100.0 / stats.assigned
    return None


def format_percent(value: float) -> str:
    """One decimal place, ties rounded away from zero: 6.25 -> "6.3%".

    Goes through the float's shortest repr so 0.1-style noise doesn't
    decide the tie.
    """
    rounded = Decimal(repr(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"{rounded}%"


def task_progress(task: Task) -> str:
    """Progress of the task's first assignee, e.g. "40%".

    Only the first assignee is consulted; additional assignees are ignored.
    """
    if task.assignees:
        progress = task.assignees[0].progress
        if progress is not None:
            return f"{progress}%"
    return MISSING


def row_band(row_index: int) -> int:
    """Zebra-stripe band (0 or 1) for a zero-based data row."""
    return row_index % 2


def row_count(tasks: Optional[list[Task]]) -> int:
    return len(tasks or [])


def format_date(value: Optional[str]) -> str:
    """ISO-8601 string → "YYYY-MM-DD". Short input is returned unchanged."""
    if not value:
        return MISSING
    if len(value) < 10:
        return value
    return value[:10]


def format_datetime(value: Optional[str]) -> str:
    """ISO-8601 string → "YYYY-MM-DD HH:MM:SS". Short input is returned unchanged."""
    if not value:
        return MISSING
    spaced = value.replace("T", " ")
    if len(spaced) < 19:
        return value
    return spaced[:19]
