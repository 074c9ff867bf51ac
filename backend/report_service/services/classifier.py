"""
Classifier — maps task priority and status to a label and an accent color.

Accent colors are plain "#RRGGBB" strings so the document model stays
independent of ReportLab and openpyxl; each renderer converts them to its
own color type.

Both lookups are total: every known value has an accent, and anything
else (including None and the empty string) falls back to NEUTRAL.
"""

from enum import Enum
from typing import Optional

# --- Cell tints (priority / status) ---
RED_TINT = "#FFC8C8"
ORANGE_TINT = "#FFDCC8"
YELLOW_TINT = "#FFFFC8"
GREEN_TINT = "#C8FFC8"
BLUE_TINT = "#C8DCFF"
NEUTRAL = "#FFFFFF"

# --- KPI tiles (describe stat categories, not task values) ---
KPI_ASSIGNED = "#6495ED"     # Cornflower blue
KPI_COMPLETED = "#3CB371"    # Medium sea green
KPI_IN_PROGRESS = "#FFA500"  # Orange
KPI_PENDING = "#DC143C"      # Crimson

# --- Tables ---
HEADER_BANNER = "#4682B4"    # Steel blue — header row background
BAND_SHADE = "#F5F5F5"       # Light gray — odd data rows


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


PRIORITY_ACCENTS = {
    Priority.URGENT: RED_TINT,
    Priority.HIGH: ORANGE_TINT,
    Priority.MEDIUM: YELLOW_TINT,
    Priority.LOW: GREEN_TINT,
}

STATUS_ACCENTS = {
    TaskStatus.COMPLETED: GREEN_TINT,
    TaskStatus.IN_PROGRESS: BLUE_TINT,
    TaskStatus.PENDING: YELLOW_TINT,
}


def _lookup(enum_cls, accents: dict, value: Optional[str]) -> str:
    try:
        member = enum_cls((value or "").lower())
    except ValueError:
        return NEUTRAL
    return accents[member]


def priority_accent(priority: Optional[str]) -> str:
    """Accent for a priority value, case-insensitive."""
    return _lookup(Priority, PRIORITY_ACCENTS, priority)


def status_accent(status: Optional[str]) -> str:
    """Accent for a status value, case-insensitive."""
    return _lookup(TaskStatus, STATUS_ACCENTS, status)


def display_label(value: Optional[str]) -> Optional[str]:
    """Capitalize the first character only ("in-progress" → "In-progress")."""
    if not value:
        return value
    return value[:1].upper() + value[1:]
