"""
Pydantic schemas for the report API.

These are the request bodies the task backend sends. Field names are
camelCase on the wire (generatedAt, dueDate, inProgress) and snake_case
in Python; both spellings are accepted on input.

Validation here is the only input checking in the service. The builders
trust whatever passes these models.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that reads camelCase JSON into snake_case attributes."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Assignee(CamelModel):
    """One person assigned to a task, with their own status and progress."""
    name: str
    email: str
    status: str = "pending"
    progress: Optional[int] = Field(default=None, ge=0, le=100)


class Task(CamelModel):
    """A single task as shown in a report."""
    title: str
    description: Optional[str] = None
    priority: str     # low, medium, high, urgent
    status: str       # pending, in-progress, completed
    created_at: Optional[str] = None  # ISO-8601
    due_date: Optional[str] = None    # ISO-8601
    assignees: Optional[list[Assignee]] = None


class ReportFilter(CamelModel):
    """Criteria used to select the tasks. Shown in the report, never applied."""
    date_from: Optional[str] = None
    date_to: Optional[str] = None
    priority: Optional[list[str]] = None
    status: Optional[list[str]] = None


class TaskReportRequest(CamelModel):
    """Body for the task listing PDF/Excel and the flat task export."""
    title: str
    generated_at: str
    generated_by: Optional[str] = None
    filters: Optional[ReportFilter] = None
    tasks: list[Task]


class UserInfo(CamelModel):
    name: str
    email: str


class UserStats(CamelModel):
    """Assignment counts for one user. The counts are not cross-checked."""
    assigned: int = Field(ge=0)
    completed: int = Field(ge=0)
    pending: int = Field(ge=0)
    in_progress: int = Field(ge=0)


class UserSummaryRequest(CamelModel):
    """Body for the user productivity summary."""
    generated_at: str
    user: UserInfo
    stats: UserStats
    recent_tasks: Optional[list[Task]] = None
