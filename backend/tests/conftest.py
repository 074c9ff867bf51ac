"""
Test fixtures shared across the report service tests.

Architecture:
- Unit tests call builders and renderers directly with schema objects.
- API tests use the real FastAPI app over httpx's ASGITransport, so no
  server process is needed.
- Payload fixtures are camelCase dicts, exactly what the task backend
  sends; the *_request fixtures are the same data parsed into schemas.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from report_service.main import app
from report_service.schemas.reports import TaskReportRequest, UserSummaryRequest


@pytest_asyncio.fixture
async def client():
    """Async HTTP test client against the real app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def make_task(**overrides) -> dict:
    """A task payload with sensible defaults; override any field."""
    task = {
        "title": "Prepare quarterly roadmap",
        "description": "Draft and circulate the Q3 roadmap",
        "priority": "high",
        "status": "in-progress",
        "createdAt": "2024-05-01T08:30:00.000Z",
        "dueDate": "2024-05-20T17:00:00.000Z",
        "assignees": [
            {"name": "Ana Lima", "email": "ana@example.com", "status": "in-progress", "progress": 40},
            {"name": "Raj Patel", "email": "raj@example.com", "status": "completed", "progress": 100},
        ],
    }
    task.update(overrides)
    return task


@pytest.fixture
def task_payload() -> dict:
    """Task listing request as sent by the task backend."""
    return {
        "title": "TaskFlowPro - Task Report",
        "generatedAt": "2024-05-10T09:15:42.123Z",
        "generatedBy": "Admin User",
        "filters": {
            "dateFrom": "2024-05-01T00:00:00.000Z",
            "dateTo": None,
            "priority": ["high", "urgent"],
            "status": None,
        },
        "tasks": [
            make_task(),
            make_task(
                title="Fix login outage",
                priority="urgent",
                status="pending",
                dueDate=None,
                assignees=[],
            ),
            make_task(
                title="Archive old boards",
                priority="low",
                status="completed",
                assignees=[{"name": "Raj Patel", "email": "raj@example.com", "status": "completed"}],
            ),
        ],
    }


@pytest.fixture
def summary_payload() -> dict:
    """User summary request as sent by the task backend."""
    return {
        "generatedAt": "2024-05-10T09:15:42.123Z",
        "user": {"name": "Ana Lima", "email": "ana@example.com"},
        "stats": {"assigned": 10, "completed": 6, "pending": 2, "inProgress": 2},
        "recentTasks": [
            make_task(),
            make_task(title="Review PR #42", priority="medium", status="completed",
                      assignees=[{"name": "Ana Lima", "email": "ana@example.com",
                                  "status": "completed", "progress": 100}]),
        ],
    }


@pytest.fixture
def task_request(task_payload) -> TaskReportRequest:
    return TaskReportRequest.model_validate(task_payload)


@pytest.fixture
def summary_request(summary_payload) -> UserSummaryRequest:
    return UserSummaryRequest.model_validate(summary_payload)
