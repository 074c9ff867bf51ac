"""
Unit tests for the document builders.

These check the abstract document only. What it looks like in a PDF or
spreadsheet is covered by the renderer tests.
"""

import pytest

from report_service.schemas.reports import TaskReportRequest, UserSummaryRequest
from report_service.services.builders import (
    NO_RECENT_TASKS,
    USER_SUMMARY_TITLE,
    ReportBuilder,
    TaskListingFlavor,
)
from report_service.services.classifier import (
    BLUE_TINT,
    GREEN_TINT,
    KPI_ASSIGNED,
    KPI_COMPLETED,
    KPI_IN_PROGRESS,
    KPI_PENDING,
    ORANGE_TINT,
    RED_TINT,
)
from report_service.services.document import Emphasis, KpiSummary, Table, TextBlock

from conftest import make_task


def _texts(document) -> list[str]:
    return [block.text for block in document.text_blocks]


# --- Task listing ---

def test_task_listing_section_order(task_request):
    doc = ReportBuilder().build_task_listing(task_request)

    kinds = [type(s) for s in doc.sections]
    assert kinds == [TextBlock, TextBlock, Table, TextBlock]

    title = doc.sections[0]
    assert title.text == "TaskFlowPro - Task Report"
    assert title.emphasis == Emphasis.TITLE
    assert doc.generated_by == "Admin User"
    assert doc.generated_at == "2024-05-10T09:15:42.123Z"


def test_task_listing_filter_lines(task_request):
    doc = ReportBuilder().build_task_listing(task_request)
    filters = doc.sections[1]

    assert filters.label == "Filters Applied"
    # dateTo and status are absent, so they get no line
    assert filters.lines == ["Date From: 2024-05-01", "Priority: High, Urgent"]


def test_task_listing_without_filters(task_payload):
    task_payload["filters"] = None
    doc = ReportBuilder().build_task_listing(TaskReportRequest.model_validate(task_payload))
    assert [type(s) for s in doc.sections] == [TextBlock, Table, TextBlock]


def test_task_listing_empty_filters_are_omitted(task_payload):
    task_payload["filters"] = {"dateFrom": None, "dateTo": "", "priority": [], "status": None}
    doc = ReportBuilder().build_task_listing(TaskReportRequest.model_validate(task_payload))
    assert not any(block.label == "Filters Applied" for block in doc.text_blocks)


def test_task_listing_rows(task_request):
    doc = ReportBuilder().build_task_listing(task_request)
    table = doc.tables[0]

    assert table.headers == ["Title", "Priority", "Status", "Due Date", "Assignees"]
    assert len(table.rows) == 3

    first, second, third = (row.cells for row in table.rows)
    assert [c.text for c in first] == ["Prepare quarterly roadmap", "High", "In-progress", "2024-05-20", "2"]
    assert first[1].accent == ORANGE_TINT
    assert first[2].accent == BLUE_TINT
    # Plain cells carry no accent
    assert first[0].accent is None and first[3].accent is None

    assert [c.text for c in second] == ["Fix login outage", "Urgent", "Pending", "-", "0"]
    assert third[2].accent == GREEN_TINT


def test_urgent_priority_cell(task_request):
    doc = ReportBuilder().build_task_listing(task_request)
    urgent = doc.tables[0].rows[1].cells[1]
    assert urgent.text == "Urgent"
    assert urgent.accent == RED_TINT


def test_task_listing_bands_alternate(task_request):
    doc = ReportBuilder().build_task_listing(task_request)
    bands = [row.cells[0].band for row in doc.tables[0].rows]
    assert bands == [0, 1, 0]


def test_task_listing_progress_flavor(task_request):
    doc = ReportBuilder().build_task_listing(task_request, TaskListingFlavor.PROGRESS)
    table = doc.tables[0]
    assert table.headers[-1] == "Progress"
    assert [row.cells[-1].text for row in table.rows] == ["40%", "-", "-"]


def test_task_listing_total_line(task_request):
    doc = ReportBuilder().build_task_listing(task_request)
    last = doc.sections[-1]
    assert last.text == "Total tasks: 3"
    assert last.emphasis == Emphasis.SMALL


def test_task_listing_has_no_row_limit(task_payload):
    task_payload["tasks"] = [make_task(title=f"Task {i}") for i in range(500)]
    doc = ReportBuilder().build_task_listing(TaskReportRequest.model_validate(task_payload))
    assert len(doc.tables[0].rows) == 500


def test_task_listing_same_model_for_both_formats(task_request):
    builder = ReportBuilder()
    assert builder.build_task_listing(task_request) == builder.build_task_listing(task_request)


# --- Task export ---

def test_task_export_is_a_single_table(task_request):
    doc = ReportBuilder().build_task_export(task_request)

    assert len(doc.sections) == 1
    table = doc.sections[0]
    assert isinstance(table, Table)
    assert table.headers == [
        "Title", "Description", "Priority", "Status", "Created", "Due Date", "Assignees", "Progress",
    ]
    first = [c.text for c in table.rows[0].cells]
    assert first == [
        "Prepare quarterly roadmap", "Draft and circulate the Q3 roadmap", "High", "In-progress",
        "2024-05-01", "2024-05-20", "Ana Lima, Raj Patel", "40%",
    ]
    assert table.rows[1].cells[6].text == "-"


# --- User summary ---

def test_user_summary_scenario(summary_request):
    doc = ReportBuilder().build_user_summary(summary_request)

    assert doc.title == USER_SUMMARY_TITLE
    kpis = doc.sections_of(KpiSummary)
    assert len(kpis) == 1
    items = kpis[0].items
    assert [i.label for i in items] == ["Total Assigned", "Completed", "In Progress", "Pending"]
    assert [i.value for i in items] == ["10", "6", "2", "2"]
    assert [i.accent for i in items] == [KPI_ASSIGNED, KPI_COMPLETED, KPI_IN_PROGRESS, KPI_PENDING]

    assert "Completion Rate: 60.0%" in _texts(doc)


@pytest.mark.parametrize("assigned,completed,expected", [
    (16, 1, "Completion Rate: 6.3%"),
    (16, 5, "Completion Rate: 31.3%"),
    (3, 1, "Completion Rate: 33.3%"),
    (3, 2, "Completion Rate: 66.7%"),
])
def test_user_summary_completion_rate_rounding(summary_payload, assigned, completed, expected):
    summary_payload["stats"] = {
        "assigned": assigned, "completed": completed, "pending": 0, "inProgress": 0,
    }
    doc = ReportBuilder().build_user_summary(UserSummaryRequest.model_validate(summary_payload))

    assert expected in _texts(doc)


def test_user_summary_has_no_author(summary_request):
    # The subject user is not the person who generated the report
    doc = ReportBuilder().build_user_summary(summary_request)
    assert doc.generated_by is None


def test_user_summary_section_order(summary_request):
    doc = ReportBuilder(footer_text="Acme - Task Management System").build_user_summary(summary_request)
    s = doc.sections

    assert s[0].text == "User Productivity Summary" and s[0].emphasis == Emphasis.TITLE
    assert s[1].text == "User: Ana Lima\nEmail: ana@example.com" and s[1].centered
    assert s[2].text == "Generated: 2024-05-10 09:15:42" and s[2].emphasis == Emphasis.SMALL
    assert isinstance(s[3], KpiSummary)
    assert s[4].text == "Completion Rate: 60.0%" and s[4].emphasis == Emphasis.HEADING
    assert s[5].text == "Recent Tasks" and s[5].emphasis == Emphasis.HEADING
    assert isinstance(s[6], Table)
    assert s[7].text == "Acme - Task Management System" and s[7].emphasis == Emphasis.SMALL
    assert len(s) == 8


def test_user_summary_without_assignments_has_no_rate(summary_payload):
    summary_payload["stats"] = {"assigned": 0, "completed": 0, "pending": 0, "inProgress": 0}
    doc = ReportBuilder().build_user_summary(UserSummaryRequest.model_validate(summary_payload))

    texts = _texts(doc)
    assert not any(t.startswith("Completion Rate") for t in texts)
    assert not any("%" in t for t in texts)


def test_user_summary_without_recent_tasks(summary_payload):
    for recent in ([], None):
        summary_payload["recentTasks"] = recent
        doc = ReportBuilder().build_user_summary(UserSummaryRequest.model_validate(summary_payload))

        assert NO_RECENT_TASKS in _texts(doc)
        assert doc.tables == []
        # Footer is still last
        assert doc.sections[-1].emphasis == Emphasis.SMALL


def test_user_summary_table(summary_request):
    doc = ReportBuilder().build_user_summary(summary_request)
    table = doc.tables[0]

    assert table.headers == ["Task Title", "Priority", "Status", "Due Date", "Progress"]
    assert [c.relative_width for c in table.columns] == [3, 1.5, 1.5, 1.5, 1.5]
    assert [row.cells[-1].text for row in table.rows] == ["40%", "100%"]
    # Accents only on the priority and status columns
    for row in table.rows:
        accented = [i for i, c in enumerate(row.cells) if c.accent]
        assert accented == [1, 2]


def test_user_summary_tolerates_missing_optionals(summary_payload):
    summary_payload["recentTasks"] = [{"title": "Bare task", "priority": "low", "status": "pending"}]
    doc = ReportBuilder().build_user_summary(UserSummaryRequest.model_validate(summary_payload))
    cells = [c.text for c in doc.tables[0].rows[0].cells]
    assert cells == ["Bare task", "Low", "Pending", "-", "-"]
