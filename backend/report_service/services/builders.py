"""
Document builders — turn validated requests into ReportDocuments.

Three report types:
1. Task Listing: title, applied filters, one table row per task.
   The PDF and Excel downloads build the exact same document.
2. User Summary: user header, KPI tiles, completion rate, recent tasks.
3. Task Export: a single flat table with every task field, for
   spreadsheets.

Builders hold no state between calls. Each section helper appends to the
``sections`` list it is given, in the same way the PDF services append
flowables to a story, and the list is frozen into the document at the end.
"""

from enum import Enum
from typing import Optional

from report_service.config import settings
from report_service.schemas.reports import (
    ReportFilter,
    Task,
    TaskReportRequest,
    UserInfo,
    UserStats,
    UserSummaryRequest,
)
from report_service.services.classifier import (
    KPI_ASSIGNED,
    KPI_COMPLETED,
    KPI_IN_PROGRESS,
    KPI_PENDING,
    display_label,
    priority_accent,
    status_accent,
)
from report_service.services.document import (
    Cell,
    Column,
    Emphasis,
    KpiItem,
    KpiSummary,
    ReportDocument,
    Row,
    Table,
    TextBlock,
)
from report_service.services.formatting import (
    MISSING,
    completion_rate,
    format_date,
    format_datetime,
    format_percent,
    row_band,
    row_count,
    task_progress,
)

USER_SUMMARY_TITLE = "User Productivity Summary"
NO_RECENT_TASKS = "No recent tasks to display."
EXPORT_TITLE = "Tasks Export"


class TaskListingFlavor(str, Enum):
    """What the last column of the task listing shows."""
    ASSIGNEES = "assignees"  # Number of assignees
    PROGRESS = "progress"    # First assignee's progress


class ReportBuilder:
    """Builds ReportDocuments for every report type.

    Usage:
        builder = ReportBuilder()
        document = builder.build_user_summary(request)
        pdf_bytes = PdfRenderer().render(document)
    """

    def __init__(self, footer_text: Optional[str] = None):
        self.footer_text = footer_text or settings.footer_text

    # ------------------------------------------------------------------
    # PUBLIC API
    # ------------------------------------------------------------------

    def build_task_listing(
        self,
        request: TaskReportRequest,
        flavor: TaskListingFlavor = TaskListingFlavor.ASSIGNEES,
    ) -> ReportDocument:
        """Task listing report, shared by the PDF and Excel downloads."""
        sections = []
        sections.append(TextBlock(request.title, Emphasis.TITLE, centered=True))
        self._add_filters(sections, request.filters)
        self._add_task_listing_table(sections, request.tasks, flavor)
        sections.append(TextBlock(
            f"Total tasks: {row_count(request.tasks)}", Emphasis.SMALL,
        ))

        return ReportDocument(
            title=request.title,
            generated_at=request.generated_at,
            generated_by=request.generated_by,
            sections=tuple(sections),
        )

    def build_user_summary(self, request: UserSummaryRequest) -> ReportDocument:
        """User productivity summary with KPI tiles and recent tasks."""
        sections = []
        sections.append(TextBlock(USER_SUMMARY_TITLE, Emphasis.TITLE, centered=True))
        self._add_user_info(sections, request.user)
        sections.append(TextBlock(
            f"Generated: {format_datetime(request.generated_at)}",
            Emphasis.SMALL,
            centered=True,
        ))
        self._add_kpis(sections, request.stats)
        self._add_recent_tasks(sections, request.recent_tasks)
        sections.append(TextBlock(self.footer_text, Emphasis.SMALL, centered=True))

        return ReportDocument(
            title=USER_SUMMARY_TITLE,
            generated_at=request.generated_at,
            generated_by=None,
            sections=tuple(sections),
        )

    def build_task_export(self, request: TaskReportRequest) -> ReportDocument:
        """Flat export: one table, every field, no text or KPI sections."""
        columns = (
            Column("Title", 3),
            Column("Description", 4),
            Column("Priority", 1.2),
            Column("Status", 1.4),
            Column("Created", 1.3),
            Column("Due Date", 1.3),
            Column("Assignees", 3),
            Column("Progress", 1),
        )
        rows = []
        for i, task in enumerate(request.tasks):
            band = row_band(i)
            rows.append(Row((
                Cell(task.title, band=band),
                Cell(task.description or "", band=band),
                self._priority_cell(task, band),
                self._status_cell(task, band),
                Cell(format_date(task.created_at), band=band),
                Cell(format_date(task.due_date), band=band),
                Cell(", ".join(a.name for a in task.assignees or []) or MISSING, band=band),
                Cell(task_progress(task), band=band),
            )))

        return ReportDocument(
            title=request.title or EXPORT_TITLE,
            generated_at=request.generated_at,
            generated_by=request.generated_by,
            sections=(Table(columns=columns, rows=tuple(rows)),),
        )

    # ------------------------------------------------------------------
    # SECTION HELPERS
    # ------------------------------------------------------------------

    def _add_filters(self, sections: list, filters: Optional[ReportFilter]):
        """One line per populated filter field. Nothing if none are set."""
        if filters is None:
            return

        lines = []
        if filters.date_from:
            lines.append(f"Date From: {format_date(filters.date_from)}")
        if filters.date_to:
            lines.append(f"Date To: {format_date(filters.date_to)}")
        if filters.priority:
            lines.append("Priority: " + ", ".join(display_label(p) for p in filters.priority))
        if filters.status:
            lines.append("Status: " + ", ".join(display_label(s) for s in filters.status))

        if lines:
            sections.append(TextBlock("\n".join(lines), Emphasis.NORMAL, label="Filters Applied"))

    def _add_task_listing_table(
        self, sections: list, tasks: list[Task], flavor: TaskListingFlavor,
    ):
        if flavor == TaskListingFlavor.PROGRESS:
            last_column = Column("Progress", 1.2)
        else:
            last_column = Column("Assignees", 1.2)

        columns = (
            Column("Title", 3),
            Column("Priority", 1.5),
            Column("Status", 1.5),
            Column("Due Date", 1.5),
            last_column,
        )

        rows = []
        for i, task in enumerate(tasks):
            band = row_band(i)
            if flavor == TaskListingFlavor.PROGRESS:
                last = task_progress(task)
            else:
                last = str(len(task.assignees or []))
            rows.append(Row((
                Cell(task.title, band=band),
                self._priority_cell(task, band),
                self._status_cell(task, band),
                Cell(format_date(task.due_date), band=band),
                Cell(last, band=band),
            )))

        sections.append(Table(columns=columns, rows=tuple(rows)))

    def _add_user_info(self, sections: list, user: UserInfo):
        sections.append(TextBlock(
            f"User: {user.name}\nEmail: {user.email}",
            Emphasis.NORMAL,
            centered=True,
        ))

    def _add_kpis(self, sections: list, stats: UserStats):
        """Four KPI tiles in fixed order, then the completion rate if any."""
        sections.append(KpiSummary((
            KpiItem("Total Assigned", str(stats.assigned), KPI_ASSIGNED),
            KpiItem("Completed", str(stats.completed), KPI_COMPLETED),
            KpiItem("In Progress", str(stats.in_progress), KPI_IN_PROGRESS),
            KpiItem("Pending", str(stats.pending), KPI_PENDING),
        )))

        rate = completion_rate(stats)
        if rate is not None:
            sections.append(TextBlock(
                f"Completion Rate: {format_percent(rate)}", Emphasis.HEADING, centered=True,
            ))

    def _add_recent_tasks(self, sections: list, tasks: Optional[list[Task]]):
        sections.append(TextBlock("Recent Tasks", Emphasis.HEADING))

        if not tasks:
            sections.append(TextBlock(NO_RECENT_TASKS, Emphasis.NORMAL))
            return

        columns = (
            Column("Task Title", 3),
            Column("Priority", 1.5),
            Column("Status", 1.5),
            Column("Due Date", 1.5),
            Column("Progress", 1.5),
        )
        rows = []
        for i, task in enumerate(tasks):
            band = row_band(i)
            rows.append(Row((
                Cell(task.title, band=band),
                self._priority_cell(task, band),
                self._status_cell(task, band),
                Cell(format_date(task.due_date), band=band),
                Cell(task_progress(task), band=band),
            )))

        sections.append(Table(columns=columns, rows=tuple(rows)))

    # ------------------------------------------------------------------
    # HELPERS
    # ------------------------------------------------------------------

    @staticmethod
    def _priority_cell(task: Task, band: int) -> Cell:
        return Cell(
            display_label(task.priority) or MISSING,
            accent=priority_accent(task.priority),
            band=band,
        )

    @staticmethod
    def _status_cell(task: Task, band: int) -> Cell:
        return Cell(
            display_label(task.status) or MISSING,
            accent=status_accent(task.status),
            band=band,
        )
