"""
Report API endpoints.

The task backend posts already-collected data here and gets a file back:
1. GET  /api/report/health — Liveness check
2. POST /api/report/tasks/pdf — Task listing as PDF
3. POST /api/report/tasks/excel — Task listing as Excel (same content as the PDF)
4. POST /api/report/tasks/export — Flat Excel export of every task field
5. POST /api/report/user-summary/pdf — User productivity summary as PDF
6. POST /api/report/user-summary/excel — Same summary as a spreadsheet

Files are generated on demand and never stored. Handlers are plain
``def`` functions: rendering is CPU-bound, so FastAPI runs them in its
threadpool instead of blocking the event loop.
"""

import re
from datetime import datetime

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from report_service.schemas.reports import TaskReportRequest, UserSummaryRequest
from report_service.services.builders import ReportBuilder, TaskListingFlavor
from report_service.services.document import ReportDocument
from report_service.services.errors import RenderingFailure
from report_service.services.rendering import ReportFormat, render_report

router = APIRouter(prefix="/api/report", tags=["reports"])


@router.get("/health")
def health_check():
    """Confirms the report service is up."""
    return {
        "status": "running",
        "service": "Report Service",
        "timestamp": datetime.now().isoformat(timespec="seconds"),
    }


@router.post("/tasks/pdf")
def generate_task_pdf(
    request: TaskReportRequest,
    flavor: TaskListingFlavor = TaskListingFlavor.ASSIGNEES,
):
    """Task listing PDF. ``flavor`` picks the last column (assignees/progress)."""
    document = ReportBuilder().build_task_listing(request, flavor)
    return _file_response(document, ReportFormat.PDF, "tasks-report", "task PDF")


@router.post("/tasks/excel")
def generate_task_excel(
    request: TaskReportRequest,
    flavor: TaskListingFlavor = TaskListingFlavor.ASSIGNEES,
):
    """Task listing Excel file, built from the same document as the PDF."""
    document = ReportBuilder().build_task_listing(request, flavor)
    return _file_response(document, ReportFormat.XLSX, "tasks-report", "task Excel")


@router.post("/tasks/export")
def generate_task_export(request: TaskReportRequest):
    """Flat spreadsheet with one row per task and every task field."""
    document = ReportBuilder().build_task_export(request)
    return _file_response(document, ReportFormat.XLSX, "tasks-export", "task export")


@router.post("/user-summary/pdf")
def generate_user_summary_pdf(request: UserSummaryRequest):
    """Productivity summary PDF for one user."""
    print(f"📝 Generating user summary PDF for {request.user.name}")
    document = ReportBuilder().build_user_summary(request)
    prefix = f"user-summary-{_sanitize(request.user.name)}"
    return _file_response(document, ReportFormat.PDF, prefix, "user summary PDF")


@router.post("/user-summary/excel")
def generate_user_summary_excel(request: UserSummaryRequest):
    """Productivity summary for one user as a spreadsheet."""
    document = ReportBuilder().build_user_summary(request)
    prefix = f"user-summary-{_sanitize(request.user.name)}"
    return _file_response(document, ReportFormat.XLSX, prefix, "user summary Excel")


# --- Helper functions ---

def _file_response(
    document: ReportDocument, fmt: ReportFormat, prefix: str, kind: str,
) -> Response:
    """Render the document and wrap it as a download. Raises 500 on failure."""
    try:
        rendered = render_report(document, fmt)
    except RenderingFailure as e:
        print(f"❌ Error generating {kind} report: {str(e)}")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to generate {kind} report",
        ) from e

    filename = f"{prefix}-{_timestamp()}.{rendered.extension}"
    print(f"✅ {kind} report generated: {filename}")
    return Response(
        content=rendered.content,
        media_type=rendered.media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def _sanitize(name: str) -> str:
    """Replace anything but letters and digits with '-' for filenames."""
    return re.sub(r"[^a-zA-Z0-9]", "-", name)


def _timestamp() -> str:
    """Filename timestamp, e.g. 20240115-093000."""
    return datetime.now().strftime("%Y%m%d-%H%M%S")
