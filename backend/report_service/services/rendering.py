"""
Output selection — picks the renderer for a requested format.

    rendered = render_report(document, ReportFormat.PDF)
    return Response(rendered.content, media_type=rendered.media_type)
"""

from dataclasses import dataclass
from enum import Enum

from report_service.services.document import ReportDocument
from report_service.services.pdf_renderer import PdfRenderer
from report_service.services.spreadsheet_renderer import SpreadsheetRenderer


class ReportFormat(str, Enum):
    PDF = "pdf"
    XLSX = "xlsx"


@dataclass(frozen=True)
class RenderedReport:
    """Finished file plus what the HTTP layer needs to serve it."""
    content: bytes
    media_type: str
    extension: str


RENDERERS = {
    ReportFormat.PDF: PdfRenderer,
    ReportFormat.XLSX: SpreadsheetRenderer,
}


def render_report(document: ReportDocument, fmt: ReportFormat) -> RenderedReport:
    """Render a document. RenderingFailure propagates to the caller."""
    renderer = RENDERERS[fmt]()
    return RenderedReport(
        content=renderer.render(document),
        media_type=renderer.media_type,
        extension=renderer.extension,
    )
