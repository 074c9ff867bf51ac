"""
PDF renderer — encodes a ReportDocument as a PDF with ReportLab.

Uses ReportLab's Platypus engine: each section of the document becomes one
or more "flowables" (paragraphs, tables, spacers) appended to a story, and
SimpleDocTemplate handles pagination.

Section mapping:
- TextBlock  → Paragraph in one of four fixed styles (title/heading/normal/small)
- KpiSummary → single-row table of padded, centered, lightly tinted tiles
- Table      → Table with a banner header row repeated on every page,
               zebra-striped data rows and per-cell accent backgrounds

Nothing here decides *what* is tinted or shaded; that comes from the
document. This module only decides how it looks on paper.
"""

from functools import partial
from io import BytesIO

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_LEFT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import (
    KeepTogether,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from report_service.config import settings
from report_service.services import document as model
from report_service.services.classifier import BAND_SHADE
from report_service.services.errors import RenderingFailure
from report_service.services.formatting import format_datetime

# --- Page geometry (points) ---
PAGE_SIZE = A4
MARGIN = 36          # 0.5 inch ≈ 1.27 cm
TOP_MARGIN = 54      # Room for the running header

# Alpha applied to KPI accents to get a light tint (50 of 255)
KPI_TINT_ALPHA = 50 / 255

TEXT_COLOR = colors.black
MUTED = colors.HexColor("#404040")   # Dark gray — small print
GRID_COLOR = colors.HexColor("#d0d0d0")


def _build_styles() -> dict:
    """Create every paragraph style the renderer uses.

    Each emphasis has a left-aligned and a centered variant, keyed as
    "<emphasis>" and "<emphasis>_centered".
    """
    base = getSampleStyleSheet()

    styles = {
        "title": ParagraphStyle(
            "ReportTitle",
            parent=base["Normal"],
            fontName="Helvetica-Bold",
            fontSize=18,
            leading=22,
            textColor=TEXT_COLOR,
            spaceAfter=6,
        ),
        "heading": ParagraphStyle(
            "ReportHeading",
            parent=base["Normal"],
            fontName="Helvetica-Bold",
            fontSize=12,
            leading=15,
            textColor=TEXT_COLOR,
            spaceBefore=6,
            spaceAfter=4,
        ),
        "normal": ParagraphStyle(
            "ReportNormal",
            parent=base["Normal"],
            fontName="Helvetica",
            fontSize=10,
            leading=13,
            textColor=TEXT_COLOR,
        ),
        "small": ParagraphStyle(
            "ReportSmall",
            parent=base["Normal"],
            fontName="Helvetica",
            fontSize=9,
            leading=11,
            textColor=MUTED,
        ),
    }

    for name in list(styles):
        styles[f"{name}_centered"] = ParagraphStyle(
            f"{styles[name].name}Centered",
            parent=styles[name],
            alignment=TA_CENTER,
        )

    styles["header_cell"] = ParagraphStyle(
        "HeaderCell",
        parent=styles["heading"],
        fontSize=10,
        leading=12,
        textColor=colors.white,
        alignment=TA_CENTER,
        spaceBefore=0,
        spaceAfter=0,
    )
    styles["cell"] = ParagraphStyle(
        "Cell",
        parent=styles["small"],
        textColor=TEXT_COLOR,
        alignment=TA_LEFT,
    )
    styles["kpi_label"] = styles["normal_centered"]
    styles["kpi_value"] = ParagraphStyle(
        "KpiValue",
        parent=styles["heading"],
        fontSize=14,
        leading=18,
        alignment=TA_CENTER,
        spaceBefore=2,
        spaceAfter=0,
    )
    return styles


class PdfRenderer:
    """Renders a ReportDocument to PDF bytes.

    Stateless apart from its styles, so one instance can be shared.

    Usage:
        pdf_bytes = PdfRenderer().render(document)
    """

    media_type = "application/pdf"
    extension = "pdf"

    def __init__(self):
        self.styles = _build_styles()

    def render(self, report: model.ReportDocument) -> bytes:
        """Build the whole PDF in memory and return its bytes.

        Raises:
            RenderingFailure: ReportLab could not lay out or encode the file.
        """
        buffer = BytesIO()

        try:
            doc = SimpleDocTemplate(
                buffer,
                pagesize=PAGE_SIZE,
                topMargin=TOP_MARGIN,
                bottomMargin=MARGIN,
                leftMargin=MARGIN,
                rightMargin=MARGIN,
                title=report.title,
                author=settings.REPORT_AUTHOR,
            )

            story = []
            for section in report.sections:
                self._render_section(story, section, doc.width)
                story.append(Spacer(1, 0.15 * inch))

            decorate = partial(self._decorate_page, report)
            doc.build(story, onFirstPage=decorate, onLaterPages=decorate)
        except Exception as e:
            raise RenderingFailure("PDF", str(e)) from e

        return buffer.getvalue()

    # ------------------------------------------------------------------
    # SECTION RENDERERS
    # ------------------------------------------------------------------

    def _render_section(self, story: list, section, width: float):
        if isinstance(section, model.TextBlock):
            self._render_text(story, section)
        elif isinstance(section, model.KpiSummary):
            self._render_kpis(story, section, width)
        elif isinstance(section, model.Table):
            self._render_table(story, section, width)
        else:
            raise TypeError(f"Unknown section type: {type(section).__name__}")

    def _render_text(self, story: list, block: model.TextBlock):
        key = block.emphasis.value + ("_centered" if block.centered else "")
        style = self.styles[key]

        elements = []
        if block.label:
            elements.append(Paragraph(self._safe(block.label), self.styles["heading"]))
        elements.append(Paragraph(
            "<br/>".join(self._safe(line) for line in block.text.split("\n")),
            style,
        ))
        story.append(KeepTogether(elements))

    def _render_kpis(self, story: list, kpis: model.KpiSummary, width: float):
        """One row of tiles, each tinted with a light version of its accent."""
        if not kpis.items:
            return

        cells = [
            [
                Paragraph(self._safe(item.label), self.styles["kpi_label"]),
                Paragraph(self._safe(item.value), self.styles["kpi_value"]),
            ]
            for item in kpis.items
        ]
        count = len(cells)
        table = Table([cells], colWidths=[width / count] * count)

        commands = [
            ("ALIGN", (0, 0), (-1, -1), "CENTER"),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ("TOPPADDING", (0, 0), (-1, -1), 12),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 12),
            ("LEFTPADDING", (0, 0), (-1, -1), 12),
            ("RIGHTPADDING", (0, 0), (-1, -1), 12),
        ]
        for col, item in enumerate(kpis.items):
            commands.append(("BACKGROUND", (col, 0), (col, 0), self._tint(item.accent)))

        table.setStyle(TableStyle(commands))
        story.append(table)

    def _render_table(self, story: list, section: model.Table, width: float):
        """Banner header + data rows. The header repeats on every page."""
        header = [
            Paragraph(self._safe(h), self.styles["header_cell"])
            for h in section.headers
        ]
        table_data = [header]
        for row in section.rows:
            table_data.append([
                Paragraph(self._safe(cell.text), self.styles["cell"])
                for cell in row.cells
            ])

        total = sum(c.relative_width for c in section.columns)
        col_widths = [width * c.relative_width / total for c in section.columns]
        table = Table(table_data, colWidths=col_widths, repeatRows=1)

        commands = [
            # Header row
            ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor(section.header_accent)),
            ("ALIGN", (0, 0), (-1, 0), "CENTER"),
            ("TOPPADDING", (0, 0), (-1, 0), 8),
            ("BOTTOMPADDING", (0, 0), (-1, 0), 8),
            ("LEFTPADDING", (0, 0), (-1, 0), 8),
            ("RIGHTPADDING", (0, 0), (-1, 0), 8),

            # Data rows
            ("TOPPADDING", (0, 1), (-1, -1), 6),
            ("BOTTOMPADDING", (0, 1), (-1, -1), 6),
            ("LEFTPADDING", (0, 1), (-1, -1), 6),
            ("RIGHTPADDING", (0, 1), (-1, -1), 6),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),

            ("GRID", (0, 0), (-1, -1), 0.5, GRID_COLOR),
        ]

        shade = colors.HexColor(BAND_SHADE)
        for r, row in enumerate(section.rows, start=1):
            for c, cell in enumerate(row.cells):
                if cell.accent:
                    commands.append(("BACKGROUND", (c, r), (c, r), colors.HexColor(cell.accent)))
                elif cell.band:
                    commands.append(("BACKGROUND", (c, r), (c, r), shade))

        table.setStyle(TableStyle(commands))
        story.append(table)

    # ------------------------------------------------------------------
    # HELPERS
    # ------------------------------------------------------------------

    @staticmethod
    def _tint(accent: str):
        """Same RGB as the accent, mostly transparent."""
        base = colors.HexColor(accent)
        return colors.Color(base.red, base.green, base.blue, alpha=KPI_TINT_ALPHA)

    @staticmethod
    def _safe(text: str) -> str:
        """Escape text for ReportLab's XML-based paragraph parser."""
        text = text.replace("&", "&amp;")
        text = text.replace("<", "&lt;")
        text = text.replace(">", "&gt;")
        return text

    @staticmethod
    def _decorate_page(report: model.ReportDocument, canvas, doc):
        """Running header (title + generation info) and page number."""
        page_width, page_height = PAGE_SIZE
        canvas.saveState()
        canvas.setFont("Helvetica", 8)
        canvas.setFillColor(colors.HexColor("#718096"))

        top = page_height - 0.4 * inch
        canvas.drawString(MARGIN, top, report.title)

        generated = f"Generated {format_datetime(report.generated_at)}"
        if report.generated_by:
            generated += f" by {report.generated_by}"
        canvas.drawRightString(page_width - MARGIN, top, generated)

        canvas.drawCentredString(
            page_width / 2, 0.3 * inch,
            f"Page {canvas.getPageNumber()}",
        )
        canvas.restoreState()
