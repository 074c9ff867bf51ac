"""
Spreadsheet renderer — encodes a ReportDocument as an .xlsx workbook.

A spreadsheet has to stay one flat grid, so every section becomes rows on
a single sheet, top to bottom:

- title TextBlock    → bold title row, followed by "Generated" metadata rows
- other TextBlocks   → optional bold label row, then one row per text line
- KpiSummary         → one "label | value" row per tile, tinted with its accent
- Table              → bold filled header row, then data rows

Data rows are not zebra-striped (that's a print convention); only accent
cells get a fill.
"""

import re
from io import BytesIO

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from report_service.services import document as model
from report_service.services.errors import RenderingFailure
from report_service.services.formatting import format_datetime

MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

WIDTH_UNITS = 10      # Characters per unit of Column.relative_width
MIN_WIDTH = 8
KPI_FILL_STRENGTH = 0.35   # How much of the accent survives the blend with white

_INVALID_SHEET_CHARS = re.compile(r"[\\/*?:\[\]]")


def _fill(hex_color: str) -> PatternFill:
    return PatternFill("solid", fgColor=hex_color.lstrip("#").upper())


def _blend_with_white(hex_color: str, strength: float) -> str:
    """Lighten an accent the way a translucent fill over white would look."""
    value = hex_color.lstrip("#")
    channels = [int(value[i:i + 2], 16) for i in (0, 2, 4)]
    blended = [round(255 - (255 - c) * strength) for c in channels]
    return "#" + "".join(f"{c:02X}" for c in blended)


def _sheet_title(title: str) -> str:
    """Excel sheet names: max 31 chars, no \\ / * ? : [ ]."""
    cleaned = _INVALID_SHEET_CHARS.sub("", ILLEGAL_CHARACTERS_RE.sub("", title or "")).strip()
    return (cleaned or "Report")[:31]


class SpreadsheetRenderer:
    """Renders a ReportDocument to xlsx bytes.

    The renderer itself holds nothing per call; each render gets its own
    workbook and _SheetWriter, so one instance can be shared.

    Usage:
        xlsx_bytes = SpreadsheetRenderer().render(document)
    """

    media_type = MEDIA_TYPE
    extension = "xlsx"

    def render(self, report: model.ReportDocument) -> bytes:
        """Build the workbook in memory and return its bytes.

        Raises:
            RenderingFailure: openpyxl could not build or save the workbook.
        """
        try:
            wb = Workbook()
            ws = wb.active
            ws.title = _sheet_title(report.title)

            writer = _SheetWriter(ws, report)
            single_table = len(report.tables) == 1
            for section in report.sections:
                if isinstance(section, model.TextBlock):
                    writer.write_text(section)
                elif isinstance(section, model.KpiSummary):
                    writer.write_kpis(section)
                elif isinstance(section, model.Table):
                    header_row = writer.write_table(section)
                    if single_table:
                        ws.freeze_panes = f"A{header_row + 1}"
                else:
                    raise TypeError(f"Unknown section type: {type(section).__name__}")
            writer.apply_widths()

            bio = BytesIO()
            wb.save(bio)
        except Exception as e:
            raise RenderingFailure("XLSX", str(e)) from e

        return bio.getvalue()


class _SheetWriter:
    """Writes sections onto one worksheet, tracking the next free row."""

    def __init__(self, ws, report: model.ReportDocument):
        self.ws = ws
        self.report = report
        self.row = 1
        self.widths: dict[int, float] = {}

        thin = Side(style="thin", color="D0D0D0")
        self.border = Border(left=thin, right=thin, top=thin, bottom=thin)
        self.title_font = Font(bold=True, size=14)
        self.bold_font = Font(bold=True)
        self.header_font = Font(bold=True, color="FFFFFF")
        self.muted_font = Font(italic=True, color="595959")
        self.center = Alignment(horizontal="center", vertical="center")

    def write_text(self, block: model.TextBlock):
        if block.emphasis == model.Emphasis.TITLE:
            self._put(self.row, 1, block.text).font = self.title_font
            self.row += 1
            self._write_metadata()
            return

        if block.label:
            self._put(self.row, 1, block.label).font = self.bold_font
            self.row += 1

        if block.emphasis == model.Emphasis.HEADING:
            font = self.bold_font
        elif block.emphasis == model.Emphasis.SMALL:
            font = self.muted_font
        else:
            font = None

        for line in block.lines:
            cell = self._put(self.row, 1, line)
            if font is not None:
                cell.font = font
            self.row += 1

    def _write_metadata(self):
        self._put(self.row, 1, "Generated")
        self._put(self.row, 2, format_datetime(self.report.generated_at))
        self.row += 1
        if self.report.generated_by:
            self._put(self.row, 1, "Generated By")
            self._put(self.row, 2, self.report.generated_by)
            self.row += 1

    def write_kpis(self, kpis: model.KpiSummary):
        for item in kpis.items:
            fill = _fill(_blend_with_white(item.accent, KPI_FILL_STRENGTH))
            label = self._put(self.row, 1, item.label)
            value = self._put(self.row, 2, item.value)
            label.font = self.bold_font
            for cell in (label, value):
                cell.fill = fill
                cell.border = self.border
            self.row += 1

    def write_table(self, table: model.Table) -> int:
        """Write header + rows. Returns the header's row number."""
        if self.row > 1:
            self.row += 1  # Blank spacer row

        header_row = self.row
        header_fill = _fill(table.header_accent)
        for col, column in enumerate(table.columns, start=1):
            cell = self._put(header_row, col, column.header)
            cell.font = self.header_font
            cell.fill = header_fill
            cell.alignment = self.center
            cell.border = self.border
            width = max(MIN_WIDTH, column.relative_width * WIDTH_UNITS)
            self.widths[col] = max(self.widths.get(col, 0), width)
        self.row += 1

        for row in table.rows:
            for col, data in enumerate(row.cells, start=1):
                cell = self._put(self.row, col, data.text)
                cell.border = self.border
                if data.accent:
                    cell.fill = _fill(data.accent)
            self.row += 1

        return header_row

    def apply_widths(self):
        for col, width in self.widths.items():
            self.ws.column_dimensions[get_column_letter(col)].width = width

    def _put(self, row: int, column: int, text: str):
        """Write one cell. Anything that isn't a plain whole number stays text,
        including strings that start with "=" and would otherwise be formulas.
        """
        cell = self.ws.cell(row=row, column=column, value=_value(text))
        if cell.data_type == "f":
            cell.data_type = "s"
        return cell


def _value(text: str):
    """Whole numbers go in as numbers so spreadsheet formulas work.

    Control characters the xlsx format can't hold are dropped.
    """
    if text.isascii() and text.isdigit() and (text == "0" or not text.startswith("0")):
        return int(text)
    return ILLEGAL_CHARACTERS_RE.sub("", text)
