"""
Report document model — the format-agnostic structure of a report.

Builders produce a ReportDocument; renderers consume it. A document is an
ordered tuple of sections, each one of three variants:

- TextBlock: a paragraph (title, heading, body or small print)
- KpiSummary: a row of labeled value tiles
- Table: columns with relative widths plus rows of cells

Everything is frozen. Styling decisions (which cell is tinted, which row
is shaded) live here as data, so the PDF and spreadsheet outputs of one
document cannot disagree about them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from report_service.services.classifier import HEADER_BANNER


class Emphasis(str, Enum):
    TITLE = "title"
    HEADING = "heading"
    NORMAL = "normal"
    SMALL = "small"


@dataclass(frozen=True)
class TextBlock:
    text: str
    emphasis: Emphasis = Emphasis.NORMAL
    label: Optional[str] = None
    centered: bool = False

    @property
    def lines(self) -> list[str]:
        """Non-empty lines of the text, in order."""
        return [line for line in self.text.split("\n") if line.strip()]


@dataclass(frozen=True)
class KpiItem:
    label: str
    value: str
    accent: str


@dataclass(frozen=True)
class KpiSummary:
    items: tuple[KpiItem, ...]


@dataclass(frozen=True)
class Column:
    header: str
    relative_width: float = 1.0

    def __post_init__(self):
        if self.relative_width <= 0:
            raise ValueError(f"Column width must be positive: {self.header}")


@dataclass(frozen=True)
class Cell:
    text: str
    accent: Optional[str] = None  # Overrides the row band when set
    band: int = 0


@dataclass(frozen=True)
class Row:
    cells: tuple[Cell, ...]


@dataclass(frozen=True)
class Table:
    columns: tuple[Column, ...]
    rows: tuple[Row, ...] = ()
    header_accent: str = HEADER_BANNER

    @property
    def headers(self) -> list[str]:
        return [column.header for column in self.columns]


Section = Union[TextBlock, KpiSummary, Table]


@dataclass(frozen=True)
class ReportDocument:
    """Root of a built report."""
    title: str
    generated_at: str
    generated_by: Optional[str] = None
    sections: tuple[Section, ...] = field(default_factory=tuple)

    def sections_of(self, kind: type) -> list:
        """All sections of one variant, in document order."""
        return [section for section in self.sections if isinstance(section, kind)]

    @property
    def tables(self) -> list[Table]:
        return self.sections_of(Table)

    @property
    def text_blocks(self) -> list[TextBlock]:
        return self.sections_of(TextBlock)
