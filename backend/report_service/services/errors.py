"""
Errors raised by the report pipeline.

Only rendering can fail. Derivation, classification and model building are
total functions: unknown categories, zero counts and malformed dates all
have explicit fallbacks, so they never reach this module.
"""


class ReportError(Exception):
    """Base class for report pipeline errors."""


class RenderingFailure(ReportError):
    """The document-encoding step could not produce a complete file.

    Raised by the PDF and spreadsheet renderers with the library error
    chained as ``__cause__``. Never retried inside the pipeline; the HTTP
    layer turns it into a 500 response.
    """

    def __init__(self, fmt: str, message: str):
        self.fmt = fmt
        super().__init__(f"{fmt} rendering failed: {message}")
