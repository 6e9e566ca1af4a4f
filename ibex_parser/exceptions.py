"""
Custom exception hierarchy for ibex-parser.

Callers can catch a specific failure (e.g., MalformedRowError vs
InsufficientDataError) and keep processing the remaining files of a
run instead of relying on generic ValueError/IndexError.

I/O failures (missing or unreadable files) are left as the builtin
``OSError`` family and handled at the same per-file boundary.
"""


class IbexParserError(Exception):
    """Base exception for all ibex-parser errors."""


class InsufficientDataError(IbexParserError):
    """Raised when a file has fewer lines than a real data export.

    The parser turns this into the "no usable data" result (``None``)
    so a batch run can skip the file and continue.
    """


class FileDecodeError(IbexParserError):
    """Raised when a file is not text in the configured encoding.

    Typically a copy saved as cp1252/latin-1 while ``utf-8-sig`` is
    expected.
    """


class MalformedRowError(IbexParserError):
    """Raised when a line has no field at a configured column index.

    Carries the line number and the offending column so the batch
    driver can report it per file.
    """

    def __init__(self, message: str, line_number: int | None = None, column: int | None = None) -> None:
        super().__init__(message)
        self.line_number = line_number
        self.column = column


class ConfigValidationError(IbexParserError):
    """Raised when a run configuration file cannot be loaded.

    For example, an empty YAML document.
    """


class ExportError(IbexParserError):
    """Raised when the exporter fails to write output files."""
