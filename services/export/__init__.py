"""
Booking export package.

Provides format-specific file writers for the generated documents and the
ZIP bundle of a saved booking.
"""

from .base import BaseFormatter, ExportFormat
from .text_formatter import CSVFormatter, TextFormatter
from .xlsx_formatter import SpreadsheetXLSXFormatter
from .archive import (
    BookingArchive,
    ExportError,
    NO_ORDER_NUMBER_LABEL,
    archive_filename,
    build_booking_archive,
    export_and_remove,
)


# Registry mapping export formats to formatter classes
_FORMATTER_REGISTRY = {
    ExportFormat.TXT: TextFormatter,
    ExportFormat.CSV: CSVFormatter,
    ExportFormat.XLSX: SpreadsheetXLSXFormatter,
}


def get_formatter(file_format: ExportFormat) -> BaseFormatter:
    """
    Factory function to get the appropriate formatter for a file format.

    Raises:
        ValueError: If file_format is not supported

    Example:
        >>> formatter = get_formatter(ExportFormat.XLSX)
        >>> xlsx_bytes = formatter.format(rows)
    """
    formatter_class = _FORMATTER_REGISTRY.get(file_format)

    if formatter_class is None:
        supported = [fmt.value for fmt in _FORMATTER_REGISTRY.keys()]
        raise ValueError(
            f"Unsupported file format: {file_format}. "
            f"Supported formats: {supported}"
        )

    return formatter_class()


__all__ = [
    'BaseFormatter',
    'ExportFormat',
    'TextFormatter',
    'CSVFormatter',
    'SpreadsheetXLSXFormatter',
    'BookingArchive',
    'ExportError',
    'NO_ORDER_NUMBER_LABEL',
    'archive_filename',
    'build_booking_archive',
    'export_and_remove',
    'get_formatter',
]
