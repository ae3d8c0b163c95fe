"""
Plain text and CSV formatters for the generated documents.

The spreadsheet rows are already tab-separated text, so the CSV formatter
only encodes them; the BOM makes Excel open the Hebrew text as UTF-8.
"""

import logging
from typing import Any

from .base import BaseFormatter, ExportFormat

logger = logging.getLogger(__name__)

UTF8_BOM = "\ufeff"


class TextFormatter(BaseFormatter):
    """UTF-8 text file for the client and supplier documents."""

    def get_file_format(self) -> ExportFormat:
        return ExportFormat.TXT

    def get_content_type(self) -> str:
        return "text/plain; charset=utf-8"

    def format(self, content: Any) -> bytes:
        if not isinstance(content, str):
            raise ValueError(f"Text export expects a string, got {type(content).__name__}")
        return content.encode("utf-8")


class CSVFormatter(BaseFormatter):
    """Spreadsheet row as UTF-8 with BOM for Excel compatibility."""

    def get_file_format(self) -> ExportFormat:
        return ExportFormat.CSV

    def get_content_type(self) -> str:
        return "text/csv"

    def format(self, content: Any) -> bytes:
        if not isinstance(content, str):
            raise ValueError(f"CSV export expects a string, got {type(content).__name__}")
        return (UTF8_BOM + content).encode("utf-8")
