"""
Booking document generation: client confirmation, supplier order and the
two spreadsheet rows.
"""

from .generator import (
    DocumentGenerator,
    DocumentGenerationError,
    generate_all_files,
    has_document_content,
)
from .renderer import DocumentTemplateRenderer
from .spreadsheet import SpreadsheetRows, build_rows, to_tsv

__all__ = [
    "DocumentGenerator",
    "DocumentGenerationError",
    "generate_all_files",
    "has_document_content",
    "DocumentTemplateRenderer",
    "SpreadsheetRows",
    "build_rows",
    "to_tsv",
]
