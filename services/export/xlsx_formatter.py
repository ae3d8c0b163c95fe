"""
Excel XLSX formatter for the booking spreadsheet rows.

Writes a workbook with one sheet per row type, laid out right-to-left for
the Hebrew columns. Amounts are written as numbers.
"""

import io
import logging
from typing import Any, List

from openpyxl import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from services.documents.spreadsheet import SpreadsheetRows
from .base import BaseFormatter, ExportFormat

logger = logging.getLogger(__name__)

DETAILED_SHEET_TITLE = "מפורט"
SUMMARY_SHEET_TITLE = "סיכום"


class SpreadsheetXLSXFormatter(BaseFormatter):
    """
    Formatter that outputs the detailed and summary rows as an XLSX workbook.

    Sheets:
    - מפורט: the detailed row
    - סיכום: the summary row
    """

    def get_file_format(self) -> ExportFormat:
        return ExportFormat.XLSX

    def get_content_type(self) -> str:
        return "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

    def format(self, content: Any) -> bytes:
        """
        Args:
            content: SpreadsheetRows of one booking

        Returns:
            XLSX file as bytes

        Raises:
            ValueError: If content is not SpreadsheetRows or writing fails
        """
        if not isinstance(content, SpreadsheetRows):
            raise ValueError(f"XLSX export expects SpreadsheetRows, got {type(content).__name__}")

        try:
            wb = Workbook()

            # Remove default sheet
            wb.remove(wb.active)

            self._write_row_sheet(wb.create_sheet(DETAILED_SHEET_TITLE), content.detailed)
            self._write_row_sheet(wb.create_sheet(SUMMARY_SHEET_TITLE), content.summary)

            output = io.BytesIO()
            wb.save(output)
            output.seek(0)
            return output.read()

        except Exception as e:
            logger.error(f"XLSX formatting failed: {e}")
            raise ValueError(f"Failed to format spreadsheet rows as XLSX: {e}")

    def _write_row_sheet(self, ws: Worksheet, cells: List[Any]) -> None:
        ws.sheet_view.rightToLeft = True
        for col_idx, value in enumerate(cells, start=1):
            ws.cell(row=1, column=col_idx, value=value if value != "" else None)
