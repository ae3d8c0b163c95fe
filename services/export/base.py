"""
Base formatter interface for booking export files.

Defines the abstract interface that all export formatters must implement.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class ExportFormat(str, Enum):
    """File formats a booking can be exported to."""
    TXT = "txt"
    CSV = "csv"
    XLSX = "xlsx"


class BaseFormatter(ABC):
    """
    Abstract base class for export formatters.

    Each output format has a concrete implementation that turns generated
    booking content into file bytes.
    """

    @abstractmethod
    def get_file_format(self) -> ExportFormat:
        """
        Return the file format this formatter produces.

        Returns:
            ExportFormat enum value
        """
        pass

    @abstractmethod
    def get_content_type(self) -> str:
        """
        Return the MIME content type for the output.

        Returns:
            MIME type string (e.g., 'text/plain')
        """
        pass

    def get_file_extension(self) -> str:
        return self.get_file_format().value

    @abstractmethod
    def format(self, content: Any) -> bytes:
        """
        Format generated content into output bytes.

        Args:
            content: Document text, or spreadsheet rows for workbooks

        Returns:
            Formatted output as bytes

        Raises:
            ValueError: If the content cannot be formatted
        """
        pass

    def get_filename(self, base_name: str) -> str:
        """Append this formatter's extension to base_name."""
        return f"{base_name}.{self.get_file_extension()}"
