"""
ZIP export of a saved booking.

Exporting bundles the four generated documents into one archive and then
removes the booking from the store. Nothing is removed unless the archive
was built.
"""

import io
import logging
import zipfile
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from db.booking_store import BookingStore, BookingStoreError
from models.booking import GenerationResult, YachtInfo, YachtPricing
from services.documents import DocumentGenerator, DocumentGenerationError

from .base import ExportFormat
from .text_formatter import CSVFormatter, TextFormatter

logger = logging.getLogger(__name__)

NO_ORDER_NUMBER_LABEL = "без_номера"

ENTRY_PREFIX = "לידר_הזמנה_"
ARCHIVE_PREFIX = "הזמנה_"

# (GenerationResult field, entry suffix, format)
ARCHIVE_ENTRIES: Tuple[Tuple[str, str, ExportFormat], ...] = (
    ("file1_blank_client", "לקוח", ExportFormat.TXT),
    ("file2_blank_supplier", "סופרוויזר", ExportFormat.TXT),
    ("file3_excel_detailed", "אקסל_מפורט", ExportFormat.CSV),
    ("file4_excel_summary", "אקסל_סיכום", ExportFormat.CSV),
)

_ENTRY_FORMATTERS = {
    ExportFormat.TXT: TextFormatter(),
    ExportFormat.CSV: CSVFormatter(),
}


class ExportError(Exception):
    """Raised when a booking cannot be exported."""
    pass


@dataclass
class BookingArchive:
    """A built ZIP archive and its download name."""

    filename: str
    content: bytes
    order_label: str


def order_label(order_number: Optional[str]) -> str:
    return order_number or NO_ORDER_NUMBER_LABEL


def archive_filename(order_number: Optional[str]) -> str:
    return f"{ARCHIVE_PREFIX}{order_label(order_number)}.zip"


def entry_filename(order_number: Optional[str], suffix: str, file_format: ExportFormat) -> str:
    formatter = _ENTRY_FORMATTERS[file_format]
    return formatter.get_filename(f"{ENTRY_PREFIX}{order_label(order_number)}_{suffix}")


def build_booking_archive(result: GenerationResult, order_number: Optional[str]) -> BookingArchive:
    """
    Bundle the four generated documents into a ZIP archive.

    Args:
        result: Generated documents of the booking
        order_number: The booking's order number, if any

    Returns:
        BookingArchive with the archive bytes and its filename
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for field_name, suffix, file_format in ARCHIVE_ENTRIES:
            content = getattr(result, field_name)
            zf.writestr(
                entry_filename(order_number, suffix, file_format),
                _ENTRY_FORMATTERS[file_format].format(content),
            )

    return BookingArchive(
        filename=archive_filename(order_number),
        content=buffer.getvalue(),
        order_label=order_label(order_number),
    )


def export_and_remove(
    store: BookingStore,
    index: int,
    yachts_db: Dict[str, YachtInfo],
    pricing_db: Dict[str, YachtPricing]
) -> Tuple[BookingArchive, int]:
    """
    Export a saved booking as a ZIP archive and remove it from the store.

    Args:
        store: The booking store
        index: Index of the saved booking
        yachts_db: Yacht metadata table
        pricing_db: Yacht pricing table

    Returns:
        (archive, index to show next or -1 when the store is empty)

    Raises:
        BookingNotFound: If index does not address a saved booking
        ExportError: If generation, packaging or removal fails; the store
            is left untouched
    """
    booking = store.get(index)

    try:
        result = DocumentGenerator(yachts_db, pricing_db).generate(booking)
        archive = build_booking_archive(result, booking.order_number)
    except (DocumentGenerationError, ValueError) as e:
        logger.error(f"Export of booking {index} failed: {e}")
        raise ExportError(f"Cannot export booking {index}: {e}")

    try:
        store.remove(index)
    except BookingStoreError as e:
        logger.error(f"Export of booking {index} built but removal failed: {e}")
        raise ExportError(f"Cannot remove exported booking {index}: {e}")

    next_index = store.next_index_after_removal(index)
    logger.info(
        f"Exported booking {index} as {archive.filename} "
        f"({len(archive.content)} bytes), next index {next_index}"
    )
    return archive, next_index
