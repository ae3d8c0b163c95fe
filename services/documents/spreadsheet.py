"""
Spreadsheet rows for the bookings ledger.

Two rows per booking are pasted into the operator's spreadsheet: a
detailed row (44 columns, the last 26 left empty for manual bookkeeping)
and a short summary row. Both are tab-separated.

Cells are kept typed (text vs. Decimal amounts) so the same rows can be
written to a workbook; to_tsv() renders them as text.
"""

import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, List

from models.booking import BookingData, PriceQuote, Settlement
from utils.jinja_filters import format_amount, format_duration

# Columns left empty after the order number in the detailed row
DETAILED_ROW_PADDING = 26
SUMMARY_ROW_PADDING = 1

UNKNOWN_CELL = "?"

_PHONE_COUNTRY_PREFIX = re.compile(r"^\+972-? ?")


@dataclass
class SpreadsheetRows:
    """Typed cells of the detailed and summary rows."""

    detailed: List[Any]
    summary: List[Any]

    def detailed_tsv(self) -> str:
        return to_tsv(self.detailed, DETAILED_ROW_PADDING)

    def summary_tsv(self) -> str:
        return to_tsv(self.summary, SUMMARY_ROW_PADDING)


def local_phone(phone: str) -> str:
    """Strip a leading +972 country prefix ('+972-', '+972 ', '+972- ')."""
    return _PHONE_COUNTRY_PREFIX.sub("", phone)


def cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Decimal):
        return format_amount(value)
    return str(value)


def to_tsv(cells: List[Any], padding: int = 0) -> str:
    """Join cells with tabs and append `padding` empty trailing columns."""
    return "\t".join(cell_text(c) for c in cells) + "\t" * padding


def build_rows(
    booking: BookingData,
    formatted_date: str,
    quote: PriceQuote,
    settlement: Settlement
) -> SpreadsheetRows:
    """
    Build both spreadsheet rows for a booking.

    The cost column shows what the supplier order shows as the cost: the
    house net cost for leader bookings, the client price otherwise.
    """
    cost = settlement.net_cost if booking.is_leader else quote.client_price
    duration = format_duration(quote.duration)
    order_number = booking.order_number or ""

    money_columns = [
        cost,
        settlement.net_cost,
        settlement.effective_on_site_payment,
        settlement.paid_at_supplier,
        settlement.paid_at_agent,
        settlement.due_from_agent_to_supplier,
        settlement.due_to_agent,
        settlement.commission,
    ]

    detailed = [
        formatted_date,
        UNKNOWN_CELL,
        booking.client_name,
        booking.client_name,
        local_phone(booking.phone),
        booking.yacht_name,
        f"{booking.start_time}-{booking.end_time}",
        quote.client_price,
        duration,
        *money_columns,
        order_number,
    ]

    summary = [
        formatted_date,
        UNKNOWN_CELL,
        duration,
        *money_columns,
        order_number,
    ]

    return SpreadsheetRows(detailed=detailed, summary=summary)
