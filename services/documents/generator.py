"""
Booking document generator.

Produces the four artifacts of a booking from its form data and the yacht
tables:

1. Client confirmation letter
2. Supplier order (numbered lines)
3. Detailed spreadsheet row
4. Summary spreadsheet row
"""

import logging
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from jinja2 import TemplateError

from models.booking import (
    BookingData,
    City,
    ExtraOption,
    GenerationResult,
    PaymentMethod,
    PriceQuote,
    Settlement,
    YachtInfo,
    YachtPricing,
)
from services.catalog import EXTRAS_MAP, EXTRAS_PRICES
from services.pricing import calculate_settlement, format_price_note, quote_price
from utils.jinja_filters import format_date

from .content import (
    BBQ_DURATION_HOURS,
    BBQ_INSTRUCTIONS,
    BBQ_YACHTS,
    CLIENT_EXTRA_DESCRIPTIONS,
    DOLPHIN_YACHT,
    EXTRAS_HEADER,
    NO_EXTRAS_LINE,
    PRICE_INCLUDES_DEFAULT,
    PRICE_INCLUDES_DOLPHIN,
    PRICE_INCLUDES_TYPHOON_KING,
)
from .renderer import DocumentTemplateRenderer
from .spreadsheet import SpreadsheetRows, build_rows

logger = logging.getLogger(__name__)

ORDER_NUMBER_PREFIX = "לידר הזמנות:"
REFERRER_NAME = "דניאל סוכן"

# Supplier copy of a house booking hides the client
LEADER_CLIENT_NAME = "פרטי ##"
LEADER_CLIENT_PHONE = "0533403449"

HERZLIYA_MARINA = ("הרצליה", "כתובת שלנו : רחוב יורדי ים 1, הרצליה")
HAIFA_MARINA = ("חיפה", "כתובת שלנו : רחוב הדייגים , חיפה")

PAID_AT_SUPPLIER_LABEL = "שולם אצלכם"
PAID_AT_AGENT_LABEL = "שולם אצלי"
COMMISSION_LABEL = " (20 אחוז)"

_TOLERANCE = Decimal("0.01")


class DocumentGenerationError(Exception):
    """Raised when the booking documents cannot be rendered."""
    pass


# =============================================================================
# Helpers
# =============================================================================

def has_document_content(booking: BookingData) -> bool:
    """A booking is worth rendering once it names a client, a yacht or an order."""
    return bool(booking.client_name or booking.yacht_name or booking.order_number)


def resolve_marina(yacht_info: Optional[YachtInfo]) -> Tuple[str, str]:
    """(marina name, address line); unknown yachts sail from Herzliya."""
    if yacht_info is not None and yacht_info.city == City.HAIFA:
        return HAIFA_MARINA
    return HERZLIYA_MARINA


def resolve_passengers(passengers: int, yacht_info: Optional[YachtInfo]) -> int:
    if not passengers and yacht_info is not None:
        return yacht_info.max
    return passengers


def format_extras_list(
    extras: List[ExtraOption],
    descriptions: Optional[Dict[ExtraOption, str]] = None
) -> str:
    """
    Bullet list of the selected extras with their prices.

    Args:
        extras: Selected extras without the 'none' marker
        descriptions: Optional long names overriding EXTRAS_MAP

    Returns:
        Header plus one '* name - price ₪' line per extra, or the
        no-extras line when the list is empty
    """
    if not extras:
        return NO_EXTRAS_LINE

    descriptions = descriptions or {}
    lines = [EXTRAS_HEADER]
    for extra in extras:
        name = descriptions.get(extra) or EXTRAS_MAP.get(extra, extra.value)
        lines.append(f"* {name} - {EXTRAS_PRICES.get(extra, 0)} ₪\n")
    return "".join(lines)


def price_includes_block(yacht_name: str) -> str:
    if yacht_name == DOLPHIN_YACHT:
        return PRICE_INCLUDES_DOLPHIN
    if yacht_name in BBQ_YACHTS:
        return PRICE_INCLUDES_TYPHOON_KING
    return PRICE_INCLUDES_DEFAULT


def bbq_instructions_block(yacht_name: str, marina: Tuple[str, str], duration: Decimal) -> str:
    """Grill instructions for Typhoon/King cruises of exactly 3 hours from Haifa."""
    if (
        yacht_name in BBQ_YACHTS
        and marina == HAIFA_MARINA
        and abs(duration - BBQ_DURATION_HOURS) < _TOLERANCE
    ):
        return BBQ_INSTRUCTIONS
    return ""


def order_number_label(order_number: Optional[str]) -> str:
    return f"{ORDER_NUMBER_PREFIX}{order_number}" if order_number else ""


# =============================================================================
# Generator
# =============================================================================

class DocumentGenerator:
    """
    Renders the booking documents against a pair of yacht tables.

    Example:
        generator = DocumentGenerator(catalog.yachts_db, catalog.pricing_db)
        result = generator.generate(booking)
        print(result.file2_blank_supplier)
    """

    def __init__(
        self,
        yachts_db: Dict[str, YachtInfo],
        pricing_db: Dict[str, YachtPricing],
        renderer: Optional[DocumentTemplateRenderer] = None
    ):
        self.yachts_db = yachts_db
        self.pricing_db = pricing_db
        self.renderer = renderer or DocumentTemplateRenderer()

    def generate(self, booking: BookingData) -> GenerationResult:
        """
        Generate all four documents for a booking.

        Any booking renders, a blank one included; callers that only want
        bookings with content check has_document_content() first.

        Raises:
            DocumentGenerationError: If a document template fails to render
        """
        yacht = booking.yacht_name.strip()
        yacht_info = self.yachts_db.get(yacht) if yacht else None

        quote = quote_price(booking, self.pricing_db)
        settlement = calculate_settlement(booking, quote)

        formatted_date = format_date(booking.date)
        marina = resolve_marina(yacht_info)
        passengers = resolve_passengers(booking.passengers, yacht_info)

        try:
            client_letter = self._client_confirmation(
                booking, quote, settlement, formatted_date, marina, passengers
            )
            supplier_order = self._supplier_order(
                booking, quote, settlement, formatted_date, passengers
            )
        except TemplateError as e:
            logger.error(f"Rendering documents for order '{booking.order_number or '-'}' failed: {e}")
            raise DocumentGenerationError(f"Cannot render booking documents: {e}")

        rows: SpreadsheetRows = build_rows(booking, formatted_date, quote, settlement)

        logger.info(
            f"Generated documents for order '{booking.order_number or '-'}' "
            f"(yacht='{yacht}', leader={booking.is_leader}, total={quote.client_price})"
        )

        return GenerationResult(
            file1_blank_client=client_letter,
            file2_blank_supplier=supplier_order,
            file3_excel_detailed=rows.detailed_tsv(),
            file4_excel_summary=rows.summary_tsv(),
        )

    def spreadsheet_rows(self, booking: BookingData) -> SpreadsheetRows:
        """Typed spreadsheet rows of a booking, for workbook export."""
        quote = quote_price(booking, self.pricing_db)
        settlement = calculate_settlement(booking, quote)
        return build_rows(booking, format_date(booking.date), quote, settlement)

    def _client_confirmation(
        self,
        booking: BookingData,
        quote: PriceQuote,
        settlement: Settlement,
        formatted_date: str,
        marina: Tuple[str, str],
        passengers: int
    ) -> str:
        yacht = booking.yacht_name.strip()
        order_label = order_number_label(booking.order_number)
        location_name, address = marina

        context = {
            "client_name": booking.client_name,
            "phone": booking.phone,
            "order_number_line": f"{order_label}\n" if order_label else "",
            "date": formatted_date,
            "start_time": booking.start_time,
            "end_time": booking.end_time,
            "yacht_name": booking.yacht_name,
            "passengers": passengers,
            "location_name": location_name,
            "address": address,
            "client_price": quote.client_price,
            "price_note": format_price_note(quote.price_note_parts),
            "down_payment": booking.down_payment,
            "remaining_client": settlement.remaining_client,
            "price_includes": price_includes_block(yacht),
            "extras_list": format_extras_list(booking.actual_extras, CLIENT_EXTRA_DESCRIPTIONS),
            "bbq_instructions": bbq_instructions_block(yacht, marina, quote.duration),
        }
        return self.renderer.render_client_confirmation(context)

    def _supplier_order(
        self,
        booking: BookingData,
        quote: PriceQuote,
        settlement: Settlement,
        formatted_date: str,
        passengers: int
    ) -> str:
        order_label = order_number_label(booking.order_number)
        is_leader = booking.is_leader

        if booking.payment_method == PaymentMethod.CREDIT_CARD:
            down_payment_label = PAID_AT_SUPPLIER_LABEL
        else:
            down_payment_label = PAID_AT_AGENT_LABEL

        context = {
            "order_number_line": f"1. {order_label}\n" if order_label else "",
            "offset": 1 if order_label else 0,
            "referrer": REFERRER_NAME,
            "date": formatted_date,
            "start_time": booking.start_time,
            "end_time": booking.end_time,
            "client_name": LEADER_CLIENT_NAME if is_leader else booking.client_name,
            "phone": LEADER_CLIENT_PHONE if is_leader else booking.phone,
            "yacht_name": booking.yacht_name,
            "passengers": passengers,
            "extras_list": format_extras_list(booking.actual_extras).strip(),
            "client_price": Decimal("0") if is_leader else quote.client_price,
            "price_note": "" if is_leader else format_price_note(quote.price_note_parts),
            "net_cost": settlement.net_cost,
            "down_payment_label": down_payment_label,
            "down_payment": booking.down_payment,
            "due_to_supplier": settlement.due_from_agent_to_supplier,
            "on_site_payment": settlement.effective_on_site_payment,
            "commission_label": COMMISSION_LABEL if settlement.commission > 0 else "",
            "commission": settlement.commission,
        }
        return self.renderer.render_supplier_order(context)


def generate_all_files(
    booking: BookingData,
    yachts_db: Dict[str, YachtInfo],
    pricing_db: Dict[str, YachtPricing]
) -> GenerationResult:
    """Generate the four booking documents (see DocumentGenerator.generate)."""
    return DocumentGenerator(yachts_db, pricing_db).generate(booking)
