"""
Cruise price engine.

Client price = base price + extras + night surcharge, where the base price
is either the operator's manual price or a lookup in the yacht's tiered
pricing table:

    duration > 2h with an extra-hour rate:  rate("2") + ceil(duration - 2) x extra_hour
    duration == 1.5h with a 1.5h tier:     rate("1.5")
    otherwise:                             rate(round(duration))

Exactly two passengers switch to the yacht's couple rates when it has them.
"""

import logging
from decimal import Decimal, ROUND_CEILING, ROUND_HALF_UP
from typing import Dict, List, Optional, Tuple

from models.booking import (
    BookingData,
    ExtraOption,
    PriceQuote,
    RateKind,
    RateTable,
    YachtPricing,
)
from services.catalog import EXTRAS_PRICES

logger = logging.getLogger(__name__)

NIGHT_START_HOUR = 20
NIGHT_SURCHARGE = Decimal("150")
COUPLE_PASSENGERS = 2

NOTE_NIGHT = "תוספת לילה"
NOTE_COUPLE = "מבצע זוגי"

_ZERO = Decimal("0")
_TWO_HOURS = Decimal("2")
_ONE_AND_HALF = Decimal("1.5")
_TOLERANCE = Decimal("0.01")


# =============================================================================
# Time window
# =============================================================================

def parse_time(value: str) -> Tuple[int, int]:
    """Split 'HH:MM' into (hour, minute); a missing minute part is 0."""
    parts = value.split(":")
    hour = int(parts[0])
    minute = int(parts[1]) if len(parts) > 1 and parts[1] else 0
    return hour, minute


def calculate_duration(start_time: str, end_time: str) -> Decimal:
    """
    Cruise length in hours.

    Windows ending before they start (including ones crossing midnight)
    have zero duration.
    """
    start_hour, start_minute = parse_time(start_time)
    end_hour, end_minute = parse_time(end_time)

    minutes = (end_hour * 60 + end_minute) - (start_hour * 60 + start_minute)
    if minutes < 0:
        return _ZERO
    return Decimal(minutes) / Decimal(60)


def night_surcharge(start_time: str) -> Decimal:
    """Flat surcharge for cruises starting at 20:00 or later."""
    start_hour, _ = parse_time(start_time)
    return NIGHT_SURCHARGE if start_hour >= NIGHT_START_HOUR else _ZERO


# =============================================================================
# Tariff lookup
# =============================================================================

def round_half_up(value: Decimal) -> Decimal:
    return value.to_integral_value(rounding=ROUND_HALF_UP)


def lookup_rate(table: RateTable, duration: Decimal) -> Optional[Decimal]:
    """
    Find the price for a duration in one rate table.

    Returns:
        The price, or None when the table has no matching tier
    """
    two_hour_rate = table.tier("2")

    if duration > _TWO_HOURS and table.extra_hour and two_hour_rate:
        extra_hours = (duration - _TWO_HOURS).to_integral_value(rounding=ROUND_CEILING)
        return two_hour_rate + extra_hours * table.extra_hour

    if abs(duration - _ONE_AND_HALF) < _TOLERANCE and table.tier("1.5"):
        return table.tier("1.5")

    return table.tier(str(int(round_half_up(duration))))


def tariff_price(
    pricing: Optional[YachtPricing],
    passengers: int,
    duration: Decimal
) -> Tuple[Decimal, List[str], RateKind]:
    """
    Look up the table price of a cruise.

    Args:
        pricing: The yacht's pricing, or None for an unknown yacht
        passengers: Passenger count on the booking
        duration: Cruise duration in hours

    Returns:
        (price, note_parts, rate_kind); price is 0 with RateKind.NONE when
        nothing matched. Note parts are reported even when no tier matched.
    """
    if pricing is None:
        return _ZERO, [], RateKind.NONE

    if passengers == COUPLE_PASSENGERS and pricing.couple_rates:
        rate = lookup_rate(pricing.couple_rates, duration)
        kind = RateKind.COUPLE
        notes = [NOTE_COUPLE]
    else:
        rate = lookup_rate(pricing, duration)
        kind = RateKind.STANDARD
        notes = [pricing.note] if pricing.note else []

    if rate is None:
        return _ZERO, notes, RateKind.NONE
    return rate, notes, kind


def extras_total(selected_extras: List[ExtraOption]) -> Decimal:
    """Sum of the prices of the selected extras."""
    return sum(
        (Decimal(EXTRAS_PRICES.get(extra, 0)) for extra in selected_extras if extra != ExtraOption.NONE),
        _ZERO
    )


# =============================================================================
# Quotes
# =============================================================================

def quote_price(
    booking: BookingData,
    pricing_db: Dict[str, YachtPricing]
) -> PriceQuote:
    """
    Compute the client price of a booking.

    A non-zero booking.price is taken as the base price as-is; otherwise the
    base price comes from the yacht's pricing table. Extras and the night
    surcharge are always added on top.
    """
    duration = calculate_duration(booking.start_time, booking.end_time)
    surcharge = night_surcharge(booking.start_time)

    note_parts: List[str] = []
    if surcharge > 0:
        note_parts.append(NOTE_NIGHT)

    if booking.price:
        base_price = booking.price
        kind = RateKind.MANUAL
    else:
        pricing = pricing_db.get(booking.yacht_name.strip()) if booking.yacht_name else None
        base_price, table_notes, kind = tariff_price(pricing, booking.passengers, duration)
        note_parts.extend(table_notes)

    extras_price = extras_total(booking.selected_extras)
    client_price = base_price + extras_price + surcharge

    logger.debug(
        f"Quote for '{booking.yacht_name}': duration={duration:.2f}h, "
        f"base={base_price} ({kind.value}), extras={extras_price}, "
        f"night={surcharge}, total={client_price}"
    )

    return PriceQuote(
        duration=duration,
        base_price=base_price,
        night_surcharge=surcharge,
        extras_price=extras_price,
        client_price=client_price,
        price_note_parts=note_parts,
        rate_kind=kind,
    )


def auto_price(
    booking: BookingData,
    pricing_db: Dict[str, YachtPricing]
) -> Decimal:
    """
    Price the booking form pre-fills while the operator has not typed one.

    This is the table price only: extras and the night surcharge are added
    when the documents are rendered.
    """
    if not booking.yacht_name:
        return _ZERO

    duration = calculate_duration(booking.start_time, booking.end_time)
    pricing = pricing_db.get(booking.yacht_name.strip())
    price, _, _ = tariff_price(pricing, booking.passengers, duration)
    return price


def format_price_note(note_parts: List[str]) -> str:
    """Render note parts as ' (a, b)', or '' when there are none."""
    if not note_parts:
        return ""
    return f" ({', '.join(note_parts)})"
