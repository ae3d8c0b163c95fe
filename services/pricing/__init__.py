"""
Pricing and settlement calculations for charter bookings.

Pure functions over a booking and the yacht pricing table; nothing here
touches storage or the network.
"""

from .engine import (
    calculate_duration,
    night_surcharge,
    lookup_rate,
    tariff_price,
    extras_total,
    quote_price,
    auto_price,
    format_price_note,
)
from .settlement import (
    calculate_settlement,
    leader_hourly_rate,
    SPECIAL_AGENT_RATE_YACHTS,
)

__all__ = [
    'calculate_duration',
    'night_surcharge',
    'lookup_rate',
    'tariff_price',
    'extras_total',
    'quote_price',
    'auto_price',
    'format_price_note',
    'calculate_settlement',
    'leader_hourly_rate',
    'SPECIAL_AGENT_RATE_YACHTS',
]
