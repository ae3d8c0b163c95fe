"""
Supplier settlement: net cost, referral commission and who owes whom.

Two booking modes:

- Agent booking: the agent refers a client to the supplier. Yachts with
  special agent rates pay a 20% commission on the client price; the
  supplier's net is the client price minus that commission.
- Leader (house) booking: no commission. Yachts in the hourly-rate groups
  cost the house a fixed hourly rate plus extras; any other yacht costs
  the full client price.
"""

import logging
from decimal import Decimal
from typing import FrozenSet

from models.booking import BookingData, PaymentMethod, PriceQuote, Settlement
from services.pricing.engine import round_half_up

logger = logging.getLogger(__name__)

HOURLY_350_YACHTS: FrozenSet[str] = frozenset({"לי-ים", "ליים", "ג׳וי", "ג'וי", "גוי"})
HOURLY_300_YACHTS: FrozenSet[str] = frozenset({"לואיז", "לויז", "בגירה"})
SPECIAL_AGENT_RATE_YACHTS: FrozenSet[str] = HOURLY_350_YACHTS | HOURLY_300_YACHTS

LEADER_HOURLY_RATES = (
    (HOURLY_350_YACHTS, Decimal("350")),
    (HOURLY_300_YACHTS, Decimal("300")),
)

AGENT_COMMISSION_RATE = Decimal("0.2")
AGENT_COMMISSION_LABEL = "20 אחוז"

_ZERO = Decimal("0")


def leader_hourly_rate(yacht_name: str) -> Decimal:
    """House hourly rate for a yacht, or 0 when it is not in an hourly group."""
    for group, rate in LEADER_HOURLY_RATES:
        if yacht_name in group:
            return rate
    return _ZERO


def calculate_settlement(booking: BookingData, quote: PriceQuote) -> Settlement:
    """
    Derive the money flows of a booking from its quote.

    Args:
        booking: The booking
        quote: Result of quote_price() for the same booking

    Returns:
        Settlement with net cost, commission and the amounts due each way
    """
    yacht = booking.yacht_name.strip()
    client_price = quote.client_price

    if booking.is_leader:
        hourly_rate = leader_hourly_rate(yacht)
        if hourly_rate:
            net_cost = round_half_up(quote.duration * hourly_rate) + quote.extras_price
        else:
            net_cost = client_price
        commission = _ZERO
    elif yacht in SPECIAL_AGENT_RATE_YACHTS:
        commission = client_price * AGENT_COMMISSION_RATE
        net_cost = client_price - commission
    else:
        commission = _ZERO
        net_cost = client_price

    remaining_client = client_price - booking.down_payment

    if booking.is_leader:
        on_site = _ZERO
    elif booking.on_site_payment != 0:
        on_site = booking.on_site_payment
    else:
        on_site = remaining_client

    paid_at_supplier = booking.down_payment if booking.payment_method == PaymentMethod.CREDIT_CARD else _ZERO
    paid_at_agent = booking.down_payment if booking.payment_method == PaymentMethod.PAYBOX_TRANSFER else _ZERO

    due_to_supplier = max(_ZERO, net_cost - paid_at_supplier - on_site)
    due_to_agent = max(_ZERO, commission - paid_at_agent)

    logger.debug(
        f"Settlement for '{yacht}' (leader={booking.is_leader}): "
        f"net={net_cost}, commission={commission}, on_site={on_site}, "
        f"due_to_supplier={due_to_supplier}, due_to_agent={due_to_agent}"
    )

    return Settlement(
        net_cost=net_cost,
        commission=commission,
        remaining_client=remaining_client,
        effective_on_site_payment=on_site,
        paid_at_supplier=paid_at_supplier,
        paid_at_agent=paid_at_agent,
        due_from_agent_to_supplier=due_to_supplier,
        due_to_agent=due_to_agent,
    )
