"""
Import of bookings saved by the browser version of the booking tool.

The browser kept two localStorage keys: the saved bookings as a JSON array
of camelCase objects, and the order counter as a string. A dump of those
keys (or just the bookings array) converts to BookingData here.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from models.booking import BookingData
from .booking_store import BookingStoreError

logger = logging.getLogger(__name__)

SAVED_BOOKINGS_KEY = "leaderCruises_savedBookings"
ORDER_COUNTER_KEY = "orderCounter"

FIELD_NAMES = {
    "clientName": "client_name",
    "phone": "phone",
    "date": "date",
    "startTime": "start_time",
    "endTime": "end_time",
    "yachtName": "yacht_name",
    "passengers": "passengers",
    "price": "price",
    "downPayment": "down_payment",
    "onSitePayment": "on_site_payment",
    "paymentMethod": "payment_method",
    "selectedExtras": "selected_extras",
    "isLeader": "is_leader",
    "orderNumber": "order_number",
}


def booking_from_local_storage(raw: Dict[str, Any]) -> BookingData:
    """
    Convert one camelCase browser booking.

    Unknown keys are dropped; missing keys take the draft defaults.

    Raises:
        BookingStoreError: If the booking does not validate
    """
    data = {FIELD_NAMES[key]: value for key, value in raw.items() if key in FIELD_NAMES}
    try:
        return BookingData.model_validate(data)
    except ValidationError as e:
        raise BookingStoreError(f"Invalid browser booking {raw.get('orderNumber') or '-'}: {e}")


def _decode(value: Any) -> Any:
    # localStorage holds strings; a hand-made dump may hold parsed JSON
    if isinstance(value, str):
        return json.loads(value)
    return value


def parse_local_storage_dump(dump: Any) -> Tuple[List[BookingData], Optional[int]]:
    """
    Parse a localStorage dump.

    Args:
        dump: Either the bookings array itself or an object with the
            saved-bookings and order-counter keys

    Returns:
        (bookings, order counter or None when the dump has none)
    """
    counter = None
    if isinstance(dump, dict):
        try:
            raw_bookings = _decode(dump.get(SAVED_BOOKINGS_KEY) or [])
            raw_counter = dump.get(ORDER_COUNTER_KEY)
            if raw_counter not in (None, ""):
                counter = int(_decode(raw_counter))
        except (TypeError, ValueError) as e:
            raise BookingStoreError(f"Malformed localStorage dump: {e}")
    else:
        raw_bookings = dump

    if not isinstance(raw_bookings, list):
        raise BookingStoreError("Saved bookings in the dump must be a JSON array")

    bookings = [booking_from_local_storage(item) for item in raw_bookings]
    logger.info(f"Parsed {len(bookings)} browser bookings (order counter {counter})")
    return bookings, counter
