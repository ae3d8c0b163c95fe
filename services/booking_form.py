"""
Booking form rules: extras selection and passenger presets.

Fishing trips only leave from Herzliya, so the fishing extra can only be
picked for a Herzliya yacht and is dropped when the yacht changes to one
elsewhere. The 'none' marker and real extras are mutually exclusive.
"""

import logging
from typing import List, Optional

from models.booking import (
    BookingData,
    City,
    ExtraOption,
    PassengerMode,
    YachtInfo,
)
from services.catalog import EXTRAS_MAP

logger = logging.getLogger(__name__)

COUPLE_PASSENGERS = 2
FISHING_HERZLIYA_NAME = "דייג בהרצליה"


def _in_herzliya(yacht_info: Optional[YachtInfo]) -> bool:
    return yacht_info is not None and yacht_info.city == City.HERZLIYA


def is_extra_available(option: ExtraOption, yacht_info: Optional[YachtInfo]) -> bool:
    return option != ExtraOption.FISHING or _in_herzliya(yacht_info)


def toggle_extra(
    selection: List[ExtraOption],
    option: ExtraOption,
    yacht_info: Optional[YachtInfo]
) -> List[ExtraOption]:
    """
    Apply one click on an extras option.

    Args:
        selection: Currently selected options
        option: The option clicked
        yacht_info: The booked yacht, or None when unknown

    Returns:
        The new selection; never empty (falls back to ['none'])
    """
    if not is_extra_available(option, yacht_info):
        logger.debug("Ignoring fishing toggle for a yacht outside Herzliya")
        return list(selection)

    if option == ExtraOption.NONE:
        updated = [] if ExtraOption.NONE in selection else [ExtraOption.NONE]
    elif option in selection:
        updated = [item for item in selection if item != option]
    else:
        updated = [item for item in selection if item != ExtraOption.NONE] + [option]

    return updated or [ExtraOption.NONE]


def prune_unavailable_extras(
    selection: List[ExtraOption],
    yacht_info: Optional[YachtInfo]
) -> List[ExtraOption]:
    """Drop fishing once a known yacht outside Herzliya is chosen."""
    if ExtraOption.FISHING in selection and yacht_info is not None and not _in_herzliya(yacht_info):
        return [item for item in selection if item != ExtraOption.FISHING]
    return list(selection)


def extra_display_name(option: ExtraOption, yacht_info: Optional[YachtInfo]) -> str:
    if option == ExtraOption.FISHING and _in_herzliya(yacht_info):
        return FISHING_HERZLIYA_NAME
    return EXTRAS_MAP[option]


def apply_passenger_mode(
    booking: BookingData,
    mode: PassengerMode,
    yacht_info: Optional[YachtInfo]
) -> BookingData:
    """Return a copy of the booking with the preset passenger count applied."""
    if mode == PassengerMode.COUPLE:
        return booking.model_copy(update={"passengers": COUPLE_PASSENGERS})
    if mode == PassengerMode.MAX and yacht_info is not None and yacht_info.max > 0:
        return booking.model_copy(update={"passengers": yacht_info.max})
    return booking.model_copy()


def infer_passenger_mode(
    booking: BookingData,
    yacht_info: Optional[YachtInfo]
) -> Optional[PassengerMode]:
    """Which preset a loaded booking matches, if any."""
    if booking.passengers == COUPLE_PASSENGERS:
        return PassengerMode.COUPLE
    max_passengers = yacht_info.max if yacht_info else 0
    if max_passengers > 0 and booking.passengers == max_passengers:
        return PassengerMode.MAX
    return None
