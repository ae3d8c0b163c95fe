"""
Unit tests for the extras selector and passenger presets.
"""

import pytest

from models.booking import BookingData, City, ExtraOption, PassengerMode, YachtInfo
from services.booking_form import (
    FISHING_HERZLIYA_NAME,
    apply_passenger_mode,
    extra_display_name,
    infer_passenger_mode,
    is_extra_available,
    prune_unavailable_extras,
    toggle_extra,
)

HERZLIYA_YACHT = YachtInfo(max=12, city=City.HERZLIYA)
HAIFA_YACHT = YachtInfo(max=40, city=City.HAIFA)

NONE = ExtraOption.NONE
CHAMPAGNE = ExtraOption.CHAMPAGNE
FISHING = ExtraOption.FISHING
DINNER = ExtraOption.DINNER


# =============================================================================
# Extras toggle
# =============================================================================

def test_selecting_extra_replaces_none():
    assert toggle_extra([NONE], CHAMPAGNE, HERZLIYA_YACHT) == [CHAMPAGNE]


def test_selecting_second_extra_appends():
    assert toggle_extra([CHAMPAGNE], DINNER, HERZLIYA_YACHT) == [CHAMPAGNE, DINNER]


def test_deselecting_last_extra_falls_back_to_none():
    assert toggle_extra([CHAMPAGNE], CHAMPAGNE, HERZLIYA_YACHT) == [NONE]


def test_clicking_none_clears_extras():
    assert toggle_extra([CHAMPAGNE, DINNER], NONE, HERZLIYA_YACHT) == [NONE]


def test_clicking_selected_none_keeps_none():
    # Deselecting 'none' leaves nothing, which falls back to 'none'
    assert toggle_extra([NONE], NONE, HERZLIYA_YACHT) == [NONE]


def test_fishing_only_in_herzliya():
    assert toggle_extra([NONE], FISHING, HERZLIYA_YACHT) == [FISHING]
    assert toggle_extra([NONE], FISHING, HAIFA_YACHT) == [NONE]
    assert toggle_extra([CHAMPAGNE], FISHING, None) == [CHAMPAGNE]


def test_is_extra_available():
    assert is_extra_available(CHAMPAGNE, None)
    assert is_extra_available(FISHING, HERZLIYA_YACHT)
    assert not is_extra_available(FISHING, HAIFA_YACHT)


def test_prune_drops_fishing_for_known_yacht_elsewhere():
    assert prune_unavailable_extras([FISHING, DINNER], HAIFA_YACHT) == [DINNER]
    assert prune_unavailable_extras([FISHING], HERZLIYA_YACHT) == [FISHING]
    # Unknown yacht: leave the selection alone
    assert prune_unavailable_extras([FISHING], None) == [FISHING]


def test_extra_display_name():
    assert extra_display_name(FISHING, HERZLIYA_YACHT) == FISHING_HERZLIYA_NAME
    assert extra_display_name(FISHING, HAIFA_YACHT) == "דייג"
    assert extra_display_name(CHAMPAGNE, HERZLIYA_YACHT) == "בקבוק שמפניה"


# =============================================================================
# Passenger presets
# =============================================================================

def test_couple_mode_sets_two_passengers():
    booking = apply_passenger_mode(BookingData(passengers=9), PassengerMode.COUPLE, HAIFA_YACHT)
    assert booking.passengers == 2


def test_max_mode_sets_yacht_maximum():
    booking = apply_passenger_mode(BookingData(passengers=2), PassengerMode.MAX, HAIFA_YACHT)
    assert booking.passengers == 40


def test_max_mode_without_yacht_is_noop():
    booking = apply_passenger_mode(BookingData(passengers=5), PassengerMode.MAX, None)
    assert booking.passengers == 5


@pytest.mark.parametrize("passengers,yacht,expected", [
    (2, HERZLIYA_YACHT, PassengerMode.COUPLE),
    (2, None, PassengerMode.COUPLE),
    (12, HERZLIYA_YACHT, PassengerMode.MAX),
    (7, HERZLIYA_YACHT, None),
    (0, None, None),
])
def test_infer_passenger_mode(passengers, yacht, expected):
    assert infer_passenger_mode(BookingData(passengers=passengers), yacht) == expected
