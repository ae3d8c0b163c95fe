"""
Tests for the JSON booking store and the browser localStorage import.
"""

import json
import pytest
from datetime import date

from db.booking_store import (
    BookingNotFound,
    BookingStore,
    BookingStoreError,
    INITIAL_ORDER_NUMBER,
    OrderNumberAlreadyAssigned,
)
from db.local_storage_import import parse_local_storage_dump
from models.booking import BookingData, ExtraOption, PaymentMethod


def test_new_draft_defaults():
    draft = BookingStore.new_draft()

    assert draft.date == date.today().isoformat()
    assert (draft.start_time, draft.end_time) == ("10:00", "12:00")
    assert draft.passengers == 0
    assert draft.price == 0
    assert draft.payment_method == PaymentMethod.CREDIT_CARD
    assert draft.selected_extras == [ExtraOption.NONE]
    assert draft.is_leader is False
    assert draft.order_number is None


def test_empty_store_starts_at_initial_counter(store):
    assert store.count() == 0
    assert store.order_counter == INITIAL_ORDER_NUMBER


def test_assign_order_number_saves_and_increments(store):
    index, saved = store.assign_order_number(BookingData(client_name="א"))

    assert index == 0
    assert saved.order_number == "30000"
    assert store.order_counter == 30001

    index, saved = store.assign_order_number(BookingData(client_name="ב"))
    assert index == 1
    assert saved.order_number == "30001"


def test_assign_order_number_refuses_numbered_booking(store):
    with pytest.raises(OrderNumberAlreadyAssigned):
        store.assign_order_number(BookingData(order_number="30000"))
    assert store.count() == 0
    assert store.order_counter == INITIAL_ORDER_NUMBER


def test_store_persists_across_instances(store):
    store.assign_order_number(BookingData(client_name="א", selected_extras=[ExtraOption.DINNER]))

    reopened = BookingStore(str(store.path))
    assert reopened.count() == 1
    assert reopened.get(0).client_name == "א"
    assert reopened.get(0).selected_extras == [ExtraOption.DINNER]
    assert reopened.order_counter == 30001


def test_counter_catches_up_with_saved_order_numbers(tmp_path):
    path = tmp_path / "bookings.json"
    path.write_text(json.dumps({
        "saved_bookings": [{"client_name": "א", "order_number": "30041"}],
        "order_counter": 30005,
    }), encoding="utf-8")

    assert BookingStore(str(path)).order_counter == 30042


def test_load_normalises_stored_bookings(tmp_path):
    path = tmp_path / "bookings.json"
    path.write_text(json.dumps({
        "saved_bookings": [{"client_name": "א", "selected_extras": [], "order_number": 30002}],
    }), encoding="utf-8")

    booking = BookingStore(str(path)).get(0)
    assert booking.selected_extras == [ExtraOption.NONE]
    assert booking.on_site_payment == 0
    assert booking.order_number == "30002"


def test_corrupt_store_raises(tmp_path):
    path = tmp_path / "bookings.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(BookingStoreError):
        BookingStore(str(path))


def test_get_out_of_range(store):
    with pytest.raises(BookingNotFound):
        store.get(0)
    with pytest.raises(BookingNotFound):
        store.get(-1)


def test_update_replaces_booking(store):
    index, saved = store.assign_order_number(BookingData(client_name="א"))
    store.update(index, saved.model_copy(update={"client_name": "ב"}))

    assert store.get(index).client_name == "ב"
    assert BookingStore(str(store.path)).get(index).client_name == "ב"


def test_remove_and_next_index(store):
    for name in ("א", "ב", "ג"):
        store.assign_order_number(BookingData(client_name=name))

    removed = store.remove(1)
    assert removed.client_name == "ב"
    assert store.next_index_after_removal(1) == 1
    assert store.get(1).client_name == "ג"

    store.remove(1)
    assert store.next_index_after_removal(1) == 0

    store.remove(0)
    assert store.next_index_after_removal(0) == -1


def test_removal_does_not_reuse_order_numbers(store):
    store.assign_order_number(BookingData(client_name="א"))
    store.remove(0)
    _, saved = store.assign_order_number(BookingData(client_name="ב"))
    assert saved.order_number == "30001"


# =============================================================================
# localStorage import
# =============================================================================

BROWSER_BOOKING = {
    "clientName": "ישראל ישראלי",
    "phone": "050-1234567",
    "date": "2025-07-14",
    "startTime": "18:00",
    "endTime": "20:00",
    "yachtName": "לי-ים",
    "passengers": 12,
    "price": 1100,
    "downPayment": 500,
    "paymentMethod": "paybox_transfer",
    "selectedExtras": ["champagne"],
    "isLeader": False,
    "orderNumber": "30007",
}


def test_parse_local_storage_dump():
    dump = {
        "leaderCruises_savedBookings": json.dumps([BROWSER_BOOKING]),
        "orderCounter": "30008",
    }
    bookings, counter = parse_local_storage_dump(dump)

    assert counter == 30008
    assert len(bookings) == 1
    booking = bookings[0]
    assert booking.client_name == "ישראל ישראלי"
    assert booking.down_payment == 500
    assert booking.payment_method == PaymentMethod.PAYBOX_TRANSFER
    assert booking.on_site_payment == 0
    assert booking.order_number == "30007"


def test_parse_bare_bookings_array():
    bookings, counter = parse_local_storage_dump([BROWSER_BOOKING])
    assert counter is None
    assert bookings[0].yacht_name == "לי-ים"


def test_import_bookings_moves_counter_forward(store):
    bookings, counter = parse_local_storage_dump([BROWSER_BOOKING])
    assert store.import_bookings(bookings, counter) == 1

    assert store.order_counter == 30008
    _, saved = store.assign_order_number(BookingData(client_name="ב"))
    assert saved.order_number == "30008"


def test_failed_import_leaves_store_unchanged(store, block_store_writes):
    store.assign_order_number(BookingData(client_name="א"))
    block_store_writes()

    bookings, counter = parse_local_storage_dump([BROWSER_BOOKING])
    with pytest.raises(BookingStoreError):
        store.import_bookings(bookings, counter)

    assert store.count() == 1
    assert store.order_counter == 30001
    assert [b.client_name for b in store.list()] == ["א"]
