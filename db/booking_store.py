"""
Saved bookings store.

Saved bookings and the next order number live in a single JSON file:

    {"saved_bookings": [...], "order_counter": 30001}

Bookings are addressed by their position in the saved list, the same way
the operator pages through them.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from models.booking import BookingData

logger = logging.getLogger(__name__)

DEFAULT_STORE_PATH = "data/bookings.json"
INITIAL_ORDER_NUMBER = 30000


class BookingStoreError(Exception):
    """Raised when the store file cannot be read or written."""
    pass


class BookingNotFound(BookingStoreError):
    """Raised when an index does not address a saved booking."""

    def __init__(self, index: int, total: int):
        self.index = index
        self.total = total
        super().__init__(f"No saved booking at index {index} ({total} saved)")


class OrderNumberAlreadyAssigned(BookingStoreError):
    """Raised when saving a booking that already carries an order number."""

    def __init__(self, order_number: str):
        self.order_number = order_number
        super().__init__(f"Booking already has order number {order_number}")


def highest_order_number(bookings: List[BookingData]) -> Optional[int]:
    """Largest numeric order number among the bookings, if any."""
    numbers = [
        int(b.order_number)
        for b in bookings
        if b.order_number and b.order_number.strip().isdigit()
    ]
    return max(numbers) if numbers else None


class BookingStore:
    """
    JSON file repository for saved bookings and the order counter.

    Example:
        store = BookingStore("data/bookings.json")
        index, booking = store.assign_order_number(store.new_draft())
    """

    def __init__(self, path: Optional[str] = None):
        """
        Initialize the store and load the file if it exists.

        Args:
            path: Store file path (defaults to BOOKINGS_STORE_PATH env var)
        """
        self._path = Path(path or os.getenv("BOOKINGS_STORE_PATH", DEFAULT_STORE_PATH))
        self._bookings: List[BookingData] = []
        self._order_counter = INITIAL_ORDER_NUMBER
        self.load()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def order_counter(self) -> int:
        """The order number the next saved booking will receive."""
        return self._order_counter

    # =========================================================================
    # Persistence
    # =========================================================================

    def load(self) -> None:
        """
        Read the store file.

        A missing file is an empty store. The counter never falls behind
        the highest order number already saved.

        Raises:
            BookingStoreError: If the file is unreadable or malformed
        """
        if not self._path.exists():
            logger.info(f"No booking store at {self._path}, starting empty")
            self._bookings = []
            self._order_counter = INITIAL_ORDER_NUMBER
            return

        try:
            with open(self._path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise BookingStoreError(f"Cannot read booking store {self._path}: {e}")

        if not isinstance(raw, dict):
            raise BookingStoreError(f"Booking store {self._path} must contain an object")

        try:
            bookings = [BookingData.model_validate(item) for item in raw.get("saved_bookings") or []]
        except ValidationError as e:
            raise BookingStoreError(f"Invalid booking in {self._path}: {e}")

        stored_counter = raw.get("order_counter") or INITIAL_ORDER_NUMBER
        try:
            counter = int(stored_counter)
        except (TypeError, ValueError):
            logger.warning(f"Ignoring invalid order counter {stored_counter!r} in {self._path}")
            counter = INITIAL_ORDER_NUMBER

        highest = highest_order_number(bookings)
        if highest is not None and highest + 1 > counter:
            counter = highest + 1

        self._bookings = bookings
        self._order_counter = counter
        logger.info(
            f"Loaded {len(bookings)} saved bookings from {self._path} "
            f"(next order number {counter})"
        )

    def _save(self) -> None:
        payload: Dict[str, Any] = {
            "saved_bookings": [b.model_dump(mode="json") for b in self._bookings],
            "order_counter": self._order_counter,
        }

        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self._path)
        except OSError as e:
            raise BookingStoreError(f"Cannot write booking store {self._path}: {e}")

    # =========================================================================
    # Bookings
    # =========================================================================

    @staticmethod
    def new_draft() -> BookingData:
        """A blank booking: today, 10:00-12:00, credit card, no extras."""
        return BookingData()

    def list(self) -> List[BookingData]:
        return [b.model_copy(deep=True) for b in self._bookings]

    def count(self) -> int:
        return len(self._bookings)

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= len(self._bookings):
            raise BookingNotFound(index, len(self._bookings))

    def get(self, index: int) -> BookingData:
        """
        Raises:
            BookingNotFound: If index is outside the saved list
        """
        self._check_index(index)
        return self._bookings[index].model_copy(deep=True)

    def update(self, index: int, booking: BookingData) -> BookingData:
        """Replace the saved booking at index and persist."""
        self._check_index(index)
        self._bookings[index] = booking.model_copy(deep=True)
        self._save()
        logger.info(f"Updated saved booking {index} (order {booking.order_number or '-'})")
        return booking

    def assign_order_number(self, booking: BookingData) -> Tuple[int, BookingData]:
        """
        Give a booking the next order number and save it.

        Args:
            booking: A booking without an order number

        Returns:
            (index of the saved booking, booking with its order number)

        Raises:
            OrderNumberAlreadyAssigned: If the booking is already numbered
        """
        if booking.order_number:
            raise OrderNumberAlreadyAssigned(booking.order_number)

        numbered = booking.model_copy(update={"order_number": str(self._order_counter)})
        self._bookings.append(numbered)
        self._order_counter += 1

        try:
            self._save()
        except BookingStoreError:
            self._bookings.pop()
            self._order_counter -= 1
            raise

        index = len(self._bookings) - 1
        logger.info(f"Assigned order number {numbered.order_number} (index {index})")
        return index, numbered.model_copy(deep=True)

    def remove(self, index: int) -> BookingData:
        """Delete the saved booking at index and persist."""
        self._check_index(index)
        removed = self._bookings.pop(index)

        try:
            self._save()
        except BookingStoreError:
            self._bookings.insert(index, removed)
            raise

        logger.info(f"Removed saved booking {index} (order {removed.order_number or '-'})")
        return removed

    def import_bookings(
        self,
        bookings: List[BookingData],
        order_counter: Optional[int] = None
    ) -> int:
        """
        Append bookings from another source and persist.

        The counter moves forward to order_counter and past any imported
        order number; it never moves back.

        Returns:
            Number of bookings appended
        """
        previous_count = len(self._bookings)
        previous_counter = self._order_counter

        self._bookings.extend(b.model_copy(deep=True) for b in bookings)

        counter = max(self._order_counter, order_counter or INITIAL_ORDER_NUMBER)
        highest = highest_order_number(self._bookings)
        if highest is not None and highest + 1 > counter:
            counter = highest + 1
        self._order_counter = counter

        try:
            self._save()
        except BookingStoreError:
            del self._bookings[previous_count:]
            self._order_counter = previous_counter
            raise

        logger.info(f"Imported {len(bookings)} bookings (next order number {counter})")
        return len(bookings)

    def next_index_after_removal(self, removed_index: int) -> int:
        """
        Index to show after removing removed_index: the same position
        clamped to the last booking, or -1 when nothing is left.
        """
        if not self._bookings:
            return -1
        return min(removed_index, len(self._bookings) - 1)


_store: Optional[BookingStore] = None


def get_booking_store() -> BookingStore:
    """Return the process-wide booking store, opening it on first use."""
    global _store

    if _store is None:
        _store = BookingStore()
    return _store


def reset_booking_store() -> None:
    global _store
    _store = None
