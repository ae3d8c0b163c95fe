"""
Storage module for saved bookings.

This module provides the storage layer for:
- Saved bookings, addressed by list position
- The running order-number counter
"""

from .booking_store import (
    BookingStore,
    BookingStoreError,
    BookingNotFound,
    OrderNumberAlreadyAssigned,
    get_booking_store,
    reset_booking_store,
)

__all__ = [
    'BookingStore',
    'BookingStoreError',
    'BookingNotFound',
    'OrderNumberAlreadyAssigned',
    'get_booking_store',
    'reset_booking_store',
]
