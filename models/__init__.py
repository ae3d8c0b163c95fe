"""
Pydantic models for the booking system.

This module exports the booking record, the yacht lookup table models,
the derived pricing/settlement/document results and the API request and
response models.
"""

from .booking import (
    # Enums
    PaymentMethod,
    ExtraOption,
    City,
    RateKind,
    PassengerMode,
    # Booking
    BookingData,
    # Lookup tables
    YachtInfo,
    RateTable,
    YachtPricing,
    # Derived results
    PriceQuote,
    Settlement,
    GenerationResult,
    # Request/response models
    SavedBooking,
    SavedBookingListResponse,
    AssignOrderNumberResponse,
    QuoteResponse,
    GenerateDocumentsResponse,
    GreetingResponse,
    ToggleExtraRequest,
    ToggleExtraResponse,
)

__all__ = [
    # Enums
    "PaymentMethod",
    "ExtraOption",
    "City",
    "RateKind",
    "PassengerMode",
    # Booking
    "BookingData",
    # Lookup tables
    "YachtInfo",
    "RateTable",
    "YachtPricing",
    # Derived results
    "PriceQuote",
    "Settlement",
    "GenerationResult",
    # Request/response models
    "SavedBooking",
    "SavedBookingListResponse",
    "AssignOrderNumberResponse",
    "QuoteResponse",
    "GenerateDocumentsResponse",
    "GreetingResponse",
    "ToggleExtraRequest",
    "ToggleExtraResponse",
]
