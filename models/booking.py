"""
Pydantic models for charter bookings and the yacht lookup tables.

A booking is the single record the operator edits; everything else
(prices, settlement amounts, documents) is derived from it together with
the yacht and pricing tables loaded from config/.
"""

from enum import Enum
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import ClassVar, List, Dict, Optional, Any
from pydantic import BaseModel, Field, ConfigDict, field_validator


# =============================================================================
# ENUMS
# =============================================================================

class PaymentMethod(str, Enum):
    """Where the client's down payment was collected."""
    CREDIT_CARD = "credit_card"          # at the supplier
    PAYBOX_TRANSFER = "paybox_transfer"  # at the agent


class ExtraOption(str, Enum):
    """Paid extras a client can add to a cruise."""
    CHAMPAGNE = "champagne"
    FISHING = "fishing"
    BREAKFAST = "breakfast"
    DINNER = "dinner"
    NONE = "none"


class City(str, Enum):
    """Home marina of a yacht."""
    HAIFA = "Haifa"
    HERZLIYA = "Herzliya"


class RateKind(str, Enum):
    """Which source produced the base price of a quote."""
    STANDARD = "standard"
    COUPLE = "couple"
    MANUAL = "manual"
    NONE = "none"


class PassengerMode(str, Enum):
    """Passenger presets offered by the booking form."""
    COUPLE = "couple"
    MAX = "max"


# =============================================================================
# BOOKING
# =============================================================================

# HH:MM, minutes optional
TIME_PATTERN = r"^\d{1,2}(:\d{1,2})?$"


def _today_iso() -> str:
    return date.today().isoformat()


class BookingData(BaseModel):
    """A single charter booking as captured by the booking form."""

    client_name: str = Field("", description="Client full name")
    phone: str = Field("", description="Client phone number")
    date: str = Field(
        default_factory=_today_iso,
        description="Cruise date, YYYY-MM-DD or DD/MM/YYYY"
    )
    start_time: str = Field("10:00", pattern=TIME_PATTERN, description="Start time HH:MM")
    end_time: str = Field("12:00", pattern=TIME_PATTERN, description="End time HH:MM")
    yacht_name: str = Field("", description="Yacht name as listed in the yacht table")
    passengers: int = Field(0, ge=0, description="Passenger count (0 = yacht maximum)")
    price: Decimal = Field(Decimal("0"), description="Base price (0 = derive from pricing table)")
    down_payment: Decimal = Field(Decimal("0"), description="Down payment already collected")
    on_site_payment: Decimal = Field(
        Decimal("0"),
        description="Amount the client pays on site (0 = remaining balance)"
    )
    payment_method: PaymentMethod = Field(PaymentMethod.CREDIT_CARD)
    selected_extras: List[ExtraOption] = Field(default_factory=lambda: [ExtraOption.NONE])
    is_leader: bool = Field(False, description="House booking instead of an agent referral")
    order_number: Optional[str] = Field(None, description="Assigned order number")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "client_name": "ישראל ישראלי",
                "phone": "+972-50-1234567",
                "date": "2025-07-14",
                "start_time": "18:00",
                "end_time": "20:00",
                "yacht_name": "לי-ים",
                "passengers": 12,
                "price": 0,
                "down_payment": 500,
                "on_site_payment": 0,
                "payment_method": "credit_card",
                "selected_extras": ["champagne"],
                "is_leader": False,
                "order_number": None
            }
        }
    )

    @field_validator("selected_extras", mode="before")
    @classmethod
    def _default_extras(cls, value: Any) -> Any:
        if not value:
            return [ExtraOption.NONE]
        return value

    @field_validator("price", "down_payment", "on_site_payment", mode="before")
    @classmethod
    def _blank_amount(cls, value: Any) -> Any:
        # Form inputs send "" for an untouched number field
        if value is None or value == "":
            return Decimal("0")
        return value

    @field_validator("order_number", mode="before")
    @classmethod
    def _order_number_text(cls, value: Any) -> Any:
        if value is None or value == "":
            return None
        return str(value)

    @property
    def actual_extras(self) -> List[ExtraOption]:
        """Selected extras without the 'none' placeholder."""
        return [e for e in self.selected_extras if e != ExtraOption.NONE]


# =============================================================================
# LOOKUP TABLES
# =============================================================================

class YachtInfo(BaseModel):
    """Static metadata for one yacht."""

    max: int = Field(..., gt=0, description="Maximum passengers")
    city: City


class RateTable(BaseModel):
    """Duration-tiered rates, keyed by duration in hours ('1', '1.5', '2', ...)."""

    tiers: Dict[str, Decimal] = Field(default_factory=dict)
    extra_hour: Optional[Decimal] = None

    # Named keys accepted in the flat mapping shape of the pricing file
    NAMED_KEYS: ClassVar[Dict[str, str]] = {"extraHour": "extra_hour", "extra_hour": "extra_hour"}

    def tier(self, key: str) -> Optional[Decimal]:
        """Return the tier for a duration key, or None when absent or zero."""
        value = self.tiers.get(key)
        if not value:
            return None
        return value

    @classmethod
    def from_mapping(cls, raw: Dict[str, Any]) -> "RateTable":
        """Build a table from {"2": 1200, "3": 1600, "extraHour": 400}."""
        tiers, named = _split_rate_mapping(raw, cls.NAMED_KEYS)
        return cls(tiers=tiers, **named)


class YachtPricing(RateTable):
    """Pricing for one yacht: standard tiers plus optional couple rates."""

    note: Optional[str] = None
    couple_rates: Optional[RateTable] = None

    NAMED_KEYS: ClassVar[Dict[str, str]] = {
        "extraHour": "extra_hour",
        "extra_hour": "extra_hour",
        "note": "note",
        "coupleRates": "couple_rates",
        "couple_rates": "couple_rates",
    }

    @classmethod
    def from_mapping(cls, raw: Dict[str, Any]) -> "YachtPricing":
        tiers, named = _split_rate_mapping(raw, cls.NAMED_KEYS)
        couple = named.pop("couple_rates", None)
        if couple is not None:
            named["couple_rates"] = RateTable.from_mapping(couple)
        return cls(tiers=tiers, **named)


def _split_rate_mapping(raw: Dict[str, Any], named_keys: Dict[str, str]):
    """Split a flat pricing mapping into numeric tiers and named fields."""
    tiers: Dict[str, Decimal] = {}
    named: Dict[str, Any] = {}

    if not isinstance(raw, dict):
        raise ValueError(f"Pricing entry must be a mapping, got {type(raw).__name__}")

    for key, value in raw.items():
        key = str(key)
        if key in named_keys:
            named[named_keys[key]] = value
            continue
        try:
            Decimal(key)
        except InvalidOperation:
            raise ValueError(f"Unknown pricing key: '{key}'")
        try:
            tiers[key] = Decimal(str(value))
        except InvalidOperation:
            raise ValueError(f"Rate for '{key}' is not a number: {value!r}")

    return tiers, named


# =============================================================================
# DERIVED RESULTS
# =============================================================================

class PriceQuote(BaseModel):
    """Client-facing price of a booking."""

    duration: Decimal
    base_price: Decimal
    night_surcharge: Decimal
    extras_price: Decimal
    client_price: Decimal
    price_note_parts: List[str] = Field(default_factory=list)
    rate_kind: RateKind


class Settlement(BaseModel):
    """Money flows between client, agent and supplier for one booking."""

    net_cost: Decimal
    commission: Decimal
    remaining_client: Decimal
    effective_on_site_payment: Decimal
    paid_at_supplier: Decimal
    paid_at_agent: Decimal
    due_from_agent_to_supplier: Decimal
    due_to_agent: Decimal


class GenerationResult(BaseModel):
    """The four text artifacts produced for a booking."""

    file1_blank_client: str
    file2_blank_supplier: str
    file3_excel_detailed: str
    file4_excel_summary: str


# =============================================================================
# REQUEST / RESPONSE MODELS
# =============================================================================

class SavedBooking(BaseModel):
    """A booking in the saved list with its position."""

    index: int
    booking: BookingData
    passenger_mode: Optional[PassengerMode] = None


class SavedBookingListResponse(BaseModel):
    """Response for listing saved bookings."""
    success: bool = True
    bookings: List[SavedBooking]
    total: int
    next_order_number: int


class AssignOrderNumberResponse(BaseModel):
    """Response after assigning an order number and saving a booking."""
    success: bool = True
    index: int
    booking: BookingData


class QuoteResponse(BaseModel):
    """Response for a price quote request."""
    success: bool = True
    auto_price: Decimal
    quote: PriceQuote
    settlement: Settlement


class GenerateDocumentsResponse(BaseModel):
    """Response carrying the four rendered documents."""
    success: bool = True
    documents: GenerationResult


class GreetingResponse(BaseModel):
    """Response carrying the AI greeting text."""
    success: bool = True
    greeting: str


class ToggleExtraRequest(BaseModel):
    """Request to apply one click on the extras selector."""

    selected_extras: List[ExtraOption] = Field(default_factory=lambda: [ExtraOption.NONE])
    option: ExtraOption
    yacht_name: str = ""


class ToggleExtraResponse(BaseModel):
    """Resulting extras selection."""
    success: bool = True
    selected_extras: List[ExtraOption]
