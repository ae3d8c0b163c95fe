"""
Pytest configuration and fixtures.

Provides the yacht catalog from config/, a booking store in a temporary
directory, a stub Anthropic client, and a TestClient wired to both.
"""

import os

# Rate limits would trip across a full test run from one client address
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from types import SimpleNamespace
from decimal import Decimal

import pytest

from db.booking_store import BookingStore
from models.booking import BookingData, ExtraOption, PaymentMethod
from services.catalog import Catalog, reset_catalog
from services.greeting import GreetingService


class StubMessages:
    """Stands in for anthropic.Anthropic().messages."""

    def __init__(self, text="", error=None):
        self.text = text
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(content=[SimpleNamespace(type="text", text=self.text)])


class StubAnthropic:
    def __init__(self, text="", error=None):
        self.messages = StubMessages(text=text, error=error)


@pytest.fixture(scope="session")
def catalog():
    """Yacht and pricing tables from config/."""
    return Catalog.load()


@pytest.fixture
def yachts_db(catalog):
    return catalog.yachts_db


@pytest.fixture
def pricing_db(catalog):
    return catalog.pricing_db


@pytest.fixture
def store(tmp_path):
    """Empty booking store backed by a temporary file."""
    return BookingStore(str(tmp_path / "bookings.json"))


@pytest.fixture
def block_store_writes(store):
    """Make the store's next write fail by putting a directory where its temp file goes."""
    def block():
        store.path.with_name(store.path.name + ".tmp").mkdir()
    return block


@pytest.fixture
def agent_booking():
    """
    Agent referral on Li-Yam: 2 hours, 12 passengers, champagne.

    Client price 1100 + 120 = 1220; 20% commission = 244.
    """
    return BookingData(
        client_name="ישראל ישראלי",
        phone="+972-50-1234567",
        date="2025-07-14",
        start_time="18:00",
        end_time="20:00",
        yacht_name="לי-ים",
        passengers=12,
        price=Decimal("0"),
        down_payment=Decimal("500"),
        payment_method=PaymentMethod.CREDIT_CARD,
        selected_extras=[ExtraOption.CHAMPAGNE],
    )


@pytest.fixture
def leader_booking():
    """
    House booking on Louise: 2.5 hours, order 30001.

    Client price 950 + 400 = 1350; house cost round(2.5 x 300) = 750.
    """
    return BookingData(
        client_name="דנה כהן",
        phone="052-7654321",
        date="2025-08-01",
        start_time="10:00",
        end_time="12:30",
        yacht_name="לואיז",
        passengers=10,
        payment_method=PaymentMethod.PAYBOX_TRANSFER,
        is_leader=True,
        order_number="30001",
    )


@pytest.fixture
def stub_anthropic():
    return StubAnthropic(text="שלום ישראל! ההזמנה שלך אושרה 🛥️")


@pytest.fixture
def make_anthropic():
    """Factory for stub clients with a given reply text or error."""
    return StubAnthropic


@pytest.fixture
def client(store, stub_anthropic):
    """TestClient using the temporary store and the stub greeting client."""
    from fastapi.testclient import TestClient

    from api.dependencies import get_greeting_service, require_store
    from main import app

    reset_catalog()
    app.dependency_overrides[require_store] = lambda: store
    app.dependency_overrides[get_greeting_service] = lambda: GreetingService(client=stub_anthropic)

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    reset_catalog()
