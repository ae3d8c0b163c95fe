"""
Tests for the greeting prompt and GreetingService with a stub client.
"""

from decimal import Decimal

from models.booking import BookingData
from services.greeting import EMPTY_GREETING_MESSAGE, GREETING_ERROR_MESSAGE, GreetingService
from services.greeting.greeting_service import DEFAULT_GREETING_MODEL
from services.prompts import build_greeting_prompt


def test_prompt_contains_booking_details(agent_booking):
    booking = agent_booking.model_copy(update={"price": Decimal("1220"), "order_number": "30000"})
    prompt = build_greeting_prompt(booking)

    assert "Name: ישראל ישראלי" in prompt
    assert "Date: 14/07/2025" in prompt
    assert "Time: 18:00 to 20:00" in prompt
    assert "Yacht: לי-ים" in prompt
    assert "תוספות שנבחרו: בקבוק שמפניה." in prompt
    assert "מספר הזמנה: 30000." in prompt
    assert "Total Price: 1220" in prompt
    assert "Paid Downpayment: 500" in prompt
    assert "the rest of the payment is 720 NIS" in prompt
    assert "HEBREW" in prompt


def test_prompt_without_extras_or_order_number():
    prompt = build_greeting_prompt(BookingData(client_name="א", date="2025-08-01"))

    assert "ללא תוספות מיוחדות." in prompt
    assert "מספר הזמנה" not in prompt
    assert "Date: 01/08/2025" in prompt


def test_generate_returns_model_text(agent_booking, stub_anthropic):
    service = GreetingService(client=stub_anthropic, model="test-model")

    assert service.generate(agent_booking) == "שלום ישראל! ההזמנה שלך אושרה 🛥️"

    call = stub_anthropic.messages.calls[0]
    assert call["model"] == "test-model"
    assert call["messages"] == [{"role": "user", "content": build_greeting_prompt(agent_booking)}]


def test_blank_response_returns_fallback(agent_booking, make_anthropic):
    service = GreetingService(client=make_anthropic(text="  "))
    assert service.generate(agent_booking) == EMPTY_GREETING_MESSAGE


def test_api_error_returns_error_message(agent_booking, make_anthropic):
    service = GreetingService(client=make_anthropic(error=RuntimeError("connection reset")))
    assert service.generate(agent_booking) == GREETING_ERROR_MESSAGE


def test_model_from_environment(monkeypatch, stub_anthropic):
    monkeypatch.setenv("GREETING_MODEL", "env-model")
    assert GreetingService(client=stub_anthropic).model == "env-model"

    monkeypatch.delenv("GREETING_MODEL")
    assert GreetingService(client=stub_anthropic).model == DEFAULT_GREETING_MODEL
