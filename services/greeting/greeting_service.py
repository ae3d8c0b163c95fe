"""
AI greeting for confirmed bookings.

Asks Claude for a short Hebrew WhatsApp message the operator can send to
the client. Failures never propagate: the caller always gets a string to
show, either the greeting or a fixed fallback message.
"""

import logging
import os
from typing import Any, Optional

import anthropic

from models.booking import BookingData
from services.prompts.greeting_prompt import build_greeting_prompt

logger = logging.getLogger(__name__)

DEFAULT_GREETING_MODEL = "claude-3-5-haiku-20241022"
GREETING_MAX_TOKENS = 1024

EMPTY_GREETING_MESSAGE = "Could not generate greeting."
GREETING_ERROR_MESSAGE = "Error communicating with AI."


class GreetingService:
    """Generates client greetings through the Anthropic Messages API."""

    def __init__(self, client: Optional[Any] = None, model: Optional[str] = None):
        """
        Args:
            client: Anthropic client; created from ANTHROPIC_API_KEY on
                first use when omitted
            model: Model name; defaults to GREETING_MODEL or
                DEFAULT_GREETING_MODEL
        """
        self._client = client
        self.model = model or os.getenv("GREETING_MODEL", DEFAULT_GREETING_MODEL)

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = anthropic.Anthropic(api_key=os.getenv("ANTHROPIC_API_KEY"))
        return self._client

    def generate(self, booking: BookingData) -> str:
        prompt = build_greeting_prompt(booking)

        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=GREETING_MAX_TOKENS,
                messages=[{"role": "user", "content": prompt}],
            )
            text = "".join(
                block.text for block in response.content if getattr(block, "type", "text") == "text"
            )
        except Exception as e:
            logger.error(f"Greeting generation failed: {e}")
            return GREETING_ERROR_MESSAGE

        if not text.strip():
            logger.warning(f"Empty greeting returned by {self.model}")
            return EMPTY_GREETING_MESSAGE

        logger.info(f"Generated greeting for order '{booking.order_number or '-'}'")
        return text
