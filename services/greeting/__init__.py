"""Client greeting generation."""

from .greeting_service import (
    GreetingService,
    EMPTY_GREETING_MESSAGE,
    GREETING_ERROR_MESSAGE,
)

__all__ = [
    "GreetingService",
    "EMPTY_GREETING_MESSAGE",
    "GREETING_ERROR_MESSAGE",
]
