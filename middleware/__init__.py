"""Request middleware for the booking API."""

from .rate_limiter import (
    RATE_LIMITS,
    limiter,
    rate_limit,
    setup_rate_limiting,
)

__all__ = [
    "RATE_LIMITS",
    "limiter",
    "rate_limit",
    "setup_rate_limiting",
]
