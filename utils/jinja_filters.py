"""
Shared Jinja2 template filters.

Used by the document renderer and the spreadsheet rows so that amounts,
dates and durations print identically in every artifact.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Any

from jinja2 import Environment


def format_amount(value: Any) -> str:
    """
    Format a money amount the way the booking documents print numbers.

    Integral values have no decimal point (1500); fractional values keep
    only their significant decimals (246.8).
    """
    if value is None:
        return ""
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (ValueError, ArithmeticError):
        return str(value)

    if amount == amount.to_integral_value():
        return str(int(amount))
    return format(amount.normalize(), "f")


def format_duration(value: Any) -> str:
    """Format a duration in hours with exactly one decimal (2.0, 1.5)."""
    if value is None:
        return ""
    hours = value if isinstance(value, Decimal) else Decimal(str(value))
    return str(hours.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def format_date(value: Any) -> str:
    """
    Format a booking date as DD/MM/YYYY.

    ISO dates (2025-07-14) are reversed; dotted dates (14.07.2025) get
    slashes; anything else passes through.
    """
    if not value:
        return ""
    text = str(value)
    if "-" in text:
        return "/".join(reversed(text.split("-")))
    return text.replace(".", "/")


def register_filters(env: Environment) -> None:
    """Register all shared filters on a Jinja2 Environment."""
    env.filters["format_amount"] = format_amount
    env.filters["format_duration"] = format_duration
    env.filters["format_date"] = format_date
