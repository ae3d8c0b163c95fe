"""
Claude prompt for the client WhatsApp greeting.

Used by GreetingService after an order is confirmed. The message itself is
written in Hebrew; the instructions are in English.
"""

from models.booking import BookingData
from services.catalog import EXTRAS_MAP
from utils.jinja_filters import format_amount

COMPANY_NAME = "Leader Cruises (לידר הפלגות)"

GREETING_PROMPT_TEMPLATE = """Generate a polite and exciting WhatsApp message in HEBREW for a client who just booked a yacht cruise.
Details:
Name: {client_name}
Date: {date}
Time: {start_time} to {end_time}
Yacht: {yacht_name}
{extras_text}
{order_number_text}
Total Price: {total_price}
Paid Downpayment: {down_payment}
Company: {company}

The tone should be professional yet warm and welcoming. Use emojis. Make sure to remind them that the rest of the payment is {remaining} NIS."""


def build_greeting_prompt(booking: BookingData) -> str:
    """
    Build the greeting prompt for a booking.

    The total is the booking's own price field, not the computed quote.
    """
    extra_names = ", ".join(EXTRAS_MAP[extra] for extra in booking.actual_extras)
    extras_text = f"תוספות שנבחרו: {extra_names}." if extra_names else "ללא תוספות מיוחדות."
    order_number_text = f"מספר הזמנה: {booking.order_number}." if booking.order_number else ""

    return GREETING_PROMPT_TEMPLATE.format(
        client_name=booking.client_name,
        date="/".join(reversed(booking.date.split("-"))),
        start_time=booking.start_time,
        end_time=booking.end_time,
        yacht_name=booking.yacht_name,
        extras_text=extras_text,
        order_number_text=order_number_text,
        total_price=format_amount(booking.price),
        down_payment=format_amount(booking.down_payment),
        company=COMPANY_NAME,
        remaining=format_amount(booking.price - booking.down_payment),
    )
