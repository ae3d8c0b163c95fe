"""Prompt templates for Claude API calls."""

from .greeting_prompt import (
    COMPANY_NAME,
    GREETING_PROMPT_TEMPLATE,
    build_greeting_prompt,
)

__all__ = [
    'COMPANY_NAME',
    'GREETING_PROMPT_TEMPLATE',
    'build_greeting_prompt',
]
