"""Checkout input cleanup and shape checks for contact details."""
from __future__ import annotations

import re
from typing import Any

from .constants import MAX_NOTES_LENGTH, MIN_PHONE_DIGITS

PHONE_PATTERN = re.compile(r"^\+?[0-9\s\-()]+$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def sanitize_text_input(text: str | None, max_length: int = MAX_NOTES_LENGTH) -> str:
    """Strip, drop control characters and cap the length.

    Args:
        text: Text typed by the customer
        max_length: Maximum allowed length

    Returns:
        Cleaned text, empty string for None
    """
    if not text:
        return ""

    text = str(text).strip()

    # Remove null bytes and other control characters
    text = re.sub(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]", "", text)

    if len(text) > max_length:
        text = text[:max_length]

    return text


def is_valid_phone(phone: str | None) -> bool:
    """Optional leading +, digits and separators, at least seven digits.

    Example:
        >>> is_valid_phone("+998 90 123-45-67")
        True
        >>> is_valid_phone("123")
        False
    """
    if not phone:
        return False
    candidate = phone.strip()
    if not PHONE_PATTERN.match(candidate):
        return False
    return sum(ch.isdigit() for ch in candidate) >= MIN_PHONE_DIGITS


def is_valid_email(email: str | None) -> bool:
    if not email:
        return False
    return bool(EMAIL_PATTERN.match(email.strip()))


def parse_table_number(value: Any) -> int | None:
    """Return a non-negative table number, None when absent.

    Raises:
        ValueError: value is present but not a non-negative integer
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError("table number must be an integer")
    if isinstance(value, int):
        number = value
    else:
        raw = str(value).strip()
        if not raw:
            return None
        if not raw.isdigit():
            raise ValueError(f"table number must be an integer, got {value!r}")
        number = int(raw)
    if number < 0:
        raise ValueError("table number cannot be negative")
    return number
