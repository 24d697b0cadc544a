# src/cbc_portal/utils/text.py
"""Small text helpers for form validation and display."""

import re

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_PATTERN.match(value))


def initials(name: str) -> str:
    """Return up to two uppercase initials, e.g. ``"Grace Uwimana" -> "GU"``."""
    letters = [part[0] for part in name.split() if part]
    return "".join(letters[:2]).upper() or "?"


def blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None
