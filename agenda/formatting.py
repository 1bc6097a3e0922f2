"""Small text helpers for listings."""
from __future__ import annotations

from typing import Any


def truncate(text: str | None, length: int) -> str:
    if not text:
        return ""
    return text[:length] + "..." if len(text) > length else text


def format_number(value: Any) -> str:
    """Thousands-separated number; ``-`` for a blank cell."""
    if value is None or value == "":
        return "-"
    try:
        number = float(value)
    except (TypeError, ValueError):
        return str(value)
    if number.is_integer():
        return f"{int(number):,}"
    return f"{number:,}"
