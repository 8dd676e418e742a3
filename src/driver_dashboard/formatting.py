"""Display formatting in the Indonesian locale style."""

from __future__ import annotations

from datetime import date
import math
from typing import Any


def round_half_up(amount: float | None) -> int:
    """Round to the nearest integer with halves rounded up."""
    return int(math.floor((amount or 0) + 0.5))


def format_currency(amount: float | None) -> str:
    """Format an amount with ``.`` thousands separators, e.g. ``1.250.000``."""
    return f"{round_half_up(amount):,}".replace(",", ".")


def format_date(value: date | None = None) -> str:
    """Format a date as ``d/m/yyyy`` (today when omitted)."""
    value = value or date.today()
    return f"{value.day}/{value.month}/{value.year}"


def display_value(value: Any) -> str:
    """Format a stored number for an input field; zero and missing show blank."""
    if not value:
        return ""
    return f"{value:g}" if isinstance(value, float) else str(value)
