# src/dealgrade/analysis/formatting.py
"""
Number formatting for human-readable reasons and insights.

Metrics themselves always stay plain floats; these helpers only run when a
message string is built.
"""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def format_currency(value: float) -> str:
    """
    Whole-dollar USD, e.g. 1234.56 -> "$1,235", -50 -> "-$50".
    Halves round away from zero: 2.5 -> "$3".
    """
    rounded = int(Decimal(float(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    if rounded < 0:
        return f"-${abs(rounded):,}"
    return f"${rounded:,}"


def format_amount(value: float) -> str:
    """Grouped number with up to three decimals and no trailing zeros."""
    text = f"{float(value):,.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def format_percent(value: float) -> str:
    return f"{float(value):.2f}%"


def format_number(value: float) -> str:
    return f"{float(value):,.2f}"
