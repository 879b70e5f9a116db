# homeloan/reports/formatting.py
"""
Display formatting for calculator cards and reports (South African Rand by default).

Nothing here feeds back into the math; values are rounded only for display.
"""

from __future__ import annotations

import math
import re

_NON_NUMERIC = re.compile(r"[^\d.\-]")


def format_currency(value: float | None, symbol: str = "R", thousand: str = ",", decimal: str = ".") -> str:
    """
    Format a number as currency with thousands separators and two decimals.

    Example:
        1234567.891 -> R1,234,567.89
        -2000 -> -R2,000.00
        None / NaN -> R0.00
    """
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return f"{symbol}0.00"
    sign = "-" if value < 0 and round(abs(value), 2) != 0 else ""
    integer, frac = f"{abs(value):,.2f}".split(".")
    return f"{sign}{symbol}{integer.replace(',', thousand)}{decimal}{frac}"


def parse_currency(text: str | None) -> float:
    """
    Parse user-entered currency text back to a number.

    Example:
        "R 1,234.50" -> 1234.5
        "" / "abc" -> 0.0
    """
    if not text:
        return 0.0
    cleaned = _NON_NUMERIC.sub("", text)
    try:
        return float(cleaned)
    except ValueError:
        return 0.0


def format_percentage(value: float | None, places: int = 2) -> str:
    """
    Format a percentage value (already in percent units).

    Example:
        10.5 -> 10.50%
    """
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return "0%"
    return f"{value:.{places}f}%"


def format_term(months: int) -> str:
    """
    Render a month count as "N years, M months".

    Example:
        245 -> 20 years, 5 months
    """
    months = max(0, int(months))
    return f"{months // 12} years, {months % 12} months"
