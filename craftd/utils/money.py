# craftd/utils/money.py
"""
Currency and growth helpers. All stored amounts are integer cents.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

import numpy as np

Number = Union[int, float]

DEFAULT_CURRENCY = "USD"

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "INR": "₹",
    "CAD": "CA$",
    "AUD": "A$",
}


def round_half_up(value: Number) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def cents_to_dollars(cents: Optional[int]) -> int:
    if not cents:
        return 0
    return round_half_up(cents / 100)


def calculate_percentage_change(old_value: Number, new_value: Number) -> float:
    """Percentage change from old to new; 0 when the old value is 0."""
    if old_value == 0:
        return 0.0
    return ((new_value - old_value) / old_value) * 100


def calculate_cagr(initial_value: Number, final_value: Number, years: float) -> float:
    """
    Compound annual growth rate as a percentage.

    Returns 0 for non-positive inputs rather than a complex or infinite result.
    """
    if initial_value <= 0 or final_value <= 0 or years <= 0:
        return 0.0
    return ((final_value / initial_value) ** (1 / years) - 1) * 100


def safe_divide(numerator: Number, denominator: Number) -> float:
    """Divide, returning 0 for a zero denominator or a non-finite result."""
    if not denominator:
        return 0.0
    result = numerator / denominator
    if not np.isfinite(result):
        return 0.0
    return float(result)


def format_currency(cents: Optional[int], currency: str = DEFAULT_CURRENCY) -> str:
    """Whole-unit currency string, e.g. ``$1,235`` for 123456 cents."""
    dollars = cents_to_dollars(cents)
    symbol = CURRENCY_SYMBOLS.get(currency.upper(), f"{currency.upper()} ")
    sign = "-" if dollars < 0 else ""
    return f"{sign}{symbol}{abs(dollars):,}"
