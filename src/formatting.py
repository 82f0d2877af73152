"""
Formatting utilities for the maxhash dashboard.
Presentation logic shared by the Streamlit page and API responses.
"""

import numbers
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Any

import pandas as pd

from config import DIFFICULTY_UNITS, DIFFICULTY_DECIMALS, INVALID_DIFFICULTY

_QUANTUM = Decimal(1).scaleb(-DIFFICULTY_DECIMALS)


def _is_real_number(value: Any) -> bool:
    # bool is an Integral subclass but never a difficulty
    if isinstance(value, bool):
        return False
    return isinstance(value, (numbers.Real, Decimal))


def _is_nan(value) -> bool:
    # pd.isna raises InvalidOperation on a signalling Decimal NaN
    if isinstance(value, Decimal):
        return value.is_nan()
    return bool(pd.isna(value))


def _scale(value, magnitude: int) -> Decimal:
    """Divide value by magnitude, returning the exact quotient as a Decimal."""
    if isinstance(value, Decimal):
        return value / magnitude
    try:
        return Decimal(float(value) / magnitude)
    except OverflowError:
        # Integers beyond float range
        return Decimal(int(value)) / magnitude


def _to_fixed(quotient: Decimal) -> str:
    """Render with exactly DIFFICULTY_DECIMALS places, rounding half away from zero."""
    if not quotient.is_finite():
        return str(float(quotient))
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, quotient.adjusted() + DIFFICULTY_DECIMALS + 2)
        return str(quotient.quantize(_QUANTUM, rounding=ROUND_HALF_UP))


def _trim_zeros(text: str) -> str:
    if "." not in text:
        return text
    return text.rstrip("0").rstrip(".")


def format_difficulty(value: Any) -> str:
    """
    Format a proof-of-work difficulty with K/M/G/T/P suffixes.

    Non-numeric input and NaN return "Invalid". Values below 1000 (including
    zero and negatives) are returned as ``str(value)`` without a suffix.

    Examples: 1500 -> "1.5K", 2_000_000 -> "2M", 123_456_789 -> "123.46M"
    """
    if not _is_real_number(value) or _is_nan(value):
        return INVALID_DIFFICULTY

    for magnitude, symbol in DIFFICULTY_UNITS:
        if value >= magnitude:
            return _trim_zeros(_to_fixed(_scale(value, magnitude))) + symbol

    return str(value)
