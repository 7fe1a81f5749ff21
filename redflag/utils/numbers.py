"""Numeric helpers shared by the analyzers"""

from decimal import Decimal, ROUND_HALF_UP


def round_half_up(value: float, digits: int = 0) -> float:
    """
    Round half away from zero instead of Python's banker's rounding.

    Money totals must round the same way on every run: 2.5 → 3, 0.05 → 0.1.
    """
    quantum = Decimal(1).scaleb(-digits)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return float(rounded)


def round_currency(value: float) -> int:
    """Round to whole currency units"""
    return int(round_half_up(value, 0))


def percentage_change(numerator: float, denominator: float, zero_sentinel: float = 100.0) -> float:
    """
    numerator / denominator * 100 without NaN/Infinity.

    A zero denominator yields zero_sentinel when the numerator is positive,
    -zero_sentinel when negative and 0 when both are zero.
    """
    if denominator == 0:
        if numerator > 0:
            return zero_sentinel
        if numerator < 0:
            return -zero_sentinel
        return 0.0
    return numerator / denominator * 100
