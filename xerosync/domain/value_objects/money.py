"""
Monetary normalization.

CRITICAL: Always use Decimal, never float!
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

DEFAULT_DECIMALS = 2

Numeric = Union[Decimal, int, float, str]


def to_decimal(value: Numeric) -> Decimal:
    """Convert a numeric value to Decimal without float artefacts."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def normalize(value: Numeric, places: int = DEFAULT_DECIMALS) -> Decimal:
    """
    Round a monetary value to a fixed number of decimal places.

    Uses half-up rounding (0.005 -> 0.01), which is what the accounting
    side expects for unit amounts and totals.

    Args:
        value: Amount to normalize
        places: Number of decimal places (default 2)

    Returns:
        Decimal quantized to ``places`` decimals

    Example:
        >>> normalize("10.005")
        Decimal('10.01')
        >>> normalize(Decimal("-0.025"))
        Decimal('-0.03')
    """
    exponent = Decimal(1).scaleb(-places)
    return to_decimal(value).quantize(exponent, rounding=ROUND_HALF_UP)
