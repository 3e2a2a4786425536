"""
Price parsing and aggregation

Prices travel as decimal strings ("19.99") between the admin UI and Shopify.
Anything that does not parse as a finite number counts as zero.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Iterable

TWO_PLACES = Decimal("0.01")


def parse_price(value: Any) -> Decimal:
    """Parse a price, returning 0 for missing or malformed input"""
    if value is None or isinstance(value, bool):
        return Decimal(0)
    if isinstance(value, Decimal):
        parsed = value
    else:
        text = str(value).strip()
        if not text:
            return Decimal(0)
        try:
            parsed = Decimal(text)
        except InvalidOperation:
            return Decimal(0)

    if not parsed.is_finite():
        return Decimal(0)
    return parsed


def format_price(value: Decimal) -> str:
    """Format a Decimal with exactly two decimal places"""
    return str(value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


def compute_bundle_price(prices: Iterable[Any]) -> str:
    """
    Sum component prices into the bundle price.

    >>> compute_bundle_price(["10.00", "5.5", "abc"])
    '15.50'
    """
    total = sum((parse_price(price) for price in prices), Decimal(0))
    return format_price(total)
