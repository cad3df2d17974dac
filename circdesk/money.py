"""
Money helpers. Charges are Decimals quantized to cents; floats are routed
through ``str`` so 9.99 stays 9.99. Balances keep whatever precision they
were given and are only rounded for display.
"""

from __future__ import annotations
from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def to_money(value) -> Decimal:
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def format_money(value) -> str:
    return f"${to_money(value):.2f}"
