"""
Currency formatting for report and export cells.

Mirrors en-US currency display: symbol prefix, thousands separators,
two decimals, leading minus for negatives ("-$1,234.50").
"""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

Number = Union[Decimal, float, int]

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "CAD": "CA$",
    "AUD": "A$",
    "CHF": "CHF ",
    "INR": "₹",
}

# currencies displayed without minor units
_ZERO_DECIMAL = {"JPY"}

_CENT = Decimal("0.01")


def currency_symbol(currency: str) -> str:
    code = (currency or "USD").upper()
    return CURRENCY_SYMBOLS.get(code, f"{code} ")


def format_currency(amount: Number, currency: str = "USD") -> str:
    code = (currency or "USD").upper()
    value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    quant = Decimal("1") if code in _ZERO_DECIMAL else _CENT
    value = value.quantize(quant, rounding=ROUND_HALF_UP)
    body = f"{abs(value):,}"
    sign = "-" if value < 0 else ""
    return f"{sign}{currency_symbol(code)}{body}"
