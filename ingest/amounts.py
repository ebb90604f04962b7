from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

# stripped before the magnitude is read; sign comes from the raw string
_STRIP = re.compile(r"[$€£¥,()\s+\-]")
_PLAIN_DECIMAL = re.compile(r"^(\d+(\.\d*)?|\.\d+)$")
_DIGITS = re.compile(r"^\d+$")


def parse_money(raw: str) -> Optional[Decimal]:
    """Broker-formatted P&L -> signed Decimal, None when not numeric.

    "$(1,234.56)" -> -1234.56, "$1,234.56" -> 1234.56, "-500" -> -500.
    """
    text = raw or ""
    cleaned = _STRIP.sub("", text)
    if not _PLAIN_DECIMAL.match(cleaned):
        return None
    try:
        magnitude = Decimal(cleaned)
    except InvalidOperation:
        return None
    negative = "(" in text or "-" in text
    return -magnitude if negative else magnitude


def parse_quantity(raw: str) -> Optional[int]:
    """Positive whole contract count, None otherwise."""
    text = (raw or "").strip()
    if not _DIGITS.match(text):
        return None
    qty = int(text)
    return qty if qty > 0 else None
