from __future__ import annotations

from datetime import date, timedelta
from typing import Optional, Tuple

PERIODS = ("daily", "weekly", "monthly", "yearly", "all")

ALL_START = date(1, 1, 1)
ALL_END = date(9999, 12, 31)


def resolve_period(period: str, anchor: Optional[date] = None) -> Tuple[date, date]:
    """Inclusive (start, end) calendar range for a named period around `anchor`."""
    anchor = anchor or date.today()
    p = (period or "").lower()
    if p == "daily":
        return anchor, anchor
    if p == "weekly":
        start = anchor - timedelta(days=anchor.weekday())
        return start, start + timedelta(days=6)
    if p == "monthly":
        start = anchor.replace(day=1)
        nxt = (start + timedelta(days=32)).replace(day=1)
        return start, nxt - timedelta(days=1)
    if p == "yearly":
        return anchor.replace(month=1, day=1), anchor.replace(month=12, day=31)
    if p == "all":
        return ALL_START, ALL_END
    raise ValueError(f"Unknown period: {period}")
