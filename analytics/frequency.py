from __future__ import annotations

import math
from datetime import datetime, time
from typing import Dict, List, Sequence
from zoneinfo import ZoneInfo

from core.models import Trade
from ingest.timestamps import load_zone

MARKET_OPEN = time(8, 30)
MARKET_CLOSE = time(15, 0)


def is_qualifying_entry(entry: datetime, zone: ZoneInfo) -> bool:
    """Weekday entry between 08:30 and 15:00 local, both ends inclusive (minute resolution)."""
    local = entry.astimezone(zone)
    if local.weekday() >= 5:
        return False
    minutes = local.hour * 60 + local.minute
    return MARKET_OPEN.hour * 60 + MARKET_OPEN.minute <= minutes <= MARKET_CLOSE.hour * 60 + MARKET_CLOSE.minute


def minutes_between(later: datetime, earlier: datetime) -> int:
    """Whole minutes, truncated toward zero."""
    return math.trunc((later - earlier).total_seconds() / 60)


def trading_frequency(trades: Sequence[Trade], tz: str | ZoneInfo) -> float:
    """Average minutes from one trade's exit to the next trade's entry.

    Gaps are only measured between qualifying trades of the same calendar
    date; 0.0 when no such pair exists.
    """
    if len(trades) < 2:
        return 0.0
    zone = tz if isinstance(tz, ZoneInfo) else load_zone(tz)

    by_date: Dict[object, List[Trade]] = {}
    for t in trades:
        by_date.setdefault(t.date, []).append(t)

    total_minutes = 0
    total_intervals = 0
    for day_trades in by_date.values():
        ordered = [
            t for t in sorted(day_trades, key=lambda t: t.exit_time) if is_qualifying_entry(t.entry_time, zone)
        ]
        for prev, cur in zip(ordered, ordered[1:]):
            total_minutes += minutes_between(cur.entry_time, prev.exit_time)
            total_intervals += 1

    if total_intervals == 0:
        return 0.0
    return total_minutes / total_intervals
