from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import List, Sequence
from zoneinfo import ZoneInfo

from core.models import Trade
from ingest.timestamps import load_zone


@dataclass(frozen=True)
class HourBucket:
    hour: int
    trades: int
    win_rate: float
    avg_pnl: Decimal


def time_of_day_performance(trades: Sequence[Trade], tz: str | ZoneInfo) -> List[HourBucket]:
    """One bucket per entry hour 0..23 in the user's timezone, empty hours included."""
    zone = tz if isinstance(tz, ZoneInfo) else load_zone(tz)
    totals = [0] * 24
    wins = [0] * 24
    pnl = [Decimal("0")] * 24

    for t in trades:
        h = t.entry_time.astimezone(zone).hour
        totals[h] += 1
        pnl[h] += t.net_profit
        if t.net_profit > 0:
            wins[h] += 1

    return [
        HourBucket(
            hour=h,
            trades=totals[h],
            win_rate=(wins[h] / totals[h] * 100.0) if totals[h] else 0.0,
            avg_pnl=(pnl[h] / totals[h]) if totals[h] else Decimal("0"),
        )
        for h in range(24)
    ]
