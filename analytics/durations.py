from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Sequence

from core.models import Trade

HOUR = 3600

CATEGORIES = ("Under 1 hour", "1-4 hours", "4-8 hours", "Over 8 hours")


@dataclass(frozen=True)
class DurationBucket:
    duration: str
    profit: Decimal
    trades: int


@dataclass(frozen=True)
class DurationStats:
    average_duration: float = 0.0
    short_trade_win_rate: float = 0.0
    long_trade_win_rate: float = 0.0
    profit_by_duration: List[DurationBucket] = field(default_factory=list)


def _unit(n: int, word: str) -> str:
    return f"{n} {word}" if n == 1 else f"{n} {word}s"


def format_duration(seconds: int) -> str:
    """'1 hour 5 minutes'; zero components are left out."""
    seconds = int(seconds)
    h, rem = divmod(seconds, HOUR)
    m, s = divmod(rem, 60)
    parts = []
    if h:
        parts.append(_unit(h, "hour"))
    if m:
        parts.append(_unit(m, "minute"))
    if s:
        parts.append(_unit(s, "second"))
    return " ".join(parts)


def duration_category(seconds: int) -> str:
    hours = seconds / HOUR
    if hours < 1:
        return CATEGORIES[0]
    if hours < 4:
        return CATEGORIES[1]
    if hours < 8:
        return CATEGORIES[2]
    return CATEGORIES[3]


def _win_rate(trades: List[Trade]) -> float:
    if not trades:
        return 0.0
    return sum(1 for t in trades if t.net_profit > 0) / len(trades) * 100.0


def duration_stats(trades: Sequence[Trade]) -> DurationStats:
    timed = [t for t in trades if t.entry_time and t.exit_time and t.duration_seconds]
    if not timed:
        return DurationStats()

    average = sum(t.duration_seconds for t in timed) / len(timed)
    short = [t for t in timed if t.duration_seconds < HOUR]
    long_ = [t for t in timed if t.duration_seconds >= HOUR]

    acc: Dict[str, List] = {}
    for t in timed:
        b = acc.setdefault(duration_category(t.duration_seconds), [Decimal("0"), 0])
        b[0] += t.net_profit
        b[1] += 1

    return DurationStats(
        average_duration=average,
        short_trade_win_rate=_win_rate(short),
        long_trade_win_rate=_win_rate(long_),
        profit_by_duration=[
            DurationBucket(duration=c, profit=acc[c][0], trades=acc[c][1]) for c in CATEGORIES if c in acc
        ],
    )
