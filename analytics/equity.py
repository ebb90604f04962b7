from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import List, Sequence

from core.models import Trade


@dataclass(frozen=True)
class EquityPoint:
    date: date
    cumulative_value: Decimal


def equity_curve(trades: Sequence[Trade], initial: Decimal = Decimal("0")) -> List[EquityPoint]:
    """Running net P&L, one point per trade in date order (same-day trades keep input order)."""
    running = Decimal(initial)
    points: List[EquityPoint] = []
    for t in sorted(trades, key=lambda t: t.date):
        running += t.net_profit
        points.append(EquityPoint(date=t.date, cumulative_value=running))
    return points
