from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Sequence

from core.models import Trade


@dataclass(frozen=True)
class TickerStat:
    ticker: str
    pnl: Decimal
    total_trades: int


@dataclass(frozen=True)
class TickerBreakdown:
    ticker: str
    total: int
    wins: int
    losses: int
    pnl: Decimal


def ticker_stats(trades: Sequence[Trade]) -> List[TickerStat]:
    """Net P&L and trade count per ticker, best ticker first."""
    acc: Dict[str, List] = {}
    for t in trades:
        b = acc.setdefault(t.ticker, [Decimal("0"), 0])
        b[0] += t.net_profit
        b[1] += 1
    stats = [TickerStat(ticker=k, pnl=v[0], total_trades=v[1]) for k, v in acc.items()]
    return sorted(stats, key=lambda s: s.pnl, reverse=True)


def ticker_distribution(trades: Sequence[Trade]) -> List[TickerBreakdown]:
    """Win/loss split per ticker, most traded first. Break-even trades count in neither."""
    acc: Dict[str, Dict[str, object]] = {}
    for t in trades:
        b = acc.setdefault(t.ticker, {"total": 0, "wins": 0, "losses": 0, "pnl": Decimal("0")})
        b["total"] += 1
        b["pnl"] += t.net_profit
        if t.net_profit > 0:
            b["wins"] += 1
        elif t.net_profit < 0:
            b["losses"] += 1
    rows = [TickerBreakdown(ticker=k, **v) for k, v in acc.items()]
    return sorted(rows, key=lambda r: r.total, reverse=True)
