"""
Dashboard summary: headline KPIs, winning days and the weekday breakdown.

Display figures, computed on float columns of a pandas frame.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence
from zoneinfo import ZoneInfo

import pandas as pd

from core.models import Direction, Trade
from ingest.timestamps import load_zone

WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


@dataclass(frozen=True)
class WeekdayStat:
    day: str
    total_pnl: float
    trading_days: int
    avg_pnl: float
    trades: int


@dataclass(frozen=True)
class DashboardSummary:
    total_trades: int = 0
    winning_trades: int = 0
    losing_trades: int = 0
    win_rate: float = 0.0
    total_net_pnl: float = 0.0
    avg_winning_trade: float = 0.0
    avg_losing_trade: float = 0.0
    profit_factor: float = 0.0
    trading_days: int = 0
    winning_days: int = 0
    day_win_rate: float = 0.0
    long_trades: int = 0
    short_trades: int = 0
    weekdays: List[WeekdayStat] = field(default_factory=list)


def trades_frame(trades: Sequence[Trade], tz: str | ZoneInfo) -> pd.DataFrame:
    zone = tz if isinstance(tz, ZoneInfo) else load_zone(tz)
    return pd.DataFrame(
        {
            "date": [t.date.isoformat() for t in trades],
            "weekday": [WEEKDAYS[t.entry_time.astimezone(zone).weekday()] for t in trades],
            "direction": [Direction(t.direction).value for t in trades],
            "net_profit": [float(t.net_profit) for t in trades],
        }
    )


def dashboard_summary(trades: Sequence[Trade], tz: str | ZoneInfo) -> DashboardSummary:
    if not trades:
        return DashboardSummary()

    df = trades_frame(trades, tz)
    pnl = df["net_profit"]
    wins = pnl[pnl > 0]
    losses = pnl[pnl < 0]
    total = len(df)

    loss_sum = float(losses.sum())
    profit_factor = abs(float(wins.sum()) / (loss_sum or 1.0))

    daily = df.groupby("date", sort=True)["net_profit"].sum()
    winning_days = int((daily > 0).sum())

    per_day = df.groupby("weekday").agg(
        total_pnl=("net_profit", "sum"),
        trading_days=("date", "nunique"),
        trades=("net_profit", "size"),
    )
    weekdays = [
        WeekdayStat(
            day=day,
            total_pnl=float(row.total_pnl),
            trading_days=int(row.trading_days),
            avg_pnl=float(row.total_pnl) / int(row.trading_days),
            trades=int(row.trades),
        )
        for day, row in per_day.reindex([d for d in WEEKDAYS if d in per_day.index]).iterrows()
    ]

    directions = df["direction"].value_counts()

    return DashboardSummary(
        total_trades=total,
        winning_trades=len(wins),
        losing_trades=len(losses),
        win_rate=len(wins) / total * 100.0,
        total_net_pnl=float(pnl.sum()),
        avg_winning_trade=float(wins.mean()) if len(wins) else 0.0,
        avg_losing_trade=float(losses.mean()) if len(losses) else 0.0,
        profit_factor=profit_factor,
        trading_days=len(daily),
        winning_days=winning_days,
        day_win_rate=winning_days / len(daily) * 100.0 if len(daily) else 0.0,
        long_trades=int(directions.get(Direction.LONG.value, 0)),
        short_trades=int(directions.get(Direction.SHORT.value, 0)),
        weekdays=weekdays,
    )
