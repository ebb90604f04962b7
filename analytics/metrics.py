"""
Risk / performance metrics over a trade list.

Pure stdlib. Returns are per-trade net profit over a notional starting
capital; std is the population form.
"""

from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import List, Sequence

from core.models import Trade

INITIAL_CAPITAL = 100_000.0
RISK_FREE_RATE = 0.02
VAR_CONFIDENCE = 0.95
STREAK_BUCKETS = 10


@dataclass(frozen=True)
class StreakCount:
    streak: str  # "1".."9", "10+"
    wins: int
    losses: int


@dataclass(frozen=True)
class PerformanceMetrics:
    roi: float
    sharpe: float
    sortino: float
    max_drawdown: float
    value_at_risk: float
    risk_reward_ratio: float = 0.0
    stop_loss_efficiency: float = 0.0
    streaks: List[StreakCount] = field(default_factory=list)


def mean(xs: Sequence[float]) -> float:
    return sum(xs) / len(xs) if xs else 0.0


def pstdev(xs: Sequence[float]) -> float:
    if not xs:
        return 0.0
    mu = mean(xs)
    return math.sqrt(sum((x - mu) ** 2 for x in xs) / len(xs))


def downside_deviation(xs: Sequence[float]) -> float:
    """Population std of the negative returns only."""
    return pstdev([x for x in xs if x < 0])


def sharpe(xs: Sequence[float], rf: float = RISK_FREE_RATE) -> float:
    sd = pstdev(xs)
    if sd == 0.0:
        return 0.0
    return (mean(xs) - rf) / sd


def sortino(xs: Sequence[float], rf: float = RISK_FREE_RATE) -> float:
    dd = downside_deviation(xs)
    if dd == 0.0:
        return 0.0
    return (mean(xs) - rf) / dd


def max_drawdown_pct(profits: Sequence[float], initial: float = INITIAL_CAPITAL) -> float:
    """Largest peak-to-trough decline of the capital curve, in percent."""
    peak = initial
    capital = initial
    max_dd = 0.0
    for p in profits:
        capital += p
        if capital > peak:
            peak = capital
        dd = 0.0 if peak == 0 else (peak - capital) / peak * 100.0
        if dd > max_dd:
            max_dd = dd
    return max_dd


def value_at_risk(returns: Sequence[float], capital: float = INITIAL_CAPITAL, confidence: float = VAR_CONFIDENCE) -> float:
    if not returns:
        return 0.0
    ordered = sorted(returns)
    idx = int(math.floor(len(ordered) * (1.0 - confidence)))
    return -ordered[min(idx, len(ordered) - 1)] * capital


def risk_reward_ratio(profits: Sequence[float]) -> float:
    """Average win over the absolute average loss; 0 without losses."""
    losses = [p for p in profits if p < 0]
    if not losses:
        return 0.0
    return mean([p for p in profits if p > 0]) / abs(mean(losses))


def stop_loss_efficiency(profits: Sequence[float]) -> float:
    """Worst loss as a percentage of the average loss; 0 without losses."""
    losses = [p for p in profits if p < 0]
    if not losses:
        return 0.0
    return min(losses) / mean(losses) * 100.0


def streak_counts(profits: Sequence[float], buckets: int = STREAK_BUCKETS) -> List[StreakCount]:
    """Completed win/loss runs by length; runs of `buckets` or more share the last slot.

    A break-even trade counts as a non-win. The final run is counted too.
    """
    wins = [0] * buckets
    losses = [0] * buckets
    if profits:
        run = 1
        winning = profits[0] > 0
        for p in list(profits[1:]) + [None]:
            if p is not None and (p > 0) == winning:
                run += 1
                continue
            slot = min(run, buckets) - 1
            if winning:
                wins[slot] += 1
            else:
                losses[slot] += 1
            if p is not None:
                run = 1
                winning = p > 0
    return [
        StreakCount(streak=f"{i + 1}+" if i == buckets - 1 else str(i + 1), wins=wins[i], losses=losses[i])
        for i in range(buckets)
    ]


def performance_metrics(trades: Sequence[Trade], initial: float = INITIAL_CAPITAL) -> PerformanceMetrics:
    if not trades:
        return PerformanceMetrics(
            roi=0.0, sharpe=0.0, sortino=0.0, max_drawdown=0.0, value_at_risk=0.0, streaks=streak_counts([])
        )

    ordered = sorted(trades, key=lambda t: t.date)
    profits: List[float] = [float(t.net_profit) for t in ordered]
    returns = [p / initial for p in profits]

    return PerformanceMetrics(
        roi=sum(profits) / initial * 100.0,
        sharpe=sharpe(returns),
        sortino=sortino(returns),
        max_drawdown=max_drawdown_pct(profits, initial),
        value_at_risk=value_at_risk(returns, initial),
        risk_reward_ratio=risk_reward_ratio(profits),
        stop_loss_efficiency=stop_loss_efficiency(profits),
        streaks=streak_counts(profits),
    )
