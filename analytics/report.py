from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from core.models import Trade, UserSettings
from ingest.timestamps import load_zone

from analytics.distribution import HistogramBucket, pnl_distribution
from analytics.durations import DurationStats, duration_stats
from analytics.equity import EquityPoint, equity_curve
from analytics.frequency import trading_frequency
from analytics.metrics import PerformanceMetrics, performance_metrics
from analytics.summary import DashboardSummary, dashboard_summary
from analytics.tickers import TickerBreakdown, TickerStat, ticker_distribution, ticker_stats
from analytics.time_of_day import HourBucket, time_of_day_performance


@dataclass(frozen=True)
class AnalyticsReport:
    trade_count: int
    trading_frequency: float
    summary: DashboardSummary
    pnl_distribution: List[HistogramBucket] = field(default_factory=list)
    time_of_day: List[HourBucket] = field(default_factory=list)
    tickers: List[TickerStat] = field(default_factory=list)
    ticker_distribution: List[TickerBreakdown] = field(default_factory=list)
    equity_curve: List[EquityPoint] = field(default_factory=list)
    durations: DurationStats = field(default_factory=DurationStats)
    performance: PerformanceMetrics | None = None


def build_report(trades: Sequence[Trade], settings: UserSettings) -> AnalyticsReport:
    """Run every aggregator over the fetched range from scratch."""
    zone = load_zone(settings.timezone)
    return AnalyticsReport(
        trade_count=len(trades),
        trading_frequency=trading_frequency(trades, zone),
        summary=dashboard_summary(trades, zone),
        pnl_distribution=pnl_distribution(trades, settings.currency),
        time_of_day=time_of_day_performance(trades, zone),
        tickers=ticker_stats(trades),
        ticker_distribution=ticker_distribution(trades),
        equity_curve=equity_curve(trades),
        durations=duration_stats(trades),
        performance=performance_metrics(trades),
    )
