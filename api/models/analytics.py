from __future__ import annotations

from typing import List
from pydantic import BaseModel, Field

from analytics.report import AnalyticsReport


class HourBucketOut(BaseModel):
    hour: int = Field(..., description="Entry hour 0..23 in the user's timezone")
    trades: int
    winRate: float = Field(..., description="Percent of trades with positive net profit")
    avgPnL: float = Field(..., description="Mean net profit")


class HistogramBucketOut(BaseModel):
    rangeLabel: str = Field(..., description="Formatted currency bounds")
    count: int


class TickerStatOut(BaseModel):
    ticker: str
    pnl: float
    totalTrades: int


class TickerBreakdownOut(BaseModel):
    ticker: str
    total: int
    wins: int
    losses: int
    pnl: float


class EquityPointOut(BaseModel):
    date: str
    cumulativeValue: float


class WeekdayOut(BaseModel):
    day: str
    totalPnL: float
    tradingDays: int
    avgPnL: float
    trades: int


class SummaryOut(BaseModel):
    totalTrades: int
    winningTrades: int
    losingTrades: int
    winRate: float
    totalNetPnL: float
    avgWinningTrade: float
    avgLosingTrade: float
    profitFactor: float
    tradingDays: int
    winningDays: int
    dayWinRate: float
    longTrades: int
    shortTrades: int
    weekdays: List[WeekdayOut]


class DurationBucketOut(BaseModel):
    duration: str
    profit: float
    trades: int


class DurationOut(BaseModel):
    averageDuration: float = Field(..., description="Seconds")
    shortTradeWinRate: float
    longTradeWinRate: float
    profitByDuration: List[DurationBucketOut]


class StreakOut(BaseModel):
    streak: str = Field(..., description="Run length; the last slot collects runs of 10 or more")
    wins: int
    losses: int


class PerformanceOut(BaseModel):
    roi: float
    sharpeRatio: float
    sortinoRatio: float
    maxDrawdown: float
    valueAtRisk: float
    riskRewardRatio: float = Field(..., description="Average win over absolute average loss")
    stopLossEfficiency: float = Field(..., description="Worst loss as a percent of the average loss")
    consecutiveTradesAnalysis: List[StreakOut]


class AnalyticsResponse(BaseModel):
    start: str
    end: str
    tradeCount: int
    tradingFrequency: float = Field(..., description="Average minutes between same-day trades")
    summary: SummaryOut
    pnlDistribution: List[HistogramBucketOut]
    timeOfDay: List[HourBucketOut]
    tickers: List[TickerStatOut]
    tickerDistribution: List[TickerBreakdownOut]
    equityCurve: List[EquityPointOut]
    durations: DurationOut
    performance: PerformanceOut

    @classmethod
    def from_report(cls, start: str, end: str, r: AnalyticsReport) -> "AnalyticsResponse":
        s = r.summary
        d = r.durations
        p = r.performance
        return cls(
            start=start,
            end=end,
            tradeCount=r.trade_count,
            tradingFrequency=r.trading_frequency,
            summary=SummaryOut(
                totalTrades=s.total_trades,
                winningTrades=s.winning_trades,
                losingTrades=s.losing_trades,
                winRate=s.win_rate,
                totalNetPnL=s.total_net_pnl,
                avgWinningTrade=s.avg_winning_trade,
                avgLosingTrade=s.avg_losing_trade,
                profitFactor=s.profit_factor,
                tradingDays=s.trading_days,
                winningDays=s.winning_days,
                dayWinRate=s.day_win_rate,
                longTrades=s.long_trades,
                shortTrades=s.short_trades,
                weekdays=[
                    WeekdayOut(
                        day=w.day,
                        totalPnL=w.total_pnl,
                        tradingDays=w.trading_days,
                        avgPnL=w.avg_pnl,
                        trades=w.trades,
                    )
                    for w in s.weekdays
                ],
            ),
            pnlDistribution=[HistogramBucketOut(rangeLabel=b.range_label, count=b.count) for b in r.pnl_distribution],
            timeOfDay=[
                HourBucketOut(hour=h.hour, trades=h.trades, winRate=h.win_rate, avgPnL=float(h.avg_pnl))
                for h in r.time_of_day
            ],
            tickers=[TickerStatOut(ticker=t.ticker, pnl=float(t.pnl), totalTrades=t.total_trades) for t in r.tickers],
            tickerDistribution=[
                TickerBreakdownOut(ticker=t.ticker, total=t.total, wins=t.wins, losses=t.losses, pnl=float(t.pnl))
                for t in r.ticker_distribution
            ],
            equityCurve=[
                EquityPointOut(date=e.date.isoformat(), cumulativeValue=float(e.cumulative_value))
                for e in r.equity_curve
            ],
            durations=DurationOut(
                averageDuration=d.average_duration,
                shortTradeWinRate=d.short_trade_win_rate,
                longTradeWinRate=d.long_trade_win_rate,
                profitByDuration=[
                    DurationBucketOut(duration=b.duration, profit=float(b.profit), trades=b.trades)
                    for b in d.profit_by_duration
                ],
            ),
            performance=PerformanceOut(
                roi=p.roi if p else 0.0,
                sharpeRatio=p.sharpe if p else 0.0,
                sortinoRatio=p.sortino if p else 0.0,
                maxDrawdown=p.max_drawdown if p else 0.0,
                valueAtRisk=p.value_at_risk if p else 0.0,
                riskRewardRatio=p.risk_reward_ratio if p else 0.0,
                stopLossEfficiency=p.stop_loss_efficiency if p else 0.0,
                consecutiveTradesAnalysis=[
                    StreakOut(streak=s.streak, wins=s.wins, losses=s.losses) for s in (p.streaks if p else [])
                ],
            ),
        )
