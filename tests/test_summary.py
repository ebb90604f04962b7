import pytest

from analytics.summary import dashboard_summary
from core.models import Direction

NY = "America/New_York"


def test_dashboard_summary(make_trade):
    trades = [
        make_trade("2024-01-01 09:30", "2024-01-01 09:40", 100),  # Monday
        make_trade("2024-01-01 10:30", "2024-01-01 10:40", -50, direction=Direction.SHORT),
        make_trade("2024-01-02 09:30", "2024-01-02 09:40", -30),  # Tuesday
    ]
    s = dashboard_summary(trades, NY)
    assert s.total_trades == 3
    assert (s.winning_trades, s.losing_trades) == (1, 2)
    assert s.win_rate == pytest.approx(100 / 3)
    assert s.total_net_pnl == pytest.approx(20.0)
    assert s.avg_winning_trade == pytest.approx(100.0)
    assert s.avg_losing_trade == pytest.approx(-40.0)
    assert s.profit_factor == pytest.approx(1.25)
    assert (s.trading_days, s.winning_days) == (2, 1)
    assert s.day_win_rate == pytest.approx(50.0)
    assert (s.long_trades, s.short_trades) == (2, 1)

    days = {w.day: w for w in s.weekdays}
    assert list(days) == ["Monday", "Tuesday"]
    assert days["Monday"].total_pnl == pytest.approx(50.0)
    assert days["Monday"].trades == 2
    assert days["Monday"].trading_days == 1
    assert days["Tuesday"].avg_pnl == pytest.approx(-30.0)


def test_no_losses_profit_factor_uses_one(make_trade):
    s = dashboard_summary([make_trade("2024-01-02 09:30", "2024-01-02 09:40", 40)], NY)
    assert s.profit_factor == pytest.approx(40.0)
    assert s.avg_losing_trade == 0.0


def test_empty_summary():
    s = dashboard_summary([], NY)
    assert s.total_trades == 0
    assert s.weekdays == []
