from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from analytics.frequency import is_qualifying_entry, minutes_between, trading_frequency

NY = "America/New_York"


def test_average_gap_within_one_day(make_trade):
    trades = [
        make_trade("2024-01-02 09:00", "2024-01-02 09:10", 10),
        make_trade("2024-01-02 09:30", "2024-01-02 09:40", -5),
        make_trade("2024-01-02 10:00", "2024-01-02 10:05", 3),
    ]
    assert trading_frequency(trades, NY) == 20.0


def test_averages_intervals_across_days(make_trade):
    trades = [
        make_trade("2024-01-02 09:00", "2024-01-02 09:10", 1),
        make_trade("2024-01-02 09:30", "2024-01-02 09:40", 1),
        make_trade("2024-01-02 10:00", "2024-01-02 10:05", 1),
        make_trade("2024-01-03 09:00", "2024-01-03 09:20", 1),
        make_trade("2024-01-03 10:00", "2024-01-03 10:10", 1),
    ]
    assert trading_frequency(trades, NY) == pytest.approx((20 + 20 + 40) / 3)


def test_gaps_never_cross_dates(make_trade):
    trades = [
        make_trade("2024-01-02 14:50", "2024-01-02 14:55", 1),
        make_trade("2024-01-03 09:00", "2024-01-03 09:05", 1),
    ]
    assert trading_frequency(trades, NY) == 0.0


def test_weekend_and_off_hours_trades_are_ignored(make_trade):
    trades = [
        make_trade("2024-01-06 09:00", "2024-01-06 09:10", 1),  # Saturday
        make_trade("2024-01-06 09:30", "2024-01-06 09:40", 1),
        make_trade("2024-01-02 07:00", "2024-01-02 07:10", 1),  # pre-market
        make_trade("2024-01-02 09:00", "2024-01-02 09:10", 1),
    ]
    assert trading_frequency(trades, NY) == 0.0


def test_order_follows_exit_time(make_trade):
    trades = [
        make_trade("2024-01-02 10:00", "2024-01-02 10:05", 1),
        make_trade("2024-01-02 09:00", "2024-01-02 09:10", 1),
    ]
    assert trading_frequency(trades, NY) == 50.0


def test_fewer_than_two_trades(make_trade):
    assert trading_frequency([], NY) == 0.0
    assert trading_frequency([make_trade("2024-01-02 09:00", "2024-01-02 09:10", 1)], NY) == 0.0


def test_window_bounds_inclusive():
    zone = ZoneInfo(NY)
    assert is_qualifying_entry(datetime(2024, 1, 2, 8, 30, tzinfo=zone), zone)
    assert is_qualifying_entry(datetime(2024, 1, 2, 15, 0, tzinfo=zone), zone)
    assert not is_qualifying_entry(datetime(2024, 1, 2, 8, 29, tzinfo=zone), zone)
    assert not is_qualifying_entry(datetime(2024, 1, 2, 15, 1, tzinfo=zone), zone)


def test_minutes_truncate():
    a = datetime(2024, 1, 2, 14, 0, tzinfo=timezone.utc)
    b = datetime(2024, 1, 2, 14, 2, 59, tzinfo=timezone.utc)
    assert minutes_between(b, a) == 2
