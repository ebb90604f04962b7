import asyncio
from datetime import date

import pytest

from api.services.analytics_state import AnalyticsState, SupersededError
from core.errors import StorageError
from core.models import UserSettings

SETTINGS = UserSettings(user_id="u1")
JAN = (date(2024, 1, 1), date(2024, 1, 31))
FEB = (date(2024, 2, 1), date(2024, 2, 29))


def test_refresh_commits_snapshot(make_trade):
    state = AnalyticsState()
    trade = make_trade("2024-01-02 09:30", "2024-01-02 09:40", 12)

    async def fetch():
        return [trade]

    snap = asyncio.run(state.refresh("u1", JAN, SETTINGS, fetch))
    assert snap.report.trade_count == 1
    assert state.current("u1") is snap


def test_last_request_wins(make_trade):
    state = AnalyticsState()
    old = make_trade("2024-01-02 09:30", "2024-01-02 09:40", 1)
    new = make_trade("2024-02-02 09:30", "2024-02-02 09:40", 2)

    async def scenario():
        gate = asyncio.Event()

        async def slow_fetch():
            await gate.wait()
            return [old]

        async def fast_fetch():
            return [new, new]

        first = asyncio.create_task(state.refresh("u1", JAN, SETTINGS, slow_fetch))
        await asyncio.sleep(0)
        second = await state.refresh("u1", FEB, SETTINGS, fast_fetch)
        gate.set()
        with pytest.raises(SupersededError):
            await first
        return second

    second = asyncio.run(scenario())
    current = state.current("u1")
    assert current is second
    assert current.date_range == FEB
    assert current.report.trade_count == 2


def test_fetch_failure_keeps_previous_snapshot(make_trade):
    state = AnalyticsState()
    trade = make_trade("2024-01-02 09:30", "2024-01-02 09:40", 12)

    async def ok():
        return [trade]

    async def broken():
        raise StorageError("db down")

    first = asyncio.run(state.refresh("u1", JAN, SETTINGS, ok))
    with pytest.raises(StorageError):
        asyncio.run(state.refresh("u1", FEB, SETTINGS, broken))
    assert state.current("u1") is first


def test_users_do_not_supersede_each_other():
    state = AnalyticsState()
    g1 = state.begin("u1")
    state.begin("u2")
    assert state.is_current("u1", g1)
