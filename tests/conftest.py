from datetime import date
from decimal import Decimal
import itertools

import pytest

from core.models import Direction, Trade
from ingest.timestamps import local_date, parse_timestamp

NY = "America/New_York"

_ids = itertools.count(1)


def build_trade(entry, exit_, net, ticker="ESZ", direction=Direction.LONG, contracts=1, tz=NY, trade_date=None):
    """Trade from local wall-clock strings ('2024-01-02 09:30')."""
    entry_at = parse_timestamp(entry, tz)
    exit_at = parse_timestamp(exit_, tz)
    net = Decimal(str(net))
    return Trade(
        id=f"t{next(_ids)}",
        user_id="u1",
        date=trade_date or local_date(entry_at, tz),
        entry_time=entry_at,
        exit_time=exit_at,
        ticker=ticker,
        direction=direction,
        contracts=contracts,
        profit_loss=net + Decimal("0.65") * contracts,
        commission_per_contract=Decimal("0.65"),
        net_profit=net,
        duration_seconds=int((exit_at - entry_at).total_seconds()),
    )


@pytest.fixture
def make_trade():
    return build_trade


@pytest.fixture
def trade_record():
    """Persistable record shaped like MappedTrade.to_record()."""

    def _make(user_id="u1", day="2024-01-02", entry="2024-01-02 09:30", exit_="2024-01-02 09:45", **over):
        entry_at = parse_timestamp(entry, NY)
        exit_at = parse_timestamp(exit_, NY)
        rec = {
            "user_id": user_id,
            "date": date.fromisoformat(day),
            "entry_time": entry_at,
            "exit_time": exit_at,
            "duration_seconds": int((exit_at - entry_at).total_seconds()),
            "ticker": "ESZ",
            "direction": Direction.LONG,
            "contracts": 2,
            "profit_loss": Decimal("150.00"),
            "commission_per_contract": Decimal("0.65"),
            "net_profit": Decimal("148.70"),
            "notes": None,
        }
        rec.update(over)
        return rec

    return _make
