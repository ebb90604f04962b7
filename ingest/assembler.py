"""
Row -> MappedTrade.

Every check runs on every row and appends its message; a row is valid
exactly when no message was collected. Nothing in here raises for bad
row content.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple
from zoneinfo import ZoneInfo

from core.models import Direction, MappedTrade
from .amounts import parse_money, parse_quantity
from .mapping import (
    BUY_TIME,
    CONTRACTS,
    NOTES,
    PROFIT_LOSS,
    SELL_TIME,
    TICKER,
    BrokerFieldMapping,
    HeaderIndex,
    resolve_field,
)
from .timestamps import load_zone, local_date, parse_timestamp

TICKER_LENGTH = 3

MISSING_TICKER = "Missing ticker"
MISSING_QUANTITY = "Missing quantity"
INVALID_QUANTITY = "Invalid quantity"
INVALID_TIMESTAMPS = "Invalid timestamps"
MISSING_PNL = "Missing P&L"
INVALID_PNL = "Invalid P&L amount"


@dataclass(frozen=True)
class Legs:
    direction: Direction
    entry_time: datetime
    exit_time: datetime
    date: date


@dataclass(frozen=True)
class PreviewSummary:
    valid: int
    invalid: int

    @property
    def total(self) -> int:
        return self.valid + self.invalid


def order_legs(buy: datetime, sell: datetime, zone: ZoneInfo) -> Legs:
    """Earlier leg is the entry. Equal instants resolve to short."""
    if buy < sell:
        direction, entry, exit_ = Direction.LONG, buy, sell
    else:
        direction, entry, exit_ = Direction.SHORT, sell, buy
    return Legs(direction=direction, entry_time=entry, exit_time=exit_, date=local_date(entry, zone))


def assemble_legs(buy_raw: str, sell_raw: str, tz: str | ZoneInfo) -> Tuple[Optional[Legs], Optional[str]]:
    zone = tz if isinstance(tz, ZoneInfo) else load_zone(tz)
    buy = parse_timestamp(buy_raw, zone) if buy_raw else None
    sell = parse_timestamp(sell_raw, zone) if sell_raw else None
    if buy is None or sell is None:
        return None, INVALID_TIMESTAMPS
    return order_legs(buy, sell, zone), None


def map_row(
    header: Sequence[str] | HeaderIndex,
    row: Sequence[str],
    mapping: BrokerFieldMapping,
    tz: str | ZoneInfo,
    commission: Decimal,
) -> MappedTrade:
    index = header if isinstance(header, HeaderIndex) else HeaderIndex(header)

    def value(logical: str) -> str:
        return resolve_field(index, row, mapping, logical)

    trade = MappedTrade(commission_per_contract=commission)
    errors: List[str] = []

    ticker = value(TICKER)
    if ticker:
        trade.ticker = ticker[:TICKER_LENGTH]
    else:
        errors.append(MISSING_TICKER)

    qty_raw = value(CONTRACTS)
    if qty_raw:
        trade.contracts = parse_quantity(qty_raw)
        if trade.contracts is None:
            errors.append(INVALID_QUANTITY)
    else:
        errors.append(MISSING_QUANTITY)

    legs, legs_error = assemble_legs(value(BUY_TIME), value(SELL_TIME), tz)
    if legs is not None:
        trade.direction = legs.direction
        trade.entry_time = legs.entry_time
        trade.exit_time = legs.exit_time
        trade.date = legs.date
    else:
        errors.append(legs_error or INVALID_TIMESTAMPS)

    pnl_raw = value(PROFIT_LOSS)
    if pnl_raw:
        trade.profit_loss = parse_money(pnl_raw)
        if trade.profit_loss is None:
            errors.append(INVALID_PNL)
    else:
        errors.append(MISSING_PNL)

    notes = value(NOTES)
    if notes:
        trade.notes = notes

    if trade.profit_loss is not None and trade.contracts is not None:
        trade.net_profit = trade.profit_loss - trade.contracts * commission

    trade.errors = errors
    trade.valid = not errors
    return trade


def map_rows(
    header: Sequence[str],
    rows: Sequence[Sequence[str]],
    mapping: BrokerFieldMapping,
    tz: str | ZoneInfo,
    commission: Decimal,
) -> Tuple[List[MappedTrade], PreviewSummary]:
    zone = tz if isinstance(tz, ZoneInfo) else load_zone(tz)
    index = HeaderIndex(header)
    trades = [map_row(index, row, mapping, zone, commission) for row in rows]
    valid = sum(1 for t in trades if t.valid)
    return trades, PreviewSummary(valid=valid, invalid=len(trades) - valid)
