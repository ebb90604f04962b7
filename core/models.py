"""
Journal domain model.

MappedTrade is the transient, validated-or-not candidate produced while
previewing an import. Trade is the persisted record read by analytics.
Monetary fields are Decimal end to end; floats appear only at the API edge.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional


class Direction(str, Enum):
    LONG = "long"
    SHORT = "short"


DEFAULT_TIMEZONE = "America/New_York"
DEFAULT_CURRENCY = "USD"
DEFAULT_COMMISSION = Decimal("0.65")


@dataclass(frozen=True)
class UserSettings:
    user_id: str
    timezone: str = DEFAULT_TIMEZONE
    currency: str = DEFAULT_CURRENCY
    default_commission: Decimal = DEFAULT_COMMISSION


@dataclass
class BrokerConfig:
    id: str
    user_id: str
    broker_name: str
    field_mappings: Dict[str, str]
    created_at: Optional[str] = None


@dataclass
class MappedTrade:
    valid: bool = False
    errors: List[str] = field(default_factory=list)
    date: Optional[date] = None
    entry_time: Optional[datetime] = None
    exit_time: Optional[datetime] = None
    ticker: Optional[str] = None
    direction: Optional[Direction] = None
    contracts: Optional[int] = None
    profit_loss: Optional[Decimal] = None
    commission_per_contract: Optional[Decimal] = None
    net_profit: Optional[Decimal] = None
    notes: Optional[str] = None

    def to_record(self, user_id: str) -> Dict[str, Any]:
        """Persistable payload: valid/errors stripped, owner attached."""
        rec: Dict[str, Any] = {
            "user_id": user_id,
            "date": self.date,
            "entry_time": self.entry_time,
            "exit_time": self.exit_time,
            "ticker": self.ticker,
            "direction": self.direction,
            "contracts": self.contracts,
            "profit_loss": self.profit_loss,
            "commission_per_contract": self.commission_per_contract,
            "net_profit": self.net_profit,
            "notes": self.notes,
        }
        if self.entry_time is not None and self.exit_time is not None:
            rec["duration_seconds"] = int((self.exit_time - self.entry_time).total_seconds())
        return rec


@dataclass
class Trade:
    id: str
    user_id: str
    date: date
    entry_time: datetime
    exit_time: datetime
    ticker: str
    direction: Direction
    contracts: int
    profit_loss: Decimal
    commission_per_contract: Decimal
    net_profit: Decimal
    duration_seconds: Optional[int] = None
    notes: Optional[str] = None
    strategy_id: Optional[str] = None
    created_at: Optional[str] = None
