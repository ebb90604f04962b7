from __future__ import annotations

from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from core.models import BrokerConfig, Trade, UserSettings


class TradeOut(BaseModel):
    id: str
    date: str
    entry_time: str
    exit_time: str
    duration_seconds: Optional[int] = None
    ticker: str
    direction: str
    contracts: int
    profit_loss: float
    commission_per_contract: float
    net_profit: float
    notes: Optional[str] = None
    strategy_id: Optional[str] = None

    @classmethod
    def from_trade(cls, t: Trade) -> "TradeOut":
        return cls(
            id=t.id,
            date=t.date.isoformat(),
            entry_time=t.entry_time.isoformat(),
            exit_time=t.exit_time.isoformat(),
            duration_seconds=t.duration_seconds,
            ticker=t.ticker,
            direction=t.direction.value,
            contracts=t.contracts,
            profit_loss=float(t.profit_loss),
            commission_per_contract=float(t.commission_per_contract),
            net_profit=float(t.net_profit),
            notes=t.notes,
            strategy_id=t.strategy_id,
        )


class TradePage(BaseModel):
    total: int = Field(..., description="Rows in range (count-only query)")
    page: int
    page_size: int
    trades: List[TradeOut]


class DeleteTradesRequest(BaseModel):
    ids: List[str] = Field(..., description="Trade ids to delete; other users' ids are ignored")


class DeleteTradesResponse(BaseModel):
    deleted: int


class SettingsIn(BaseModel):
    timezone: str
    currency: str = "USD"
    default_commission: float = Field(..., ge=0)


class SettingsOut(BaseModel):
    user_id: str
    timezone: str
    currency: str
    default_commission: float

    @classmethod
    def from_settings(cls, s: UserSettings) -> "SettingsOut":
        return cls(
            user_id=s.user_id,
            timezone=s.timezone,
            currency=s.currency,
            default_commission=float(s.default_commission),
        )


class BrokerIn(BaseModel):
    broker_name: str = Field(..., min_length=1)
    field_mappings: Dict[str, str] = Field(default_factory=dict)


class MappingsIn(BaseModel):
    field_mappings: Dict[str, str]


class SuggestIn(BaseModel):
    broker_name: str
    headers: List[str]


class BrokerOut(BaseModel):
    id: str
    broker_name: str
    field_mappings: Dict[str, str]
    created_at: Optional[str] = None

    @classmethod
    def from_config(cls, c: BrokerConfig) -> "BrokerOut":
        return cls(id=c.id, broker_name=c.broker_name, field_mappings=c.field_mappings, created_at=c.created_at)
