from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, Field

from core.models import MappedTrade


# ---------------------------------------------------------
# One previewed CSV row
# ---------------------------------------------------------
class MappedTradeOut(BaseModel):
    valid: bool = Field(..., description="True when the row collected no errors")
    errors: List[str] = Field(default_factory=list, description="Validation messages, in check order")
    date: Optional[str] = Field(None, description="ISO calendar date of the entry leg in the user's timezone")
    entry_time: Optional[str] = Field(None, description="ISO UTC instant of the earlier leg")
    exit_time: Optional[str] = Field(None, description="ISO UTC instant of the later leg")
    ticker: Optional[str] = Field(None, description="First three characters of the mapped symbol")
    direction: Optional[str] = Field(None, description="long or short")
    contracts: Optional[int] = Field(None, description="Positive contract count")
    profit_loss: Optional[float] = Field(None, description="Signed P&L before commission")
    commission_per_contract: Optional[float] = Field(None, description="From user settings")
    net_profit: Optional[float] = Field(None, description="profit_loss - contracts * commission")
    notes: Optional[str] = None

    @classmethod
    def from_mapped(cls, t: MappedTrade) -> "MappedTradeOut":
        return cls(
            valid=t.valid,
            errors=list(t.errors),
            date=t.date.isoformat() if t.date else None,
            entry_time=t.entry_time.isoformat() if t.entry_time else None,
            exit_time=t.exit_time.isoformat() if t.exit_time else None,
            ticker=t.ticker,
            direction=t.direction.value if t.direction else None,
            contracts=t.contracts,
            profit_loss=float(t.profit_loss) if t.profit_loss is not None else None,
            commission_per_contract=(
                float(t.commission_per_contract) if t.commission_per_contract is not None else None
            ),
            net_profit=float(t.net_profit) if t.net_profit is not None else None,
            notes=t.notes,
        )


class PreviewResponse(BaseModel):
    broker_id: str = Field(..., description="Broker configuration used for mapping")
    headers: List[str] = Field(..., description="Header row of the uploaded file")
    valid: int = Field(..., description="Rows without validation errors")
    invalid: int = Field(..., description="Rows with at least one validation error")
    trades: List[MappedTradeOut] = Field(..., description="Mapped rows in file order")


class ImportResponse(BaseModel):
    imported: int = Field(..., description="Trades written in the batch")
    message: str
