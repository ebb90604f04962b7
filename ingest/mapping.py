"""
Broker field mapping.

A BrokerFieldMapping is plain data: logical field name -> the literal CSV
header a given broker export uses for it. The same resolver serves every
broker; nothing here inspects row shape.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Sequence

TICKER = "ticker"
CONTRACTS = "contracts"
BUY_TIME = "buy_time"
SELL_TIME = "sell_time"
PROFIT_LOSS = "profit_loss"
NOTES = "notes"

REQUIRED_FIELDS = (TICKER, CONTRACTS, BUY_TIME, SELL_TIME, PROFIT_LOSS)
LOGICAL_FIELDS = REQUIRED_FIELDS + (NOTES,)

# broker name (lower-case) -> default column headers
BROKER_PRESETS: Dict[str, Dict[str, str]] = {
    "tradovate": {
        TICKER: "symbol",
        CONTRACTS: "qty",
        PROFIT_LOSS: "pnl",
        BUY_TIME: "boughtTimestamp",
        SELL_TIME: "soldTimestamp",
    },
}


@dataclass(frozen=True)
class BrokerFieldMapping:
    fields: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @classmethod
    def from_dict(cls, data: Mapping[str, str] | None) -> "BrokerFieldMapping":
        return cls({k: v for k, v in (data or {}).items() if v})

    def column_for(self, logical: str) -> str:
        return self.fields.get(logical, "")

    def missing(self) -> List[str]:
        return [f for f in REQUIRED_FIELDS if not self.fields.get(f)]

    def to_dict(self) -> Dict[str, str]:
        return dict(self.fields)


class HeaderIndex:
    """Header -> column position, first occurrence wins."""

    def __init__(self, header: Sequence[str]):
        self._index: Dict[str, int] = {}
        for i, name in enumerate(header):
            self._index.setdefault(name, i)

    def position(self, column: str) -> int:
        return self._index.get(column, -1)


def resolve_field(
    header: Sequence[str] | HeaderIndex,
    row: Sequence[str],
    mapping: BrokerFieldMapping,
    logical: str,
) -> str:
    """Trimmed cell for a logical field, or "" when it cannot be resolved.

    Never raises: an unmapped field, a header missing from this file, a short
    row and an empty cell all come back as "".
    """
    column = mapping.column_for(logical)
    if not column:
        return ""
    index = header if isinstance(header, HeaderIndex) else HeaderIndex(header)
    pos = index.position(column)
    if pos < 0 or pos >= len(row):
        return ""
    return (row[pos] or "").strip()


def suggest_mapping(broker_name: str, headers: Iterable[str]) -> Dict[str, str]:
    """Preset columns for a known broker, limited to headers actually present."""
    preset = BROKER_PRESETS.get((broker_name or "").strip().lower())
    if not preset:
        return {}
    present = set(h.strip() for h in headers)
    return {logical: col for logical, col in preset.items() if col in present}
