from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Protocol, Sequence

from core.errors import ImportFailedError, NoValidTradesError
from core.models import MappedTrade
from utils.logger import setup_logger, log_json

logger = setup_logger(__name__)


class TradeWriter(Protocol):
    def insert_trades(self, records: Sequence[Dict[str, Any]]) -> int: ...


@dataclass(frozen=True)
class ImportResult:
    imported: int

    @property
    def message(self) -> str:
        return f"Successfully imported {self.imported} trades"


class BatchImporter:
    """Submit the valid subset of a preview as one all-or-nothing write."""

    def __init__(self, store: TradeWriter):
        self.store = store

    def import_trades(self, user_id: str, mapped: Sequence[MappedTrade]) -> ImportResult:
        valid = [t for t in mapped if t.valid]
        if not valid:
            raise NoValidTradesError()

        records: List[Dict[str, Any]] = [t.to_record(user_id) for t in valid]
        try:
            self.store.insert_trades(records)
        except Exception as e:
            logger.exception("import_failed", extra={"user_id": user_id, "batch_size": len(records)})
            raise ImportFailedError() from e

        log_json(logger, "info", "import_committed", user_id=user_id, count=len(records), skipped=len(mapped) - len(records))
        return ImportResult(imported=len(records))
