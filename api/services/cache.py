from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from core.models import MappedTrade


class TTLCache:
    """
    Lightweight keyed TTL cache.

    - No external deps
    - Entries invalidate automatically after TTL seconds
    - Stores arbitrary objects
    """

    def __init__(self, ttl_seconds: float = 1800.0):
        self.ttl = ttl_seconds
        self._store: Dict[str, Tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None

            ts, value = entry
            if time.time() - ts > self.ttl:
                # expired
                self._store.pop(key, None)
                return None

            return value

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._store[key] = (time.time(), value)

    def pop(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._store.pop(key, None)
        return entry[1] if entry else None

    def clear(self) -> None:
        with self._lock:
            self._store.clear()


@dataclass
class ImportPreview:
    broker_id: str
    header: List[str]
    trades: List[MappedTrade] = field(default_factory=list)

    @property
    def valid_count(self) -> int:
        return sum(1 for t in self.trades if t.valid)

    @property
    def invalid_count(self) -> int:
        return len(self.trades) - self.valid_count


class PreviewCache(TTLCache):
    """Current import preview per user. Replaced by each new preview."""

    def get_preview(self, user_id: str) -> Optional[ImportPreview]:
        return self.get(user_id)

    def put_preview(self, user_id: str, preview: ImportPreview) -> None:
        self.set(user_id, preview)

    def discard(self, user_id: str) -> None:
        self.pop(user_id)
