"""
Per-user analytics state with last-request-wins semantics.

Every range change bumps the user's generation. A fetch started under an
older generation may still finish, but its result is dropped instead of
replacing the state of the newer range. There is no explicit cancel.
"""

from __future__ import annotations

import asyncio
import threading
from dataclasses import dataclass
from datetime import date
from typing import Awaitable, Callable, Dict, Optional, Sequence, Tuple

from analytics.report import AnalyticsReport, build_report
from core.models import Trade, UserSettings
from utils.logger import setup_logger, log_json

logger = setup_logger(__name__)

DateRange = Tuple[date, date]
Fetcher = Callable[[], Awaitable[Sequence[Trade]]]


class SupersededError(Exception):
    """The range that triggered this fetch is no longer current."""


@dataclass(frozen=True)
class AnalyticsSnapshot:
    generation: int
    date_range: DateRange
    report: AnalyticsReport


class AnalyticsState:
    def __init__(self) -> None:
        self._generation: Dict[str, int] = {}
        self._current: Dict[str, AnalyticsSnapshot] = {}
        self._lock = threading.Lock()

    def begin(self, user_id: str) -> int:
        with self._lock:
            gen = self._generation.get(user_id, 0) + 1
            self._generation[user_id] = gen
            return gen

    def is_current(self, user_id: str, generation: int) -> bool:
        with self._lock:
            return self._generation.get(user_id) == generation

    def current(self, user_id: str) -> Optional[AnalyticsSnapshot]:
        with self._lock:
            return self._current.get(user_id)

    def commit(self, user_id: str, snapshot: AnalyticsSnapshot) -> bool:
        with self._lock:
            if self._generation.get(user_id) != snapshot.generation:
                return False
            self._current[user_id] = snapshot
            return True

    async def refresh(
        self,
        user_id: str,
        date_range: DateRange,
        settings: UserSettings,
        fetch: Fetcher,
    ) -> AnalyticsSnapshot:
        """Fetch the range and recompute every aggregate from scratch.

        Fetch errors propagate and leave the previous snapshot in place.
        """
        gen = self.begin(user_id)
        trades = await fetch()
        if not self.is_current(user_id, gen):
            log_json(logger, "info", "analytics_superseded", user_id=user_id, generation=gen)
            raise SupersededError()

        report = await asyncio.to_thread(build_report, list(trades), settings)
        snapshot = AnalyticsSnapshot(generation=gen, date_range=date_range, report=report)
        if not self.commit(user_id, snapshot):
            log_json(logger, "info", "analytics_superseded", user_id=user_id, generation=gen)
            raise SupersededError()
        return snapshot
