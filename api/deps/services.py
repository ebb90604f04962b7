"""
Dependency injection container attached to `app.state.services`.

Every route receives dependencies by calling:

    services = request.app.state.services
    store = services.store

Tests build their own container over a temporary DB and hand it to
create_app(services=...).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from api.deps.settings import Settings
from api.services.analytics_state import AnalyticsState
from api.services.cache import PreviewCache
from core.models import UserSettings
from db.trade_store import TradeStore
from ingest.importer import BatchImporter


@dataclass
class Services:
    settings: Settings
    store: Optional[TradeStore] = None
    previews: PreviewCache = field(default_factory=PreviewCache)
    analytics: AnalyticsState = field(default_factory=AnalyticsState)

    @classmethod
    def build(cls, settings: Settings, store: Optional[TradeStore] = None) -> "Services":
        return cls(
            settings=settings,
            store=store or TradeStore(settings.DB_PATH),
            previews=PreviewCache(ttl_seconds=settings.PREVIEW_TTL_SECONDS),
        )

    @property
    def importer(self) -> BatchImporter:
        return BatchImporter(self.require_store())

    def require_store(self) -> TradeStore:
        if self.store is None:
            raise RuntimeError("Services.store not initialised")
        return self.store

    def user_settings(self, user_id: str) -> UserSettings:
        defaults = UserSettings(
            user_id=user_id,
            timezone=self.settings.DEFAULT_TIMEZONE,
            currency=self.settings.DEFAULT_CURRENCY,
            default_commission=self.settings.DEFAULT_COMMISSION,
        )
        return self.require_store().get_settings(user_id, defaults)


__all__ = ["Services"]
