from __future__ import annotations

from fastapi import Header, HTTPException, Request

from api.deps.services import Services
from db.trade_store import TradeStore


def get_services(request: Request) -> Services:
    services = getattr(request.app.state, "services", None)
    if services is None:
        raise HTTPException(status_code=503, detail="Services not initialised")
    return services


def get_store(request: Request) -> TradeStore:
    store = getattr(get_services(request), "store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="Database not available")
    return store


def get_user_id(x_user_id: str = Header(..., alias="X-User-Id")) -> str:
    """Opaque caller identity; authentication happens upstream."""
    user_id = x_user_id.strip()
    if not user_id:
        raise HTTPException(status_code=401, detail="Missing user id")
    return user_id
