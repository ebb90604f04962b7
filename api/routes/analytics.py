from __future__ import annotations

import asyncio
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.deps.db import get_services, get_user_id
from api.deps.services import Services
from api.models.analytics import AnalyticsResponse
from api.services.analytics_state import SupersededError
from core.errors import InvalidTimezoneError, StorageError
from utils.date_range import resolve_period
from utils.logger import setup_logger

router = APIRouter(prefix="/analytics", tags=["analytics"])
logger = setup_logger(__name__)


def resolve_range(start: Optional[date], end: Optional[date], period: Optional[str], anchor: Optional[date]):
    if start is not None and end is not None:
        if start > end:
            raise HTTPException(status_code=400, detail="start must not be after end")
        return start, end
    try:
        return resolve_period(period or "monthly", anchor)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("", response_model=AnalyticsResponse)
async def get_analytics(
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
    period: Optional[str] = Query(None, description="daily, weekly, monthly, yearly or all"),
    anchor: Optional[date] = Query(None),
    user_id: str = Depends(get_user_id),
    services: Services = Depends(get_services),
) -> AnalyticsResponse:
    """Fetch every trade in range and recompute all aggregates from scratch."""
    rng = resolve_range(start, end, period, anchor)
    store = services.require_store()
    settings = services.user_settings(user_id)

    async def fetch():
        return await asyncio.to_thread(store.list_trades, user_id, rng[0], rng[1])

    try:
        snapshot = await services.analytics.refresh(user_id, rng, settings, fetch)
    except SupersededError:
        raise HTTPException(status_code=409, detail="Superseded by a newer date range")
    except StorageError:
        logger.exception("trades_fetch_failed", extra={"user_id": user_id})
        raise HTTPException(status_code=502, detail="Failed to load trades")
    except InvalidTimezoneError as e:
        raise HTTPException(status_code=400, detail=e.message)

    return AnalyticsResponse.from_report(rng[0].isoformat(), rng[1].isoformat(), snapshot.report)
