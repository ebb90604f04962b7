from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from api.deps.db import get_store, get_user_id
from api.models.trades import DeleteTradesRequest, DeleteTradesResponse, TradeOut, TradePage
from core.errors import StorageError
from db.trade_store import TradeStore
from utils.date_range import ALL_END, ALL_START
from utils.logger import setup_logger, log_json

router = APIRouter(prefix="/trades", tags=["trades"])
logger = setup_logger(__name__)


@router.get("", response_model=TradePage)
def list_trades(
    start: date = Query(ALL_START),
    end: date = Query(ALL_END),
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=500),
    user_id: str = Depends(get_user_id),
    store: TradeStore = Depends(get_store),
) -> TradePage:
    try:
        total = store.count_trades(user_id, start, end)
        rows = store.list_trades(user_id, start, end, offset=(page - 1) * page_size, limit=page_size)
    except StorageError:
        logger.exception("trades_fetch_failed", extra={"user_id": user_id})
        raise HTTPException(status_code=502, detail="Failed to load trades")
    return TradePage(total=total, page=page, page_size=page_size, trades=[TradeOut.from_trade(t) for t in rows])


@router.delete("", response_model=DeleteTradesResponse)
def delete_trades(
    body: DeleteTradesRequest,
    user_id: str = Depends(get_user_id),
    store: TradeStore = Depends(get_store),
) -> DeleteTradesResponse:
    try:
        deleted = store.delete_trades(user_id, body.ids)
    except StorageError:
        logger.exception("trades_delete_failed", extra={"user_id": user_id})
        raise HTTPException(status_code=502, detail="Failed to delete trades")
    log_json(logger, "info", "trades_deleted", user_id=user_id, requested=len(body.ids), deleted=deleted)
    return DeleteTradesResponse(deleted=deleted)
