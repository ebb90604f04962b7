from __future__ import annotations

import csv
from datetime import date, datetime
from io import StringIO
from typing import List, Sequence

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from api.contracts.trades_header import TRADES_HEADER
from api.deps.db import get_services, get_user_id
from api.deps.services import Services
from core.errors import StorageError
from core.models import Trade, UserSettings
from ingest.timestamps import load_zone
from utils.currency import format_currency
from utils.date_range import ALL_END, ALL_START
from utils.logger import setup_logger

router = APIRouter()
logger = setup_logger(__name__)


def format_local_time(instant: datetime, tz: str) -> str:
    """'9:30 AM' in the user's timezone."""
    local = instant.astimezone(load_zone(tz))
    hour = local.hour % 12 or 12
    suffix = "AM" if local.hour < 12 else "PM"
    return f"{hour}:{local.minute:02d} {suffix}"


def export_row(t: Trade, settings: UserSettings) -> List[str]:
    return [
        t.date.strftime("%m/%d/%Y"),
        format_local_time(t.entry_time, settings.timezone),
        format_local_time(t.exit_time, settings.timezone),
        f"{t.duration_seconds // 60} min" if t.duration_seconds else "-",
        t.ticker,
        t.direction.value,
        str(t.contracts),
        format_currency(t.profit_loss, settings.currency),
        format_currency(t.commission_per_contract, settings.currency),
        format_currency(t.net_profit, settings.currency),
        t.notes or "",
    ]


def render_trades_csv(trades: Sequence[Trade], settings: UserSettings) -> str:
    out = StringIO()
    writer = csv.writer(out, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(TRADES_HEADER)
    for t in trades:
        writer.writerow(export_row(t, settings))
    return out.getvalue()


# ------------------------------------------------------------
# /trades.csv
# ------------------------------------------------------------
@router.get("/trades.csv")
def export_trades_csv(
    start: date = Query(ALL_START),
    end: date = Query(ALL_END),
    user_id: str = Depends(get_user_id),
    services: Services = Depends(get_services),
) -> Response:
    store = services.require_store()
    settings = services.user_settings(user_id)
    try:
        trades = store.list_trades(user_id, start, end)
    except StorageError:
        logger.exception("trades_fetch_failed", extra={"user_id": user_id})
        raise HTTPException(status_code=502, detail="Failed to load trades")

    filename = f"trades_{start.isoformat()}_to_{end.isoformat()}.csv"
    return Response(
        content=render_trades_csv(trades, settings),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
