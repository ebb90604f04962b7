"""
Health endpoint.
Reports uptime and whether the trade store answers a trivial query.
"""

from __future__ import annotations

from fastapi import APIRouter, Request
from pydantic import BaseModel
import time

from utils.logger import setup_logger, log_json


router = APIRouter(prefix="/health", tags=["health"])
logger = setup_logger(__name__)


class HealthReport(BaseModel):
    status: str
    uptime_seconds: float
    db_ok: bool


@router.get("/", response_model=HealthReport)
async def health_root(request: Request) -> HealthReport:
    services = getattr(request.app.state, "services", None)
    start_ts = getattr(request.app.state, "start_time", time.time())

    store = getattr(services, "store", None)
    db_ok = bool(store is not None and store.ping())
    status = "ok" if db_ok else "degraded"

    log_json(logger, "debug", "healthcheck", status=status)

    return HealthReport(
        status=status,
        uptime_seconds=time.time() - start_ts,
        db_ok=db_ok,
    )
