from __future__ import annotations

from decimal import Decimal
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from api.deps.db import get_services, get_store, get_user_id
from api.deps.services import Services
from api.models.trades import BrokerIn, BrokerOut, MappingsIn, SettingsIn, SettingsOut, SuggestIn
from core.errors import DuplicateBrokerError, InvalidTimezoneError, NotFoundError
from core.models import UserSettings
from db.trade_store import TradeStore
from ingest.mapping import LOGICAL_FIELDS, suggest_mapping
from ingest.timestamps import load_zone

router = APIRouter(tags=["settings"])


@router.get("/settings", response_model=SettingsOut)
def read_settings(user_id: str = Depends(get_user_id), services: Services = Depends(get_services)) -> SettingsOut:
    return SettingsOut.from_settings(services.user_settings(user_id))


@router.put("/settings", response_model=SettingsOut)
def write_settings(
    body: SettingsIn,
    user_id: str = Depends(get_user_id),
    store: TradeStore = Depends(get_store),
) -> SettingsOut:
    try:
        load_zone(body.timezone)
    except InvalidTimezoneError as e:
        raise HTTPException(status_code=400, detail=e.message)
    saved = store.save_settings(
        UserSettings(
            user_id=user_id,
            timezone=body.timezone,
            currency=body.currency.upper(),
            default_commission=Decimal(str(body.default_commission)),
        )
    )
    return SettingsOut.from_settings(saved)


def _clean_mappings(mappings: dict) -> dict:
    unknown = sorted(set(mappings) - set(LOGICAL_FIELDS))
    if unknown:
        raise HTTPException(status_code=400, detail=f"Unknown fields: {', '.join(unknown)}")
    return {k: v.strip() for k, v in mappings.items() if v and v.strip()}


@router.get("/brokers", response_model=List[BrokerOut])
def list_brokers(user_id: str = Depends(get_user_id), store: TradeStore = Depends(get_store)) -> List[BrokerOut]:
    return [BrokerOut.from_config(c) for c in store.list_broker_configs(user_id)]


@router.post("/brokers", response_model=BrokerOut, status_code=201)
def create_broker(
    body: BrokerIn,
    user_id: str = Depends(get_user_id),
    store: TradeStore = Depends(get_store),
) -> BrokerOut:
    name = body.broker_name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="Please enter a broker name")
    try:
        cfg = store.create_broker_config(user_id, name, _clean_mappings(body.field_mappings))
    except DuplicateBrokerError as e:
        raise HTTPException(status_code=409, detail=e.message)
    return BrokerOut.from_config(cfg)


@router.put("/brokers/{broker_id}/mappings", response_model=BrokerOut)
def update_mappings(
    broker_id: str,
    body: MappingsIn,
    user_id: str = Depends(get_user_id),
    store: TradeStore = Depends(get_store),
) -> BrokerOut:
    try:
        cfg = store.update_field_mappings(user_id, broker_id, _clean_mappings(body.field_mappings))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return BrokerOut.from_config(cfg)


@router.delete("/brokers/{broker_id}")
def delete_broker(
    broker_id: str,
    user_id: str = Depends(get_user_id),
    store: TradeStore = Depends(get_store),
) -> dict:
    if not store.delete_broker_config(user_id, broker_id):
        raise HTTPException(status_code=404, detail="Broker configuration not found")
    return {"status": "ok"}


@router.post("/brokers/suggest")
def suggest_broker_mapping(body: SuggestIn) -> dict:
    """Preset mapping for known brokers, restricted to the given headers."""
    return {"field_mappings": suggest_mapping(body.broker_name, body.headers)}
