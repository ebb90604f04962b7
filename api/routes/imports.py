from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from api.deps.db import get_services, get_user_id
from api.deps.services import Services
from api.models.imports import ImportResponse, MappedTradeOut, PreviewResponse
from api.services.cache import ImportPreview
from core.errors import (
    CsvDecodeError,
    EmptyFileError,
    ImportFailedError,
    InvalidTimezoneError,
    NoValidTradesError,
    NotFoundError,
)
from ingest.assembler import map_rows
from ingest.csv_source import read_csv
from ingest.mapping import BrokerFieldMapping
from utils.logger import setup_logger, log_json

router = APIRouter(prefix="/imports", tags=["imports"])
logger = setup_logger(__name__)


@router.post("/preview", response_model=PreviewResponse)
async def preview_import(
    broker_id: str = Form(...),
    file: UploadFile = File(...),
    user_id: str = Depends(get_user_id),
    services: Services = Depends(get_services),
) -> PreviewResponse:
    """Map every row of the upload and keep the result as the user's preview."""
    store = services.require_store()
    try:
        config = store.get_broker_config(user_id, broker_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)

    settings = services.user_settings(user_id)
    content = await file.read()
    try:
        parsed = read_csv(content)
        trades, summary = map_rows(
            parsed.header,
            parsed.rows,
            BrokerFieldMapping.from_dict(config.field_mappings),
            settings.timezone,
            settings.default_commission,
        )
    except (EmptyFileError, CsvDecodeError, InvalidTimezoneError) as e:
        raise HTTPException(status_code=400, detail=e.message)

    services.previews.put_preview(user_id, ImportPreview(broker_id=broker_id, header=parsed.header, trades=trades))
    log_json(
        logger,
        "info",
        "import_preview",
        user_id=user_id,
        broker=config.broker_name,
        rows=summary.total,
        valid=summary.valid,
        invalid=summary.invalid,
    )
    return PreviewResponse(
        broker_id=broker_id,
        headers=parsed.header,
        valid=summary.valid,
        invalid=summary.invalid,
        trades=[MappedTradeOut.from_mapped(t) for t in trades],
    )


@router.post("/commit", response_model=ImportResponse)
def commit_import(
    allow_partial: bool = False,
    user_id: str = Depends(get_user_id),
    services: Services = Depends(get_services),
) -> ImportResponse:
    """Write the valid rows of the current preview as one batch.

    The preview survives every failure and is cleared only on success.
    """
    preview = services.previews.get_preview(user_id)
    if preview is None:
        raise HTTPException(status_code=404, detail="No import preview")
    if preview.invalid_count and not allow_partial:
        raise HTTPException(status_code=409, detail="Preview contains invalid rows")

    try:
        result = services.importer.import_trades(user_id, preview.trades)
    except NoValidTradesError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except ImportFailedError as e:
        raise HTTPException(status_code=502, detail=e.message)

    services.previews.discard(user_id)
    return ImportResponse(imported=result.imported, message=result.message)


@router.delete("/preview")
def discard_preview(
    user_id: str = Depends(get_user_id),
    services: Services = Depends(get_services),
) -> dict:
    services.previews.discard(user_id)
    return {"status": "ok"}
