# api/lifespan.py

"""
Journal Lifespan Manager
------------------------
Canonical place for startup/shutdown logic:
- build the Services container unless one was injected
- ensure the DB schema
- close the store on shutdown
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator
import time

from fastapi import FastAPI

from api.deps.services import Services
from api.deps.settings import get_settings
from utils.logger import apply_level, setup_logger, log_json

logger = setup_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    services = getattr(app.state, "services", None)
    owned = services is None
    if owned:
        services = Services.build(get_settings())
        app.state.services = services

    apply_level(services.settings.LOG_LEVEL)
    app.state.start_time = time.time()
    store = services.require_store()
    store.ensure_schema()
    log_json(logger, "info", "startup", db_path=store.db_path, env=services.settings.ENV)

    try:
        yield
    finally:
        # injected containers belong to the caller
        if owned:
            store.close()
