# api/app.py

"""
Trade Journal FastAPI Application Factory
-----------------------------------------
Loads the app, attaches lifespan logic, and registers routes.

All heavy initialization is executed in `api.lifespan`.
"""

from typing import Optional

from fastapi import FastAPI
from api.deps.services import Services
from api.health import router as health_router
from api.lifespan import lifespan
from api.routes import router as api_router


def create_app(services: Optional[Services] = None) -> FastAPI:
    """
    App factory. Tests pass a prebuilt Services container; otherwise the
    lifespan builds one from environment settings.
    """
    app = FastAPI(
        title="Trade Journal API",
        version="1.0.0",
        lifespan=lifespan,
    )
    if services is not None:
        app.state.services = services

    # /health (always first)
    app.include_router(health_router)
    # Main API routes
    app.include_router(api_router)

    return app


# uvicorn entrypoint: `uvicorn api.app:app`
app = create_app()
