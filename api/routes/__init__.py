from fastapi import APIRouter
from .imports import router as imports_router
from .analytics import router as analytics_router
from .trades import router as trades_router
from .settings import router as settings_router
from .export import router as export_router


router = APIRouter()
router.include_router(settings_router)
router.include_router(imports_router)
router.include_router(trades_router)
router.include_router(analytics_router)
router.include_router(export_router, prefix="/export", tags=["export"])
