"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from shared_store.presentation.api.v1.endpoints.health import router as health_router
from shared_store.presentation.api.v1.endpoints.shared_data import router as shared_data_router
from shared_store.presentation.api.v1.endpoints.backups import router as backups_router
from shared_store.presentation.api.v1.endpoints.preferences import router as preferences_router
from shared_store.presentation.api.v1.endpoints.saved_items import router as saved_items_router
from shared_store.presentation.api.v1.endpoints.activity import router as activity_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(shared_data_router)
router.include_router(backups_router)
router.include_router(preferences_router)
router.include_router(saved_items_router)
router.include_router(activity_router)
