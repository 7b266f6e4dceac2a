"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from pingspot.presentation.api.v1.endpoints.health import router as health_router
from pingspot.presentation.api.v1.endpoints.location_records import (
    router as location_records_router,
)
from pingspot.presentation.api.v1.endpoints.activities import router as activities_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(location_records_router)
router.include_router(activities_router)
