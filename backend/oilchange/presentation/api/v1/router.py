"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from oilchange.presentation.api.v1.endpoints.health import router as health_router
from oilchange.presentation.api.v1.endpoints.auth import router as auth_router
from oilchange.presentation.api.v1.endpoints.shops import router as shops_router
from oilchange.presentation.api.v1.endpoints.service_records import (
    router as service_records_router,
)

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(auth_router)
router.include_router(shops_router)
router.include_router(service_records_router)
