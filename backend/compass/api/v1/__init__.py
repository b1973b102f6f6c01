"""API v1 router aggregation."""

from fastapi import APIRouter

from compass.api.v1.admin import router as admin_router
from compass.api.v1.auth import router as auth_router
from compass.api.v1.catalog import router as catalog_router
from compass.api.v1.rsvps import router as rsvps_router
from compass.api.v1.scheduler import router as scheduler_router

router = APIRouter(prefix="/api/v1")

router.include_router(auth_router)
router.include_router(catalog_router)
router.include_router(rsvps_router)
router.include_router(admin_router)
router.include_router(scheduler_router)
