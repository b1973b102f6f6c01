"""Cron-facing scheduler endpoint.

Both GET and POST enqueue one job per known type. Callers authenticate with
``Authorization: Bearer <WORKER_SECRET>``.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from compass.dependencies.auth import has_scheduler_secret
from compass.models.base import get_db
from compass.schemas.job import SchedulerResponse
from compass.services.job_scheduler import schedule_all_jobs

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/scheduler", tags=["scheduler"])


async def _run_scheduler(db: AsyncSession, authorized: bool) -> JSONResponse:
    if not authorized:
        logger.warning("Scheduler endpoint called without valid secret.")
        return JSONResponse(status_code=401, content={"message": "Unauthorized"})

    result = await db.run_sync(schedule_all_jobs)
    if result.has_error:
        logger.error(f"Scheduler finished with errors: {result.details}")
    body = SchedulerResponse(message=result.message, details=result.details)
    return JSONResponse(
        status_code=500 if result.has_error else 200,
        content=body.model_dump(),
    )


@router.post("", response_model=SchedulerResponse)
async def trigger_scheduler(
    db: AsyncSession = Depends(get_db),
    authorized: bool = Depends(has_scheduler_secret),
):
    """Schedule every job type that has no open job."""
    return await _run_scheduler(db, authorized)


@router.get("", response_model=SchedulerResponse)
async def trigger_scheduler_get(
    db: AsyncSession = Depends(get_db),
    authorized: bool = Depends(has_scheduler_secret),
):
    """Same as POST, for cron services that can only issue GETs."""
    return await _run_scheduler(db, authorized)
