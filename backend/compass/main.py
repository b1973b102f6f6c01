"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import redis
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import func, select, text
from starlette.middleware.gzip import GZipMiddleware
from starlette.middleware.sessions import SessionMiddleware

from compass.api.v1 import router as api_v1_router
from compass.config import get_settings
from compass.models.base import AsyncSessionLocal, Base, as_utc, engine
from compass.models.club import Club
from compass.models.enums import OPEN_JOB_STATUSES, TERMINAL_JOB_STATUSES, ContentStatus, JobStatus, JobType
from compass.models.event import Event
from compass.models.job import Job

logger = logging.getLogger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Starting %s...", settings.app_name)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables verified")
    yield
    logger.info("Shutting down...")
    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    description="Club and event directory for UH Manoa students",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(GZipMiddleware, minimum_size=500)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(SessionMiddleware, secret_key=settings.secret_key, same_site="lax")

app.include_router(api_v1_router)


@app.get("/health")
async def health_check():
    return {"status": "healthy", "app": settings.app_name}


async def _check_database() -> dict:
    async with AsyncSessionLocal() as session:
        await session.execute(text("SELECT 1"))
    return {"ok": True}


async def _check_jobs() -> dict:
    """Open jobs and the last finished run for each pipeline."""
    async with AsyncSessionLocal() as session:
        open_rows = await session.execute(
            select(Job.type, Job.status, func.count())
            .where(Job.status.in_(OPEN_JOB_STATUSES))
            .group_by(Job.type, Job.status)
        )
        finished_rows = await session.execute(
            select(Job.type, func.max(Job.ended_at))
            .where(Job.status.in_(TERMINAL_JOB_STATUSES))
            .group_by(Job.type)
        )

    pipelines = {
        job_type.value: {"PENDING": 0, "RUNNING": 0, "last_finished_at": None}
        for job_type in JobType
    }
    for job_type, status, count in open_rows:
        pipelines[JobType(job_type).value][JobStatus(status).value] = count
    for job_type, ended_at in finished_rows:
        if ended_at is not None:
            pipelines[JobType(job_type).value]["last_finished_at"] = as_utc(ended_at).isoformat()
    return {"ok": True, "pipelines": pipelines}


async def _check_moderation_queue() -> dict:
    async with AsyncSessionLocal() as session:
        clubs = await session.scalar(
            select(func.count()).select_from(Club).where(Club.status == ContentStatus.PENDING)
        )
        events = await session.scalar(
            select(func.count()).select_from(Event).where(Event.status == ContentStatus.PENDING)
        )
    return {"ok": True, "pending": {"clubs": clubs, "events": events}}


async def _check_redis() -> dict:
    r = redis.from_url(settings.redis_url, socket_timeout=5)
    r.ping()
    return {"ok": True}


async def _check_workers() -> dict:
    from compass.tasks.celery_app import celery_app
    active_workers = celery_app.control.inspect(timeout=5).active()
    return {
        "ok": bool(active_workers),
        "workers": list(active_workers.keys()) if active_workers else [],
    }


@app.get("/health/detailed")
async def detailed_health_check():
    """Infrastructure plus job pipeline and moderation backlog."""
    checks = {}
    for name, check in (
        ("database", _check_database),
        ("jobs", _check_jobs),
        ("moderation_queue", _check_moderation_queue),
        ("redis", _check_redis),
        ("celery_workers", _check_workers),
    ):
        try:
            checks[name] = await check()
        except Exception as e:
            logger.warning("Health check %s failed: %s", name, e)
            checks[name] = {"ok": False, "message": str(e)}

    all_ok = all(check.get("ok", False) for check in checks.values())
    status = "healthy" if all_ok else "degraded"

    return {
        "status": status,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": checks,
    }
