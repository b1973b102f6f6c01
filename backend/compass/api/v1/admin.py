"""Admin endpoints: moderation queues, bulk approval, imports, categories,
the job dashboard and user roles.

Every route here is guarded by ``require_admin``.
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from compass.config import get_settings
from compass.dependencies.auth import require_admin
from compass.models.base import get_db
from compass.models.enums import JobType
from compass.models.user import User
from compass.schemas.auth import RoleUpdate, UserPage, UserRead
from compass.schemas.content import (
    ApproveAllRequest,
    ApproveAllResponse,
    CategoryCreate,
    CategoryRead,
    ClubPage,
    ClubRead,
    ContentStats,
    EventPage,
    EventRead,
    Pagination,
    StatusUpdate,
)
from compass.schemas.job import ImportResponse, JobRead
from compass.services.categories import create_category, delete_category
from compass.services.content_approval import (
    ContentKind,
    approve_all,
    content_status_counts,
    list_content,
    set_status,
)
from compass.services.errors import ConflictError, ContentNotFoundError, InvalidStatusError
from compass.services.job_scheduler import list_recent_jobs, schedule_job_if_not_exists

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])

# Import pipeline behind each content kind
IMPORT_JOB_TYPES = {
    ContentKind.EVENT: JobType.EVENT_SCRAPE,
    ContentKind.CLUB: JobType.CLUB_SCRAPE,
}


def _store_fault(action: str) -> HTTPException:
    logger.exception(f"Failed to {action}")
    return HTTPException(status_code=500, detail=f"Failed to {action}")


# ---------------------------------------------------------------------------
# Moderation queues
# ---------------------------------------------------------------------------


async def _list_content(db: AsyncSession, kind: ContentKind, status: str | None, page: int, limit: int):
    try:
        rows, total = await db.run_sync(list_content, kind, status, page, limit)
    except InvalidStatusError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SQLAlchemyError:
        raise _store_fault(f"fetch {kind.value}")
    return rows, Pagination.build(page, limit, total)


@router.get("/clubs", response_model=ClubPage)
async def list_clubs_for_review(
    db: AsyncSession = Depends(get_db),
    status: str | None = Query(None, description="PENDING, APPROVED, REJECTED or ALL"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
):
    """Clubs in any moderation state, newest first."""
    rows, pagination = await _list_content(db, ContentKind.CLUB, status, page, limit)
    return ClubPage(data=[ClubRead.model_validate(r) for r in rows], pagination=pagination)


@router.get("/events", response_model=EventPage)
async def list_events_for_review(
    db: AsyncSession = Depends(get_db),
    status: str | None = Query(None, description="PENDING, APPROVED, REJECTED or ALL"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
):
    """Events in any moderation state, newest first."""
    rows, pagination = await _list_content(db, ContentKind.EVENT, status, page, limit)
    return EventPage(data=[EventRead.model_validate(r) for r in rows], pagination=pagination)


# ---------------------------------------------------------------------------
# Approval
# ---------------------------------------------------------------------------


async def _approve_all(db: AsyncSession, kind: ContentKind) -> ApproveAllResponse:
    try:
        count = await db.run_sync(approve_all, kind)
    except SQLAlchemyError:
        raise _store_fault(f"approve {kind.value}")

    if count == 0:
        message = f"No pending {kind.value} found to approve."
    else:
        message = f"Successfully approved {count} {kind.value}."
    return ApproveAllResponse(message=message, count=count)


@router.post("/approve-all", response_model=ApproveAllResponse)
async def approve_all_by_type(body: ApproveAllRequest, db: AsyncSession = Depends(get_db)):
    """Approve every PENDING row of the kind named in the body."""
    try:
        kind = ContentKind(body.type)
    except ValueError:
        raise HTTPException(status_code=400, detail='Invalid type. Must be "events" or "clubs".')
    return await _approve_all(db, kind)


@router.post("/approve-all/clubs", response_model=ApproveAllResponse)
async def approve_all_clubs(db: AsyncSession = Depends(get_db)):
    return await _approve_all(db, ContentKind.CLUB)


@router.post("/approve-all/events", response_model=ApproveAllResponse)
async def approve_all_events(db: AsyncSession = Depends(get_db)):
    return await _approve_all(db, ContentKind.EVENT)


async def _set_status(db: AsyncSession, kind: ContentKind, content_id: UUID, status: str | None):
    try:
        return await db.run_sync(set_status, kind, content_id, status)
    except InvalidStatusError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ContentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SQLAlchemyError:
        raise _store_fault(f"update {kind.singular} status")


@router.patch("/clubs/{club_id}/status", response_model=ClubRead)
async def update_club_status(club_id: UUID, body: StatusUpdate, db: AsyncSession = Depends(get_db)):
    return await _set_status(db, ContentKind.CLUB, club_id, body.status)


@router.patch("/events/{event_id}/status", response_model=EventRead)
async def update_event_status(event_id: UUID, body: StatusUpdate, db: AsyncSession = Depends(get_db)):
    return await _set_status(db, ContentKind.EVENT, event_id, body.status)


@router.get("/content/{kind}/stats", response_model=ContentStats)
async def content_stats(kind: ContentKind, db: AsyncSession = Depends(get_db)):
    """Counts per moderation status."""
    try:
        return await db.run_sync(content_status_counts, kind)
    except SQLAlchemyError:
        raise _store_fault(f"count {kind.value}")


# ---------------------------------------------------------------------------
# Imports and jobs
# ---------------------------------------------------------------------------


@router.post("/import/{kind}", response_model=ImportResponse, status_code=202)
async def schedule_import(kind: ContentKind, response: Response, db: AsyncSession = Depends(get_db)):
    """Queue the import job for one kind unless one is already open.

    202 when a job was queued, 200 with the open job's id otherwise.
    """
    job_type = IMPORT_JOB_TYPES[kind]
    logger.info(f"Admin request to schedule {job_type.value} job")
    try:
        outcome = await db.run_sync(schedule_job_if_not_exists, job_type)
    except SQLAlchemyError:
        raise _store_fault(f"schedule {job_type.value} job")

    if not outcome.created:
        response.status_code = 200
    return ImportResponse(message=outcome.message, job_id=outcome.job_id, created=outcome.created)


@router.get("/jobs/status", response_model=list[JobRead])
async def jobs_status(
    db: AsyncSession = Depends(get_db),
    limit: int | None = Query(None, ge=1, le=100),
):
    """Most recent jobs, newest first."""
    try:
        jobs = await db.run_sync(list_recent_jobs, limit or get_settings().job_status_limit)
    except SQLAlchemyError:
        raise _store_fault("fetch job status")
    return [JobRead.model_validate(job) for job in jobs]


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------


@router.post("/categories", response_model=CategoryRead, status_code=201)
async def add_category(body: CategoryCreate, db: AsyncSession = Depends(get_db)):
    try:
        return await db.run_sync(create_category, body.name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except SQLAlchemyError:
        raise _store_fault("create category")


@router.delete("/categories/{category_id}", status_code=204)
async def remove_category(category_id: UUID, db: AsyncSession = Depends(get_db)):
    """Delete a category, refusing while clubs or events still use it."""
    try:
        await db.run_sync(delete_category, category_id)
    except ContentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except SQLAlchemyError:
        raise _store_fault("delete category")
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


@router.get("/users", response_model=UserPage)
async def list_users(
    db: AsyncSession = Depends(get_db),
    page: int = Query(1, ge=1),
    limit: int = Query(15, ge=1, le=100),
    search: str | None = Query(None, description="Match on email or display name"),
):
    query = select(User)
    if search:
        pattern = f"%{search.strip()}%"
        query = query.where(or_(User.email.ilike(pattern), User.display_name.ilike(pattern)))

    try:
        total = (await db.execute(select(func.count()).select_from(query.subquery()))).scalar_one()
        result = await db.execute(
            query.order_by(User.created_at.desc()).offset((page - 1) * limit).limit(limit)
        )
    except SQLAlchemyError:
        raise _store_fault("fetch users")

    users = result.scalars().all()
    return UserPage(
        data=[UserRead.model_validate(u) for u in users],
        pagination=Pagination.build(page, limit, total),
    )


@router.post("/users/{user_id}/role", response_model=UserRead)
async def update_user_role(
    user_id: UUID,
    body: RoleUpdate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    # Admins may promote or demote others but never drop their own flag
    if user_id == admin.id and not body.is_admin:
        raise HTTPException(status_code=400, detail="You cannot remove your own admin access")

    try:
        user = await db.get(User, user_id)
        if not user:
            raise HTTPException(status_code=404, detail="User not found")
        user.is_admin = body.is_admin
        await db.flush()
    except SQLAlchemyError:
        raise _store_fault("update user role")

    logger.info(f"Set is_admin={body.is_admin} for {user.email}")
    return user
