"""Public catalog of approved clubs and events."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from compass.models.base import get_db, utcnow
from compass.models.category import Category
from compass.models.club import Club
from compass.models.enums import ContentStatus
from compass.models.event import Event
from compass.schemas.content import CategoryRead, ClubWithCategories, EventWithCategories

router = APIRouter(tags=["catalog"])


@router.get("/clubs", response_model=list[ClubWithCategories])
async def list_clubs(
    db: AsyncSession = Depends(get_db),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
    category: str | None = Query(None, description="Filter by category name"),
):
    """List approved clubs."""
    query = (
        select(Club)
        .options(selectinload(Club.categories))
        .where(Club.status == ContentStatus.APPROVED)
    )
    if category:
        query = query.where(Club.categories.any(Category.name == category))

    query = query.order_by(Club.name).offset(skip).limit(limit)
    result = await db.execute(query)
    return result.scalars().all()


@router.get("/events", response_model=list[EventWithCategories])
async def list_events(
    db: AsyncSession = Depends(get_db),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
    category: str | None = Query(None, description="Filter by category name"),
    include_past: bool = Query(False),
):
    """List approved events, upcoming only unless ``include_past`` is set."""
    query = (
        select(Event)
        .options(selectinload(Event.categories))
        .where(Event.status == ContentStatus.APPROVED)
    )
    if category:
        query = query.where(Event.categories.any(Category.name == category))
    if not include_past:
        query = query.where(Event.start_datetime >= utcnow())

    query = query.order_by(Event.start_datetime.asc()).offset(skip).limit(limit)
    result = await db.execute(query)
    return result.scalars().all()


@router.get("/categories", response_model=list[CategoryRead])
async def list_categories(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(Category).order_by(Category.name))
    return result.scalars().all()
