"""RSVPs for signed-in users."""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from compass.dependencies.auth import require_user_api
from compass.models.base import get_db
from compass.models.user import User
from compass.schemas.content import EventRead, RSVPRead
from compass.services.errors import ConflictError, ContentNotFoundError, PastEventError, RsvpClosedError
from compass.services.rsvp_service import cancel_rsvp, create_rsvp, list_user_rsvp_events

logger = logging.getLogger(__name__)

router = APIRouter(tags=["rsvps"])


async def _call(db: AsyncSession, fn, *args):
    try:
        return await db.run_sync(fn, *args)
    except ContentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except RsvpClosedError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except PastEventError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except SQLAlchemyError:
        logger.exception("RSVP request failed")
        raise HTTPException(status_code=500, detail="Failed to process RSVP")


@router.post("/events/{event_id}/rsvp", response_model=RSVPRead, status_code=201)
async def rsvp_to_event(
    event_id: UUID,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_user_api),
):
    return await _call(db, create_rsvp, user.id, event_id)


@router.delete("/events/{event_id}/rsvp", status_code=204)
async def cancel_event_rsvp(
    event_id: UUID,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_user_api),
):
    await _call(db, cancel_rsvp, user.id, event_id)
    return Response(status_code=204)


@router.get("/rsvps", response_model=list[EventRead])
async def my_rsvps(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_user_api),
    include_past: bool = Query(False),
):
    """Events the signed-in user has RSVPed to."""
    events = await _call(db, list_user_rsvp_events, user.id, include_past)
    return [EventRead.model_validate(e) for e in events]
