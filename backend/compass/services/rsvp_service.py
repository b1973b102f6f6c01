"""Event RSVPs for signed-in users."""

import logging
import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from compass.models.base import as_utc, utcnow
from compass.models.enums import ContentStatus
from compass.models.event import Event
from compass.models.rsvp import RSVP
from compass.services.errors import ConflictError, ContentNotFoundError, PastEventError, RsvpClosedError

logger = logging.getLogger(__name__)

# Rejected events are hidden; pending ones can still collect interest
RSVP_OPEN_STATUSES = (ContentStatus.APPROVED, ContentStatus.PENDING)

ALREADY_RSVPED = "You have already RSVPed to this event"


def create_rsvp(db: Session, user_id: uuid.UUID, event_id: uuid.UUID) -> RSVP:
    event = db.get(Event, event_id)
    if event is None:
        raise ContentNotFoundError("Event not found")
    if event.status not in RSVP_OPEN_STATUSES:
        raise RsvpClosedError("Event is not open for RSVP")
    start = as_utc(event.start_datetime)
    if start is None or start <= utcnow():
        raise PastEventError("Cannot RSVP to past events")

    existing = db.query(RSVP).filter(RSVP.user_id == user_id, RSVP.event_id == event_id).first()
    if existing:
        raise ConflictError(ALREADY_RSVPED)

    rsvp = RSVP(user_id=user_id, event_id=event_id)
    db.add(rsvp)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(ALREADY_RSVPED) from None

    logger.info("User %s RSVPed to event %s", user_id, event_id)
    return rsvp


def cancel_rsvp(db: Session, user_id: uuid.UUID, event_id: uuid.UUID) -> None:
    deleted = db.query(RSVP).filter(
        RSVP.user_id == user_id,
        RSVP.event_id == event_id,
    ).delete(synchronize_session=False)
    if not deleted:
        db.rollback()
        raise ContentNotFoundError("RSVP not found")
    db.commit()
    logger.info("User %s cancelled RSVP for event %s", user_id, event_id)


def list_user_rsvp_events(db: Session, user_id: uuid.UUID, include_past: bool = False) -> list[Event]:
    """Events the user RSVPed to, soonest first."""
    query = db.query(Event).join(RSVP, RSVP.event_id == Event.id).filter(RSVP.user_id == user_id)
    if not include_past:
        query = query.filter(Event.start_datetime >= utcnow())
    return query.order_by(Event.start_datetime.asc()).all()
