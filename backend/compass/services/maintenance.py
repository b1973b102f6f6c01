"""Bulk data-repair operations shared by scripts and Celery maintenance tasks.

Each function takes a sync session, commits its own work and returns a
summary dict.
"""

import calendar
import logging
import random
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session

from compass.models.base import as_utc
from compass.models.category import Category
from compass.models.event import Event
from compass.services.category_tagger import get_all_categories, get_or_create_category

logger = logging.getLogger(__name__)


def seed_categories(db: Session) -> dict:
    """Idempotently create every standard category."""
    created = 0
    for name in get_all_categories():
        if db.query(Category).filter(Category.name == name).first():
            continue
        get_or_create_category(db, name)
        created += 1
    db.commit()
    logger.info("Seeded %s new categories", created)
    return {"created": created, "total": len(get_all_categories())}


def cleanup_unused_categories(db: Session) -> dict:
    """Delete categories linked to no club and no event.

    Non-standard categories that are still in use are reported, not removed.
    """
    standard = set(get_all_categories())
    deleted = []
    non_standard_in_use = {}

    for category in db.query(Category).order_by(Category.name).all():
        club_count = len(category.clubs)
        event_count = len(category.events)
        if club_count == 0 and event_count == 0:
            deleted.append(category.name)
            db.delete(category)
        elif category.name not in standard:
            non_standard_in_use[category.name] = club_count + event_count

    db.commit()
    logger.info("Deleted %s unused categories", len(deleted))
    if non_standard_in_use:
        logger.warning("Non-standard categories still in use: %s", sorted(non_standard_in_use))
    return {"deleted": deleted, "non_standard_in_use": non_standard_in_use}


def _shift_into_month(start: datetime, year: int, month: int) -> datetime:
    last_day = calendar.monthrange(year, month)[1]
    return start.replace(year=year, month=month, day=min(start.day, last_day))


def move_events_to_current_month(
    db: Session,
    now: datetime | None = None,
    rng: random.Random | None = None,
    spread_days: int = 20,
) -> dict:
    """Move every event into the current month, keeping day, time and duration.

    Events that would land before tomorrow are pushed to a day in the
    ``spread_days`` days starting tomorrow.
    """
    now = now or datetime.now(timezone.utc)
    rng = rng or random.Random()
    tomorrow = now + timedelta(days=1)

    events = db.query(Event).filter(Event.start_datetime.isnot(None)).order_by(Event.start_datetime).all()
    moved = 0
    for event in events:
        old_start = as_utc(event.start_datetime)
        old_end = as_utc(event.end_datetime)

        new_start = _shift_into_month(old_start, now.year, now.month)
        if new_start < tomorrow:
            target = tomorrow.date() + timedelta(days=rng.randrange(spread_days))
            new_start = new_start.replace(year=target.year, month=target.month, day=target.day)

        event.start_datetime = new_start
        event.end_datetime = new_start + (old_end - old_start) if old_end else None
        moved += 1

    db.commit()
    logger.info("Moved %s events to %s/%s", moved, now.month, now.year)
    return {"processed": len(events), "moved": moved}


def reset_event_descriptions(db: Session) -> dict:
    """Replace descriptions with a pointer to the event page and clear contact emails."""
    events = db.query(Event).all()
    for event in events:
        url = event.event_url or event.event_page_url
        event.description = f"View event details at: {url}" if url else ""
        event.contact_email = None
    db.commit()
    logger.info("Reset descriptions for %s events", len(events))
    return {"reset": len(events)}


def remove_past_events(db: Session, now: datetime | None = None) -> int:
    """Delete events whose end time has passed. Events without an end time stay."""
    now = now or datetime.now(timezone.utc)
    deleted = db.query(Event).filter(
        Event.end_datetime.isnot(None),
        Event.end_datetime < now,
    ).delete(synchronize_session=False)
    db.commit()
    logger.info("Removed %s past events", deleted)
    return deleted
