"""Moderation of clubs and events through ContentStatus."""

import enum
import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import func
from sqlalchemy.orm import Session

from compass.models.club import Club
from compass.models.enums import ContentStatus
from compass.models.event import Event
from compass.services.errors import ContentNotFoundError, InvalidStatusError

logger = logging.getLogger(__name__)


class ContentKind(str, enum.Enum):
    CLUB = "clubs"
    EVENT = "events"

    @property
    def singular(self) -> str:
        return self.value[:-1]


_MODELS: dict[ContentKind, type[Club] | type[Event]] = {
    ContentKind.CLUB: Club,
    ContentKind.EVENT: Event,
}

VALID_STATUSES = ", ".join(s.value for s in ContentStatus)


def model_for(kind: ContentKind) -> type[Club] | type[Event]:
    return _MODELS[ContentKind(kind)]


def parse_status(value) -> ContentStatus:
    """Validate a raw status value. Raises InvalidStatusError."""
    if isinstance(value, ContentStatus):
        return value
    try:
        return ContentStatus(value)
    except ValueError:
        raise InvalidStatusError(
            f"Invalid or missing status provided. Must be one of: {VALID_STATUSES}"
        ) from None


def approve_all(db: Session, kind: ContentKind) -> int:
    """Bulk PENDING -> APPROVED. Returns the number of rows changed (0 is fine)."""
    kind = ContentKind(kind)
    model = model_for(kind)

    count = db.query(model).filter(
        model.status == ContentStatus.PENDING,
    ).update({"status": ContentStatus.APPROVED}, synchronize_session=False)
    db.commit()

    logger.info("Approved %s pending %s", count, kind.value)
    return count


def set_status(db: Session, kind: ContentKind, content_id: uuid.UUID, new_status) -> Club | Event:
    """Set one row's status. Validation happens before any store access."""
    status = parse_status(new_status)
    kind = ContentKind(kind)
    model = model_for(kind)

    row = db.get(model, content_id)
    if row is None:
        raise ContentNotFoundError(f"{kind.singular.capitalize()} not found")

    row.status = status
    db.commit()
    logger.info("Admin updated %s %s status to %s", kind.singular, content_id, status.value)
    return row


def content_status_counts(db: Session, kind: ContentKind) -> dict:
    """Per-status row counts; events also report upcoming approved ones."""
    kind = ContentKind(kind)
    model = model_for(kind)

    rows = db.query(model.status, func.count(model.id)).group_by(model.status).all()
    counts = {status.value: 0 for status in ContentStatus}
    for status, count in rows:
        counts[ContentStatus(status).value] = count

    stats = {"kind": kind.value, "counts": counts}
    if kind is ContentKind.EVENT:
        stats["upcoming_approved"] = db.query(func.count(Event.id)).filter(
            Event.status == ContentStatus.APPROVED,
            Event.start_datetime >= datetime.now(timezone.utc),
        ).scalar() or 0
    return stats


def parse_status_filter(value: str | None) -> ContentStatus | None:
    """``None``/``"ALL"`` mean no filter; anything else must be a ContentStatus."""
    if value is None or value == "ALL":
        return None
    try:
        return ContentStatus(value)
    except ValueError:
        raise InvalidStatusError("Invalid status filter value.") from None


def list_content(
    db: Session,
    kind: ContentKind,
    status_filter: str | None = None,
    page: int = 1,
    limit: int = 10,
) -> tuple[list[Club] | list[Event], int]:
    """One page of clubs or events for moderation, newest first, plus the total."""
    status = parse_status_filter(status_filter)
    model = model_for(kind)

    query = db.query(model)
    if status is not None:
        query = query.filter(model.status == status)

    total = query.count()
    rows = query.order_by(model.created_at.desc()).offset((page - 1) * limit).limit(limit).all()
    return rows, total
