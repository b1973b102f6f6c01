"""Event model: campus calendar entries and club events."""

from sqlalchemy import Column, Boolean, DateTime, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import relationship

from compass.models.base import Base, TimestampMixin, UUIDMixin
from compass.models.category import event_categories
from compass.models.enums import AttendanceType, ContentStatus, enum_column_type


class Event(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "events"

    # Calendar identity (et_id on the UH calendar)
    external_id = Column(String(64), unique=True)
    event_url = Column(String(1000))
    event_page_url = Column(String(1000))

    title = Column(String(500), nullable=False)
    description = Column(Text)
    start_datetime = Column(DateTime(timezone=True))
    end_datetime = Column(DateTime(timezone=True))
    all_day = Column(Boolean, default=False, nullable=False)

    # Location
    location = Column(String(500))
    location_virtual_url = Column(String(1000))
    attendance_type = Column(
        enum_column_type(AttendanceType, "attendance_type"),
        default=AttendanceType.IN_PERSON,
        nullable=False,
    )

    cost_admission = Column(String(255))
    organizer_sponsor = Column(String(500))
    contact_name = Column(String(255))
    contact_phone = Column(String(50))
    contact_email = Column(String(255))

    last_scraped_at = Column(DateTime(timezone=True))
    status = Column(
        enum_column_type(ContentStatus, "content_status"),
        default=ContentStatus.PENDING,
        nullable=False,
    )
    club_id = Column(Uuid(as_uuid=True), ForeignKey("clubs.id", ondelete="SET NULL"), index=True)

    # Relationships
    club = relationship("Club", back_populates="events")
    categories = relationship("Category", secondary=event_categories, back_populates="events")
    rsvps = relationship("RSVP", back_populates="event", cascade="all, delete-orphan")

    __table_args__ = (
        Index("idx_event_status_start", "status", "start_datetime"),
    )
