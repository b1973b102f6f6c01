"""RSVP model: a user's attendance intent for an event."""

from sqlalchemy import Column, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from compass.models.base import Base, TimestampMixin, UUIDMixin


class RSVP(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "rsvps"

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    event_id = Column(Uuid(as_uuid=True), ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)

    # Relationships
    user = relationship("User", back_populates="rsvps")
    event = relationship("Event", back_populates="rsvps")

    __table_args__ = (
        UniqueConstraint("user_id", "event_id", name="uq_rsvps_user_event"),
    )
