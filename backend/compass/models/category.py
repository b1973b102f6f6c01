"""Category model and the club/event tagging join tables."""

from sqlalchemy import Column, ForeignKey, String, Table, Uuid
from sqlalchemy.orm import relationship

from compass.models.base import Base, TimestampMixin, UUIDMixin

# Composite primary keys keep one link per (entity, category) pair
club_categories = Table(
    "club_categories",
    Base.metadata,
    Column("club_id", Uuid(as_uuid=True), ForeignKey("clubs.id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", Uuid(as_uuid=True), ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
)

event_categories = Table(
    "event_categories",
    Base.metadata,
    Column("event_id", Uuid(as_uuid=True), ForeignKey("events.id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", Uuid(as_uuid=True), ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
)


class Category(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "categories"

    name = Column(String(100), unique=True, nullable=False, index=True)

    # Relationships
    clubs = relationship("Club", secondary=club_categories, back_populates="categories")
    events = relationship("Event", secondary=event_categories, back_populates="categories")
