"""Club model: student organizations, moderated via ContentStatus."""

from sqlalchemy import Column, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import relationship

from compass.models.base import Base, TimestampMixin, UUIDMixin
from compass.models.category import club_categories
from compass.models.enums import ContentStatus, enum_column_type


class Club(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "clubs"

    # Import upsert key
    name = Column(String(255), unique=True, nullable=False)
    purpose = Column(Text, nullable=False)
    category_description = Column(String(255))  # raw "Type" column from the club sheet

    # Contact
    primary_contact_name = Column(String(255))
    contact_email = Column(String(255))
    website_url = Column(String(500))
    meeting_time = Column(String(255))
    meeting_location = Column(String(255))

    status = Column(
        enum_column_type(ContentStatus, "content_status"),
        default=ContentStatus.PENDING,
        nullable=False,
    )
    submitted_by_user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"))

    # Relationships
    submitted_by = relationship("User", back_populates="submitted_clubs")
    categories = relationship("Category", secondary=club_categories, back_populates="clubs")
    events = relationship("Event", back_populates="club")

    __table_args__ = (
        Index("idx_club_status", "status"),
    )
