"""User model for authentication and admin authorization."""

from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.orm import relationship

from compass.models.base import Base, TimestampMixin, UUIDMixin


class User(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "users"

    email = Column(String(255), unique=True, nullable=False, index=True)
    display_name = Column(String(100), nullable=False)
    hashed_password = Column(String(255), nullable=False)
    is_admin = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    last_login_at = Column(DateTime(timezone=True))

    # Relationships
    rsvps = relationship("RSVP", back_populates="user", cascade="all, delete-orphan")
    submitted_clubs = relationship("Club", back_populates="submitted_by")
