"""ORM models. Importing the package registers every mapper."""

from compass.models.base import Base
from compass.models.enums import AttendanceType, ContentStatus, JobStatus, JobType
from compass.models.user import User
from compass.models.category import Category, club_categories, event_categories
from compass.models.club import Club
from compass.models.event import Event
from compass.models.rsvp import RSVP
from compass.models.job import Job

__all__ = [
    "Base",
    "AttendanceType",
    "ContentStatus",
    "JobStatus",
    "JobType",
    "User",
    "Category",
    "club_categories",
    "event_categories",
    "Club",
    "Event",
    "RSVP",
    "Job",
]
