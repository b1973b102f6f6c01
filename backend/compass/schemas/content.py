"""Pydantic schemas for clubs, events, categories and moderation."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from compass.models.enums import AttendanceType, ContentStatus


class CategoryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str


class ClubRead(BaseModel):
    """Club fields without relationships."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    purpose: str
    category_description: str | None = None
    primary_contact_name: str | None = None
    contact_email: str | None = None
    website_url: str | None = None
    meeting_time: str | None = None
    meeting_location: str | None = None
    status: ContentStatus
    created_at: datetime
    updated_at: datetime


class ClubWithCategories(ClubRead):
    categories: list[CategoryRead] = []


class EventRead(BaseModel):
    """Event fields without relationships."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str | None = None
    start_datetime: datetime | None = None
    end_datetime: datetime | None = None
    all_day: bool = False
    location: str | None = None
    location_virtual_url: str | None = None
    attendance_type: AttendanceType
    organizer_sponsor: str | None = None
    cost_admission: str | None = None
    event_url: str | None = None
    event_page_url: str | None = None
    status: ContentStatus
    club_id: UUID | None = None
    created_at: datetime
    updated_at: datetime


class EventWithCategories(EventRead):
    categories: list[CategoryRead] = []


class StatusUpdate(BaseModel):
    # Validated by the approval service so bad values surface as 400s
    status: str | None = None


class ApproveAllRequest(BaseModel):
    type: str | None = None


class ApproveAllResponse(BaseModel):
    message: str
    count: int


class ContentStats(BaseModel):
    kind: str
    counts: dict[str, int]
    upcoming_approved: int | None = None


class CategoryCreate(BaseModel):
    name: str | None = None


class Pagination(BaseModel):
    page: int
    limit: int
    total_items: int
    total_pages: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(page=page, limit=limit, total_items=total, total_pages=-(-total // limit))


class ClubPage(BaseModel):
    data: list[ClubRead]
    pagination: Pagination


class EventPage(BaseModel):
    data: list[EventRead]
    pagination: Pagination


class RSVPRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    event_id: UUID
    created_at: datetime
