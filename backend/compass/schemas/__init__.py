"""Pydantic schemas package."""

from compass.schemas.auth import LoginRequest, RoleUpdate, UserPage, UserRead
from compass.schemas.content import (
    ApproveAllRequest,
    ApproveAllResponse,
    CategoryCreate,
    CategoryRead,
    ClubPage,
    ClubRead,
    ClubWithCategories,
    ContentStats,
    EventPage,
    EventRead,
    EventWithCategories,
    Pagination,
    RSVPRead,
    StatusUpdate,
)
from compass.schemas.job import ImportResponse, JobRead, SchedulerResponse

__all__ = [
    # Auth
    "LoginRequest",
    "RoleUpdate",
    "UserPage",
    "UserRead",
    # Content
    "ApproveAllRequest",
    "ApproveAllResponse",
    "CategoryCreate",
    "CategoryRead",
    "ClubPage",
    "ClubRead",
    "ClubWithCategories",
    "ContentStats",
    "EventPage",
    "EventRead",
    "EventWithCategories",
    "Pagination",
    "RSVPRead",
    "StatusUpdate",
    # Jobs
    "ImportResponse",
    "JobRead",
    "SchedulerResponse",
]
