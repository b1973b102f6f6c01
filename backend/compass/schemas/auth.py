"""Pydantic schemas for login and user records."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from compass.schemas.content import Pagination


class LoginRequest(BaseModel):
    email: str
    password: str


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    display_name: str
    is_admin: bool
    is_active: bool
    last_login_at: datetime | None = None


class RoleUpdate(BaseModel):
    is_admin: bool


class UserPage(BaseModel):
    data: list[UserRead]
    pagination: Pagination
