"""Authentication and authorization dependencies for FastAPI routes."""

import logging
import secrets
import uuid

from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from compass.config import get_settings
from compass.models.base import get_db
from compass.models.user import User

logger = logging.getLogger(__name__)


async def get_current_user(request: Request, db: AsyncSession = Depends(get_db)) -> User | None:
    """Return the logged-in user or None."""
    user_id = request.session.get("user_id")
    if not user_id:
        return None
    try:
        user_uuid = uuid.UUID(user_id)
    except ValueError:
        request.session.clear()
        return None
    result = await db.execute(
        select(User).where(User.id == user_uuid, User.is_active == True)  # noqa: E712
    )
    return result.scalar_one_or_none()


async def require_user_api(user: User | None = Depends(get_current_user)) -> User:
    """Return the logged-in user or raise 401."""
    if not user:
        raise HTTPException(status_code=401, detail="You must be signed in to perform this action")
    return user


async def require_admin(user: User = Depends(require_user_api)) -> User:
    """Guard for every admin operation: 401 without a session, 403 without the admin flag."""
    if not user.is_admin:
        raise HTTPException(status_code=403, detail="Only admins can perform this action")
    return user


def has_scheduler_secret(authorization: str | None = Header(default=None)) -> bool:
    """Check ``Authorization: Bearer <WORKER_SECRET>`` for cron-triggered calls.

    Always False while WORKER_SECRET is unset.
    """
    secret = get_settings().worker_secret
    if not secret or not authorization:
        return False
    return secrets.compare_digest(authorization.encode(), f"Bearer {secret}".encode())
