"""Authentication helpers: bcrypt password hashing and credential checks."""

import bcrypt
from sqlalchemy import func
from sqlalchemy.orm import Session

from compass.models.base import utcnow
from compass.models.user import User


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def authenticate(db: Session, email: str, password: str) -> User | None:
    """Return the user for a matching email/password pair, else None.

    Deactivated users are returned too; the caller decides how to report them.
    """
    user = db.query(User).filter(func.lower(User.email) == normalize_email(email)).first()
    if not user or not verify_password(password, user.hashed_password):
        return None
    if user.is_active:
        user.last_login_at = utcnow()
        db.commit()
    return user


def create_user(
    db: Session,
    email: str,
    password: str,
    display_name: str,
    is_admin: bool = False,
) -> User:
    user = User(
        email=normalize_email(email),
        display_name=display_name,
        hashed_password=hash_password(password),
        is_admin=is_admin,
    )
    db.add(user)
    db.commit()
    return user
