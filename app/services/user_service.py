# app/services/user_service.py

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.database import commit_or_raise
from app.core.errors import DuplicateKey, ValidationError
from app.core.hashing import hash_password, verify_password
from app.core.jwt import create_access_token
from app.core.permissions import ADMIN, STAFF
from app.models.users import User

logger = logging.getLogger(__name__)

DUPLICATE_USERNAME_MESSAGE = "Username already taken"


def _require_credentials(username: str | None, password: str | None):
    if not username or not username.strip() or not password:
        raise ValidationError("Username and password are required")


def register_user(db: Session, username: str, password: str) -> User:
    """
    Create an account. The first account ever registered is the admin;
    every later one is staff.
    """
    _require_credentials(username, password)
    username = username.strip()

    if db.query(User.id).filter(User.username == username).first():
        raise DuplicateKey(DUPLICATE_USERNAME_MESSAGE)

    user_count = db.query(func.count(User.id)).scalar()
    role = ADMIN if user_count == 0 else STAFF

    user = User(
        username=username,
        password_hash=hash_password(password),
        role=role,
    )
    db.add(user)
    commit_or_raise(db, DUPLICATE_USERNAME_MESSAGE)
    db.refresh(user)

    logger.info("Registered user %s with role %s", user.username, user.role)
    return user


def authenticate_user(db: Session, username: str, password: str):
    """Return (token, user) for valid credentials."""
    _require_credentials(username, password)

    user = db.query(User).filter(User.username == username.strip()).first()

    if not user or not verify_password(password, user.password_hash):
        raise ValidationError("Invalid credentials")

    token = create_access_token(
        data={
            "sub": str(user.id),
            "id": user.id,
            "username": user.username,
            "role": user.role,
        }
    )
    return token, user
