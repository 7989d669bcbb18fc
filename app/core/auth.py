# app/core/auth.py

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.users import User
from app.core.errors import Forbidden, Unauthorized
from app.core.jwt import decode_access_token
from app.core.oauth2 import bearer_scheme
from app.core.permissions import FORBIDDEN_MESSAGE, is_allowed


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
):
    if credentials is None or not credentials.credentials:
        raise Unauthorized("Unauthorized: No token provided")

    payload = decode_access_token(credentials.credentials)

    if payload is None:
        raise Forbidden("Forbidden: Invalid token")

    user_id = payload.get("sub")

    if user_id is None or not str(user_id).isdigit():
        raise Forbidden("Forbidden: Invalid token payload")

    user = db.query(User).filter(User.id == int(user_id)).first()

    if user is None:
        raise Forbidden("Forbidden: User not found")

    return user


def require_permission(operation: str):
    """Dependency factory: the current user, provided their role allows `operation`."""

    def _checker(current_user: User = Depends(get_current_user)):
        if not is_allowed(current_user.role, operation):
            raise Forbidden(FORBIDDEN_MESSAGE)
        return current_user

    return _checker
