# app/core/jwt.py

from datetime import datetime, timedelta, timezone
from jose import jwt, JWTError
from app.core.config import settings

TOKEN_TYPE = "access"


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """Sign `data` (sub, id, username, role) into a bearer token, valid for one day by default."""
    claims = dict(data)
    claims["exp"] = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    claims["type"] = TOKEN_TYPE

    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> dict | None:
    # None for anything unusable: bad signature, expired, or not an access token
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None

    if payload.get("type") != TOKEN_TYPE:
        return None

    for claim in ("sub", "username", "role"):
        if claim not in payload:
            return None

    return payload
