from __future__ import annotations

from typing import Generator

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from inventory_backend.app.core.config import settings
from inventory_backend.app.core.exceptions import AuthenticationError
from inventory_backend.app.core.security import TokenValidationError, decode_token
from inventory_backend.app.db.session import SessionLocal

bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> int:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Not authenticated")
    try:
        payload = decode_token(credentials.credentials)
    except TokenValidationError as exc:
        raise AuthenticationError(str(exc)) from exc
    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError) as exc:
        raise AuthenticationError("Token is invalid") from exc


def require_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> int | None:
    """Gate for resource routes; a no-op unless AUTH_REQUIRED is on."""
    if not settings.AUTH_REQUIRED:
        return None
    return get_current_user_id(credentials)
