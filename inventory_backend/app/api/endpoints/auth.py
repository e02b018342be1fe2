from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, EmailStr, Field
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from inventory_backend.app.api.deps import get_current_user_id, get_db
from inventory_backend.app.core.errors import translate_db_errors
from inventory_backend.app.core.exceptions import (
    AuthenticationError,
    BadRequestError,
    ConflictError,
)
from inventory_backend.app.core.security import create_access_token, hash_password, verify_password
from inventory_backend.app.db.models.models_v1 import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth")


class SignupRequest(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)
    confirm_password: str


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


def _find_user(db: Session, email: str) -> User | None:
    return db.execute(select(User).where(User.email == email.lower())).scalar_one_or_none()


@router.post("/signup", status_code=201)
def signup(payload: SignupRequest, db: Session = Depends(get_db)):
    if payload.password != payload.confirm_password:
        raise BadRequestError("Passwords do not match")

    with translate_db_errors("Signup failed"):
        if _find_user(db, payload.email):
            raise ConflictError("Email already registered")

        user = User(
            name=payload.name,
            email=payload.email.lower(),
            password_hash=hash_password(payload.password),
        )
        db.add(user)
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            raise ConflictError("Email already registered") from exc
        db.refresh(user)

    logger.info("User %s signed up", user.user_id)
    return {"message": "Signup successful", "user_id": user.user_id}


@router.post("/login")
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    with translate_db_errors("Login failed"):
        user = _find_user(db, payload.email)
    if not user or not verify_password(payload.password, user.password_hash):
        raise AuthenticationError("Invalid email or password")

    return {"access_token": create_access_token(str(user.user_id)), "token_type": "bearer"}


@router.get("/me")
def me(user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)):
    with translate_db_errors("Failed to fetch user"):
        user = db.get(User, user_id)
    if not user:
        raise AuthenticationError("User no longer exists")
    return {"user_id": user.user_id, "name": user.name, "email": user.email}
