from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.exceptions import AuthenticationError, ValidationFailure
from app.core.security import create_access_token, get_password_hash, verify_password
from app.db.session import get_db
from app.repositories.user import UserRepository
from app.schemas.common import ApiResponse
from app.schemas.user import LoginRequest, LoginResponse, UserCreate, UserRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=ApiResponse[LoginResponse], status_code=status.HTTP_201_CREATED)
def register(payload: UserCreate, db: Session = Depends(get_db)):
    users = UserRepository(db)
    if users.find_by_email(payload.email) is not None:
        raise ValidationFailure("Email is already registered", code="EMAIL_TAKEN", field="email")

    user = users.create(payload, get_password_hash(payload.password))
    logger.info("Registered user %s as %s", user.id, user.participant_type.value)

    token = create_access_token(str(user.id), user.role.value)
    return ApiResponse[LoginResponse](
        data=LoginResponse(user=UserRead.model_validate(user), token=token),
        message="Registration successful",
    )


@router.post("/login", response_model=ApiResponse[LoginResponse])
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    user = UserRepository(db).find_by_email(payload.email)
    if user is None or not verify_password(payload.password, user.password_hash):
        logger.warning("Failed login for %s", payload.email)
        raise AuthenticationError("Invalid email or password")

    token = create_access_token(str(user.id), user.role.value)
    return ApiResponse[LoginResponse](data=LoginResponse(user=UserRead.model_validate(user), token=token))
