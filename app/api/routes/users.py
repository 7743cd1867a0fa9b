from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_current_user, require_admin
from app.core.exceptions import NotFoundError
from app.db.session import get_db
from app.models.user import User
from app.repositories.user import UserRepository
from app.schemas.common import ApiResponse
from app.schemas.user import RoleUpdate, UserRead, UserUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=ApiResponse[UserRead])
def read_me(current_user: User = Depends(get_current_user)):
    return ApiResponse[UserRead](data=UserRead.model_validate(current_user))


@router.put("/me", response_model=ApiResponse[UserRead])
def update_me(
    payload: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    user = UserRepository(db).update(current_user.id, payload)
    if user is None:
        raise NotFoundError("User", current_user.id)
    return ApiResponse[UserRead](data=UserRead.model_validate(user))


@router.put("/{user_id}/role", response_model=ApiResponse[UserRead])
def update_role(
    user_id: uuid.UUID,
    payload: RoleUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    user = UserRepository(db).update_role(user_id, payload.role)
    if user is None:
        raise NotFoundError("User", user_id)
    logger.info("User %s role set to %s by %s", user_id, payload.role.value, admin.id)
    return ApiResponse[UserRead](data=UserRead.model_validate(user))


@router.delete("/{user_id}", response_model=ApiResponse[None])
def deactivate_user(
    user_id: uuid.UUID,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    if not UserRepository(db).deactivate(user_id):
        raise NotFoundError("User", user_id)
    logger.info("User %s deactivated by %s", user_id, admin.id)
    return ApiResponse[None](message="User deactivated")
