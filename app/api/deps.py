from __future__ import annotations

import uuid
from collections.abc import Callable

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.exceptions import AuthenticationError, ForbiddenError
from app.core.security import decode_access_token
from app.db.session import get_db
from app.models.enums import UserRole
from app.models.user import User
from app.repositories.user import UserRepository

bearer = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
    db: Session = Depends(get_db),
) -> User:
    if credentials is None:
        raise AuthenticationError()

    payload = decode_access_token(credentials.credentials)
    try:
        user_id = uuid.UUID(payload["sub"])
    except ValueError as e:
        raise AuthenticationError("Invalid token payload") from e

    user = UserRepository(db).find_by_id(user_id)
    if user is None:
        raise AuthenticationError("User not found or inactive")
    return user


def require_roles(*roles: UserRole) -> Callable[..., User]:
    """Dependency factory: the caller must hold one of ``roles``."""

    def checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in roles:
            raise ForbiddenError(f"Requires role: {', '.join(r.value for r in roles)}")
        return current_user

    return checker


require_admin = require_roles(UserRole.ADMIN)
require_reviewer = require_roles(UserRole.REVIEWER, UserRole.ORGANIZER, UserRole.ADMIN)
require_organizer = require_roles(UserRole.ORGANIZER, UserRole.ADMIN)
