from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.core.exceptions import ForbiddenError, NotFoundError
from app.db.session import get_db
from app.models.enums import UserRole
from app.models.user import User
from app.repositories.submission import SubmissionRepository
from app.schemas.common import ApiResponse
from app.schemas.submission import SubmissionCreate, SubmissionRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/submissions", tags=["submissions"])

# roles that may read any submission
STAFF_ROLES = {UserRole.ADMIN, UserRole.ORGANIZER, UserRole.REVIEWER}


@router.post("", response_model=ApiResponse[SubmissionRead], status_code=status.HTTP_201_CREATED)
def create_submission(
    payload: SubmissionCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    submission = SubmissionRepository(db).create(current_user.id, payload)
    logger.info("Submission %s created by %s", submission.id, current_user.id)
    return ApiResponse[SubmissionRead](data=SubmissionRead.model_validate(submission))


@router.get("/mine", response_model=ApiResponse[list[SubmissionRead]])
def my_submissions(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    submissions = SubmissionRepository(db).find_by_user_id(current_user.id)
    return ApiResponse[list[SubmissionRead]](data=[SubmissionRead.model_validate(s) for s in submissions])


@router.get("/{submission_id}", response_model=ApiResponse[SubmissionRead])
def get_submission(
    submission_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    submission = SubmissionRepository(db).find_by_id(submission_id)
    if submission is None:
        raise NotFoundError("Submission", submission_id)
    if submission.user_id != current_user.id and current_user.role not in STAFF_ROLES:
        raise ForbiddenError("You can only view your own submissions")
    return ApiResponse[SubmissionRead](data=SubmissionRead.model_validate(submission))
