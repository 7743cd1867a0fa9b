from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import require_organizer, require_reviewer
from app.core.exceptions import ForbiddenError
from app.db.session import get_db
from app.models.enums import UserRole
from app.models.user import User
from app.repositories.review import ReviewRepository
from app.schemas.common import ApiResponse
from app.schemas.review import (
    AssignmentOverview,
    ReviewAssignmentRequest,
    ReviewCreate,
    ReviewerAssignment,
    ReviewerSuggestion,
    ReviewProgress,
    ReviewRead,
    ReviewUpdate,
    SubmissionReviews,
)
from app.schemas.submission import SubmissionRead
from app.schemas.user import UserRead
from app.services.review_assignment import ReviewAssignmentService

router = APIRouter(prefix="/reviews", tags=["reviews"])


def _own_reviews_only(current_user: User) -> uuid.UUID | None:
    """Reviewers act on their own reviews; organizers and admins on any."""
    return current_user.id if current_user.role == UserRole.REVIEWER else None


@router.get("/reviewers", response_model=ApiResponse[list[UserRead]])
def list_reviewers(_: User = Depends(require_organizer), db: Session = Depends(get_db)):
    reviewers = ReviewAssignmentService(db).list_reviewers()
    return ApiResponse[list[UserRead]](data=[UserRead.model_validate(r) for r in reviewers])


@router.get("/submissions/available", response_model=ApiResponse[list[SubmissionRead]])
def available_submissions(_: User = Depends(require_organizer), db: Session = Depends(get_db)):
    submissions = ReviewAssignmentService(db).available_submissions()
    return ApiResponse[list[SubmissionRead]](data=[SubmissionRead.model_validate(s) for s in submissions])


@router.post("/assign", response_model=ApiResponse[ReviewRead], status_code=status.HTTP_201_CREATED)
def assign_reviewer(
    payload: ReviewAssignmentRequest,
    _: User = Depends(require_organizer),
    db: Session = Depends(get_db),
):
    review = ReviewAssignmentService(db).assign(payload.submission_id, payload.reviewer_id)
    return ApiResponse[ReviewRead](data=ReviewRead.model_validate(review), message="Reviewer assigned")


@router.get("/assignments", response_model=ApiResponse[list[AssignmentOverview]])
def all_assignments(_: User = Depends(require_organizer), db: Session = Depends(get_db)):
    return ApiResponse[list[AssignmentOverview]](data=ReviewRepository(db).all_assignments())


@router.delete("/assignments/{review_id}", response_model=ApiResponse[None])
def remove_assignment(
    review_id: uuid.UUID,
    _: User = Depends(require_organizer),
    db: Session = Depends(get_db),
):
    ReviewAssignmentService(db).unassign(review_id)
    return ApiResponse[None](message="Assignment removed")


@router.get("/suggestions/{submission_id}", response_model=ApiResponse[list[ReviewerSuggestion]])
def reviewer_suggestions(
    submission_id: uuid.UUID,
    _: User = Depends(require_organizer),
    db: Session = Depends(get_db),
):
    return ApiResponse[list[ReviewerSuggestion]](data=ReviewAssignmentService(db).suggestions(submission_id))


@router.get("/reviewer/{reviewer_id}/assignments", response_model=ApiResponse[list[ReviewerAssignment]])
def reviewer_assignments(
    reviewer_id: uuid.UUID,
    current_user: User = Depends(require_reviewer),
    db: Session = Depends(get_db),
):
    own = _own_reviews_only(current_user)
    if own is not None and own != reviewer_id:
        raise ForbiddenError("You can only view your own assignments")
    return ApiResponse[list[ReviewerAssignment]](data=ReviewRepository(db).reviewer_assignments(reviewer_id))


@router.get("/progress/overview", response_model=ApiResponse[ReviewProgress])
def review_progress(_: User = Depends(require_organizer), db: Session = Depends(get_db)):
    return ApiResponse[ReviewProgress](data=ReviewAssignmentService(db).progress())


@router.get("/submission/{submission_id}/reviews", response_model=ApiResponse[SubmissionReviews])
def submission_reviews(
    submission_id: uuid.UUID,
    _: User = Depends(require_organizer),
    db: Session = Depends(get_db),
):
    return ApiResponse[SubmissionReviews](data=ReviewAssignmentService(db).submission_reviews(submission_id))


@router.post("", response_model=ApiResponse[ReviewRead], status_code=status.HTTP_201_CREATED)
def create_review(
    payload: ReviewCreate,
    current_user: User = Depends(require_reviewer),
    db: Session = Depends(get_db),
):
    review = ReviewAssignmentService(db).submit_review(current_user.id, payload)
    return ApiResponse[ReviewRead](data=ReviewRead.model_validate(review), message="Review submitted")


@router.get("/{review_id}", response_model=ApiResponse[ReviewRead])
def get_review(
    review_id: uuid.UUID,
    current_user: User = Depends(require_reviewer),
    db: Session = Depends(get_db),
):
    review = ReviewAssignmentService(db).get_review(review_id)
    own = _own_reviews_only(current_user)
    if own is not None and review.reviewer_id != own:
        raise ForbiddenError("You can only view your own reviews")
    return ApiResponse[ReviewRead](data=ReviewRead.model_validate(review))


@router.put("/{review_id}", response_model=ApiResponse[ReviewRead])
def complete_review(
    review_id: uuid.UUID,
    payload: ReviewUpdate,
    current_user: User = Depends(require_reviewer),
    db: Session = Depends(get_db),
):
    review = ReviewAssignmentService(db).complete_review(review_id, payload, reviewer_id=_own_reviews_only(current_user))
    return ApiResponse[ReviewRead](data=ReviewRead.model_validate(review))
