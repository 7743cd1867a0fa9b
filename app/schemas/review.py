from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import Field

from app.core.config import settings
from app.models.enums import PresentationType, ReviewRecommendation, SessionType, SubmissionStatus
from app.schemas.common import CamelModel


class ReviewAssignmentRequest(CamelModel):
    submission_id: uuid.UUID
    reviewer_id: uuid.UUID


class ReviewCreate(CamelModel):
    submission_id: uuid.UUID
    score: int = Field(ge=settings.review_score_min, le=settings.review_score_max)
    comments: str = Field(min_length=1)
    recommendation: ReviewRecommendation


class ReviewUpdate(CamelModel):
    """Partial review payload; only fields the caller sends are written."""

    score: int | None = Field(default=None, ge=settings.review_score_min, le=settings.review_score_max)
    comments: str | None = None
    recommendation: ReviewRecommendation | None = None


class ReviewRead(CamelModel):
    id: uuid.UUID
    submission_id: uuid.UUID
    reviewer_id: uuid.UUID
    score: int | None = None
    comments: str | None = None
    recommendation: ReviewRecommendation | None = None
    review_date: datetime
    is_completed: bool
    created_at: datetime
    updated_at: datetime | None = None


class ReviewerAssignment(CamelModel):
    review_id: uuid.UUID
    submission_id: uuid.UUID
    submission_title: str
    session_type: SessionType
    presentation_type: PresentationType
    submission_status: SubmissionStatus
    author_name: str
    assigned_date: datetime
    is_completed: bool


class AssignmentOverview(ReviewerAssignment):
    reviewer_id: uuid.UUID
    reviewer_name: str
    reviewer_expertise: list[str] = Field(default_factory=list)


class ReviewerSuggestion(CamelModel):
    reviewer_id: uuid.UUID
    name: str
    expertise: list[str] = Field(default_factory=list)
    affiliation: str
    match_score: int
    current_assignments: int
    match_reason: str


class SubmissionReviewStats(CamelModel):
    total_reviews: int
    completed_reviews: int
    average_score: float | None = None


class SubmissionReviews(CamelModel):
    reviews: list[ReviewRead]
    stats: SubmissionReviewStats


class ReviewerWorkload(CamelModel):
    reviewer_id: uuid.UUID
    reviewer_name: str
    total_assignments: int
    completed_reviews: int
    pending_reviews: int
    completion_rate: int


class ReviewProgress(CamelModel):
    total_assignments: int
    completed_reviews: int
    pending_reviews: int
    completion_percentage: float
    submissions_under_review: int
    active_reviewers: int
    submissions_by_status: dict[str, int]
    reviewer_workload: list[ReviewerWorkload]
