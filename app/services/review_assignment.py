"""
Reviewer assignment and review completion.

Repositories own the SQL; this layer checks that the people and submissions
involved exist and moves the submission along as reviews come in.
"""
from __future__ import annotations

import logging
import uuid

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import ForbiddenError, InvalidTransitionError, NotFoundError
from app.models.enums import SubmissionStatus, UserRole
from app.models.review import Review
from app.models.submission import Submission
from app.models.user import User
from app.repositories.review import ReviewRepository
from app.repositories.submission import SubmissionRepository
from app.repositories.user import UserRepository
from app.schemas.review import (
    ReviewCreate,
    ReviewerSuggestion,
    ReviewProgress,
    ReviewRead,
    ReviewUpdate,
    SubmissionReviews,
)

logger = logging.getLogger(__name__)


class ReviewAssignmentService:
    def __init__(self, db: Session):
        self.db = db
        self.reviews = ReviewRepository(db)
        self.submissions = SubmissionRepository(db)
        self.users = UserRepository(db)

    def _get_submission(self, submission_id: uuid.UUID) -> Submission:
        submission = self.submissions.find_by_id(submission_id)
        if submission is None:
            raise NotFoundError("Submission", submission_id)
        return submission

    def _get_reviewer(self, reviewer_id: uuid.UUID) -> User:
        reviewer = self.users.find_by_id(reviewer_id)
        if reviewer is None or reviewer.role != UserRole.REVIEWER:
            raise NotFoundError("Reviewer", reviewer_id)
        return reviewer

    def get_review(self, review_id: uuid.UUID) -> Review:
        review = self.reviews.find_by_id(review_id)
        if review is None:
            raise NotFoundError("Review", review_id)
        return review

    def assign(self, submission_id: uuid.UUID, reviewer_id: uuid.UUID) -> Review:
        self._get_submission(submission_id)
        self._get_reviewer(reviewer_id)

        review = self.reviews.assign(submission_id, reviewer_id)
        logger.info("Assigned reviewer %s to submission %s", reviewer_id, submission_id)
        return review

    def unassign(self, review_id: uuid.UUID) -> None:
        review = self.get_review(review_id)
        if review.is_completed:
            logger.warning("Refused to remove completed review %s", review_id)
            raise InvalidTransitionError(
                "Cannot remove an assignment whose review is completed",
                code="REVIEW_COMPLETED",
                details={"reviewId": str(review_id)},
            )
        self.reviews.delete(review_id)
        logger.info("Removed assignment %s", review_id)

    def submit_review(self, reviewer_id: uuid.UUID, data: ReviewCreate) -> Review:
        submission = self._get_submission(data.submission_id)
        review = self.reviews.create_review(reviewer_id, data)
        self._mark_under_review(submission)
        logger.info("Reviewer %s submitted a review for %s", reviewer_id, submission.id)
        return review

    def complete_review(self, review_id: uuid.UUID, data: ReviewUpdate, reviewer_id: uuid.UUID | None = None) -> Review:
        review = self.get_review(review_id)
        if reviewer_id is not None and review.reviewer_id != reviewer_id:
            raise ForbiddenError("You can only complete your own reviews")

        updated = self.reviews.complete_review(review_id, data)
        if updated is None:
            raise NotFoundError("Review", review_id)

        if updated.is_completed:
            self._mark_under_review(self._get_submission(updated.submission_id))
            logger.info("Review %s completed", review_id)
        return updated

    def _mark_under_review(self, submission: Submission) -> None:
        # first completed review moves a fresh submission into review
        if submission.status == SubmissionStatus.SUBMITTED:
            self.submissions.update_status(submission.id, SubmissionStatus.UNDER_REVIEW)
            logger.info("Submission %s is now under review", submission.id)

    def suggestions(self, submission_id: uuid.UUID) -> list[ReviewerSuggestion]:
        self._get_submission(submission_id)
        return self.reviews.suggest_reviewers(submission_id, limit=settings.suggestion_limit)

    def submission_reviews(self, submission_id: uuid.UUID) -> SubmissionReviews:
        self._get_submission(submission_id)
        return SubmissionReviews(
            reviews=[ReviewRead.model_validate(r) for r in self.reviews.find_by_submission(submission_id)],
            stats=self.reviews.aggregate_submission_stats(submission_id),
        )

    def progress(self) -> ReviewProgress:
        return self.reviews.aggregate_global_progress()

    def list_reviewers(self) -> list[User]:
        return self.users.find_by_role(UserRole.REVIEWER)

    def available_submissions(self) -> list[Submission]:
        return self.submissions.find_by_status(SubmissionStatus.SUBMITTED)
