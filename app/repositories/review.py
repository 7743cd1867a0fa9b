from __future__ import annotations

import uuid
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import case, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, aliased

from app.core.exceptions import DuplicateAssignmentError
from app.db.session import transaction
from app.models.enums import SubmissionStatus, UserRole
from app.models.review import Review
from app.models.submission import Submission
from app.models.timestamps import utcnow
from app.models.user import User
from app.repositories.base import apply_patch, patch_fields
from app.schemas.review import (
    AssignmentOverview,
    ReviewCreate,
    ReviewerAssignment,
    ReviewerSuggestion,
    ReviewerWorkload,
    ReviewProgress,
    ReviewUpdate,
    SubmissionReviewStats,
)

MATCH_REASONS = {
    3: "Expertise matches submission keywords",
    2: "Expertise matches session type",
    1: "Available reviewer",
}

UNIQUE_ASSIGNMENT = "uq_reviews_submission_reviewer"

_completed = case((Review.is_completed.is_(True), 1))
_pending = case((Review.is_completed.is_(False), 1))


def _round_half_up(value: Decimal, places: str) -> Decimal:
    return value.quantize(Decimal(places), rounding=ROUND_HALF_UP)


def _is_duplicate_assignment(error: IntegrityError) -> bool:
    diag = getattr(error.orig, "diag", None)
    constraint = getattr(diag, "constraint_name", None)
    if constraint:
        return constraint == UNIQUE_ASSIGNMENT
    # sqlite reports the columns instead of the constraint name
    return "reviews.submission_id, reviews.reviewer_id" in str(error.orig)


def match_score(expertise: list[str], keywords: list[str], session_type: str) -> int:
    tags = set(expertise or ())
    if tags & set(keywords or ()):
        return 3
    if session_type in tags:
        return 2
    return 1


class ReviewRepository:
    def __init__(self, db: Session):
        self.db = db

    # --- writes -----------------------------------------------------------

    def assign(self, submission_id: uuid.UUID, reviewer_id: uuid.UUID) -> Review:
        review = Review(submission_id=submission_id, reviewer_id=reviewer_id, is_completed=False)
        return self._insert(review)

    def create_review(self, reviewer_id: uuid.UUID, data: ReviewCreate) -> Review:
        """A completed review submitted without a prior assignment."""
        review = Review(
            submission_id=data.submission_id,
            reviewer_id=reviewer_id,
            score=data.score,
            comments=data.comments,
            recommendation=data.recommendation,
            is_completed=True,
        )
        return self._insert(review)

    def complete_review(self, review_id: uuid.UUID, data: ReviewUpdate) -> Review | None:
        review = self.find_by_id(review_id)
        if review is None:
            return None

        fields = patch_fields(data)
        if not fields:
            return review

        fields.update(is_completed=True, review_date=utcnow())
        with transaction(self.db):
            apply_patch(review, fields)
        return review

    def delete(self, review_id: uuid.UUID) -> bool:
        review = self.find_by_id(review_id)
        if review is None:
            return False
        with transaction(self.db):
            self.db.delete(review)
        return True

    def _insert(self, review: Review) -> Review:
        try:
            with transaction(self.db):
                self.db.add(review)
        except IntegrityError as e:
            if _is_duplicate_assignment(e):
                raise DuplicateAssignmentError(review.submission_id, review.reviewer_id) from e
            raise
        return review

    # --- lookups ----------------------------------------------------------

    def find_by_id(self, review_id: uuid.UUID) -> Review | None:
        return self.db.get(Review, review_id)

    def find_by_submission(self, submission_id: uuid.UUID) -> list[Review]:
        return list(
            self.db.scalars(
                select(Review).where(Review.submission_id == submission_id).order_by(Review.created_at.desc())
            )
        )

    def find_by_reviewer(self, reviewer_id: uuid.UUID) -> list[Review]:
        return list(
            self.db.scalars(
                select(Review).where(Review.reviewer_id == reviewer_id).order_by(Review.created_at.desc())
            )
        )

    def is_reviewer_assigned(self, submission_id: uuid.UUID, reviewer_id: uuid.UUID) -> bool:
        stmt = select(Review.id).where(Review.submission_id == submission_id, Review.reviewer_id == reviewer_id)
        return self.db.scalars(stmt).first() is not None

    def reviewer_assignments(self, reviewer_id: uuid.UUID) -> list[ReviewerAssignment]:
        author = aliased(User)
        stmt = (
            select(Review, Submission, author)
            .join(Submission, Submission.id == Review.submission_id)
            .join(author, author.id == Submission.user_id)
            .where(Review.reviewer_id == reviewer_id)
            .order_by(Review.created_at.desc())
        )
        return [
            ReviewerAssignment(**self._assignment_fields(review, submission, author_row))
            for review, submission, author_row in self.db.execute(stmt)
        ]

    def all_assignments(self) -> list[AssignmentOverview]:
        author = aliased(User)
        reviewer = aliased(User)
        stmt = (
            select(Review, Submission, author, reviewer)
            .join(Submission, Submission.id == Review.submission_id)
            .join(author, author.id == Submission.user_id)
            .join(reviewer, reviewer.id == Review.reviewer_id)
            .order_by(Review.created_at.desc())
        )
        return [
            AssignmentOverview(
                **self._assignment_fields(review, submission, author_row),
                reviewer_id=reviewer_row.id,
                reviewer_name=reviewer_row.full_name,
                reviewer_expertise=reviewer_row.expertise or [],
            )
            for review, submission, author_row, reviewer_row in self.db.execute(stmt)
        ]

    @staticmethod
    def _assignment_fields(review: Review, submission: Submission, author: User) -> dict:
        return {
            "review_id": review.id,
            "submission_id": submission.id,
            "submission_title": submission.title,
            "session_type": submission.session_type,
            "presentation_type": submission.presentation_type,
            "submission_status": submission.status,
            "author_name": author.full_name,
            "assigned_date": review.created_at,
            "is_completed": review.is_completed,
        }

    # --- scoring & statistics ---------------------------------------------

    def suggest_reviewers(self, submission_id: uuid.UUID, limit: int = 10) -> list[ReviewerSuggestion]:
        submission = self.db.get(Submission, submission_id)
        if submission is None:
            return []

        open_assignments = (
            select(func.count(Review.id))
            .where(Review.reviewer_id == User.id, Review.is_completed.is_(False))
            .correlate(User)
            .scalar_subquery()
        )
        already_assigned = (
            select(Review.id)
            .where(Review.reviewer_id == User.id, Review.submission_id == submission_id)
            .correlate(User)
            .exists()
        )
        rows = self.db.execute(
            select(User, open_assignments.label("open_assignments")).where(
                User.role == UserRole.REVIEWER,
                User.is_active.is_(True),
                ~already_assigned,
            )
        ).all()

        session_type = submission.session_type.value
        ranked = []
        for reviewer, open_count in rows:
            score = match_score(reviewer.expertise, submission.keywords, session_type)
            ranked.append((score, int(open_count or 0), reviewer))
        ranked.sort(key=lambda item: (-item[0], item[1], item[2].first_name.casefold()))

        return [
            ReviewerSuggestion(
                reviewer_id=reviewer.id,
                name=reviewer.full_name,
                expertise=reviewer.expertise or [],
                affiliation=reviewer.affiliation,
                match_score=score,
                current_assignments=open_count,
                match_reason=MATCH_REASONS[score],
            )
            for score, open_count, reviewer in ranked[:limit]
        ]

    def average_score(self, submission_id: uuid.UUID) -> float | None:
        return self.aggregate_submission_stats(submission_id).average_score

    def aggregate_submission_stats(self, submission_id: uuid.UUID) -> SubmissionReviewStats:
        total, completed, average = self.db.execute(
            select(
                func.count(Review.id),
                func.count(_completed),
                func.avg(case((Review.is_completed.is_(True), Review.score))),
            ).where(Review.submission_id == submission_id)
        ).one()
        return SubmissionReviewStats(
            total_reviews=total or 0,
            completed_reviews=completed or 0,
            average_score=float(average) if average is not None else None,
        )

    def aggregate_global_progress(self) -> ReviewProgress:
        total, completed, pending, submissions, reviewers = self.db.execute(
            select(
                func.count(Review.id),
                func.count(_completed),
                func.count(_pending),
                func.count(func.distinct(Review.submission_id)),
                func.count(func.distinct(Review.reviewer_id)),
            )
        ).one()

        if total:
            percentage = float(_round_half_up(Decimal(completed * 100) / Decimal(total), "0.01"))
        else:
            percentage = 0.0

        by_status = {status.value: 0 for status in SubmissionStatus}
        for status, count in self.db.execute(
            select(Submission.status, func.count(Submission.id)).group_by(Submission.status)
        ):
            by_status[SubmissionStatus(status).value] = count

        return ReviewProgress(
            total_assignments=total,
            completed_reviews=completed,
            pending_reviews=pending,
            completion_percentage=percentage,
            submissions_under_review=submissions,
            active_reviewers=reviewers,
            submissions_by_status=by_status,
            reviewer_workload=self.reviewer_workload(),
        )

    def reviewer_workload(self) -> list[ReviewerWorkload]:
        assigned = func.count(Review.id)
        stmt = (
            select(User.id, User.first_name, User.last_name, assigned, func.count(_completed), func.count(_pending))
            .select_from(Review)
            .join(User, User.id == Review.reviewer_id)
            .group_by(User.id, User.first_name, User.last_name)
            .order_by(assigned.desc(), User.first_name, User.last_name)
        )
        workload = []
        for reviewer_id, first_name, last_name, total, completed, pending in self.db.execute(stmt):
            rate = int(_round_half_up(Decimal(completed * 100) / Decimal(total), "1")) if total else 0
            workload.append(
                ReviewerWorkload(
                    reviewer_id=reviewer_id,
                    reviewer_name=f"{first_name} {last_name}",
                    total_assignments=total,
                    completed_reviews=completed,
                    pending_reviews=pending,
                    completion_rate=rate,
                )
            )
        return workload
