from __future__ import annotations

import uuid

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.db.session import transaction
from app.models.enums import SessionType, SubmissionStatus
from app.models.submission import Author, Submission
from app.repositories.base import apply_patch
from app.schemas.submission import SubmissionCreate


class SubmissionRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(self, user_id: uuid.UUID, data: SubmissionCreate) -> Submission:
        submission = Submission(
            user_id=user_id,
            title=data.title,
            abstract=data.abstract,
            keywords=list(data.keywords),
            session_type=data.session_type,
            presentation_type=data.presentation_type,
            corresponding_author=data.corresponding_author,
        )
        submission.authors = [Author(**author.model_dump()) for author in data.authors]
        with transaction(self.db):
            self.db.add(submission)
        return submission

    def find_by_id(self, submission_id: uuid.UUID) -> Submission | None:
        return self.db.get(Submission, submission_id)

    def find_by_user_id(self, user_id: uuid.UUID) -> list[Submission]:
        return list(
            self.db.scalars(
                select(Submission).where(Submission.user_id == user_id).order_by(Submission.created_at.desc())
            )
        )

    def find_by_status(self, status: SubmissionStatus) -> list[Submission]:
        return list(
            self.db.scalars(
                select(Submission).where(Submission.status == status).order_by(Submission.submission_date)
            )
        )

    def find_by_session_type(self, session_type: SessionType) -> list[Submission]:
        return list(
            self.db.scalars(
                select(Submission)
                .where(Submission.session_type == session_type)
                .order_by(Submission.created_at.desc())
            )
        )

    def update_status(self, submission_id: uuid.UUID, status: SubmissionStatus) -> Submission | None:
        return self._set(submission_id, status=status)

    def update_manuscript_path(self, submission_id: uuid.UUID, manuscript_path: str) -> Submission | None:
        return self._set(submission_id, manuscript_path=manuscript_path)

    def count_by_status(self) -> dict[str, int]:
        counts = {status.value: 0 for status in SubmissionStatus}
        rows = self.db.execute(select(Submission.status, func.count()).group_by(Submission.status))
        for status, count in rows:
            counts[SubmissionStatus(status).value] = count
        return counts

    def _set(self, submission_id: uuid.UUID, **values) -> Submission | None:
        submission = self.find_by_id(submission_id)
        if submission is None:
            return None
        with transaction(self.db):
            apply_patch(submission, values)
        return submission
