import uuid

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import DuplicateAssignmentError
from app.models.enums import ReviewRecommendation, UserRole
from app.models.review import Review
from app.repositories.review import ReviewRepository, _is_duplicate_assignment
from app.schemas.review import ReviewCreate, ReviewUpdate


@pytest.fixture
def reviews(db):
    return ReviewRepository(db)


@pytest.fixture
def reviewer(make_user):
    return make_user(role=UserRole.REVIEWER, expertise=["algorithms"])


def test_assign_creates_pending_review(reviews, make_submission, reviewer):
    submission = make_submission()

    review = reviews.assign(submission.id, reviewer.id)

    assert review.is_completed is False
    assert review.score is None
    assert reviews.is_reviewer_assigned(submission.id, reviewer.id)


def test_second_assignment_of_same_pair_is_rejected(db, reviews, make_submission, reviewer):
    submission = make_submission()
    reviews.assign(submission.id, reviewer.id)

    with pytest.raises(DuplicateAssignmentError) as excinfo:
        reviews.assign(submission.id, reviewer.id)

    assert excinfo.value.code == "REVIEWER_ALREADY_ASSIGNED"
    assert excinfo.value.details == {"submissionId": str(submission.id), "reviewerId": str(reviewer.id)}
    count = db.scalar(
        select(func.count(Review.id)).where(
            Review.submission_id == submission.id, Review.reviewer_id == reviewer.id
        )
    )
    assert count == 1


def test_direct_review_after_assignment_is_duplicate(reviews, make_submission, reviewer):
    submission = make_submission()
    reviews.assign(submission.id, reviewer.id)

    with pytest.raises(DuplicateAssignmentError):
        reviews.create_review(
            reviewer.id,
            ReviewCreate(
                submission_id=submission.id,
                score=6,
                comments="Solid work",
                recommendation=ReviewRecommendation.ACCEPT,
            ),
        )


def test_is_reviewer_assigned_false_for_other_pairs(reviews, make_submission, reviewer, make_user):
    submission = make_submission()
    other = make_user(role=UserRole.REVIEWER)
    reviews.assign(submission.id, reviewer.id)

    assert not reviews.is_reviewer_assigned(submission.id, other.id)
    assert not reviews.is_reviewer_assigned(make_submission().id, reviewer.id)


def test_complete_writes_only_supplied_fields(reviews, make_submission, reviewer):
    review = reviews.assign(make_submission().id, reviewer.id)

    completed = reviews.complete_review(review.id, ReviewUpdate(score=9))

    assert completed.score == 9
    assert completed.comments is None
    assert completed.recommendation is None
    assert completed.is_completed is True


def test_complete_with_empty_patch_is_a_no_op(reviews, make_submission, reviewer):
    review = reviews.assign(make_submission().id, reviewer.id)
    before = review.updated_at

    result = reviews.complete_review(review.id, ReviewUpdate())

    assert result.id == review.id
    assert result.is_completed is False
    assert result.updated_at == before


def test_completing_twice_stays_completed(reviews, make_submission, reviewer):
    review = reviews.assign(make_submission().id, reviewer.id)
    reviews.complete_review(review.id, ReviewUpdate(score=4, comments="Needs work"))

    again = reviews.complete_review(review.id, ReviewUpdate(recommendation=ReviewRecommendation.MAJOR_REVISION))

    assert again.is_completed is True
    assert again.score == 4
    assert again.recommendation == ReviewRecommendation.MAJOR_REVISION


def test_complete_missing_review_returns_none(reviews):
    assert reviews.complete_review(uuid.uuid4(), ReviewUpdate(score=5)) is None


def test_submission_stats_average_completed_only(reviews, make_submission, make_user):
    submission = make_submission()
    first = make_user(role=UserRole.REVIEWER)
    second = make_user(role=UserRole.REVIEWER)
    done = reviews.assign(submission.id, first.id)
    reviews.assign(submission.id, second.id)
    reviews.complete_review(done.id, ReviewUpdate(score=8))

    stats = reviews.aggregate_submission_stats(submission.id)

    assert stats.total_reviews == 2
    assert stats.completed_reviews == 1
    assert stats.average_score == 8


def test_submission_stats_without_completed_reviews(reviews, make_submission, reviewer):
    submission = make_submission()
    reviews.assign(submission.id, reviewer.id)

    stats = reviews.aggregate_submission_stats(submission.id)

    assert stats.total_reviews == 1
    assert stats.completed_reviews == 0
    assert stats.average_score is None
    assert reviews.average_score(submission.id) is None


def test_reviewer_assignments_join_submission_and_author(reviews, make_submission, make_user, reviewer):
    author = make_user(role=UserRole.PRESENTER, first_name="Ada")
    submission = make_submission(user=author)
    reviews.assign(submission.id, reviewer.id)

    [assignment] = reviews.reviewer_assignments(reviewer.id)

    assert assignment.submission_id == submission.id
    assert assignment.submission_title == submission.title
    assert assignment.author_name == author.full_name
    assert assignment.is_completed is False

    [overview] = reviews.all_assignments()
    assert overview.reviewer_name == reviewer.full_name
    assert overview.reviewer_expertise == ["algorithms"]


def test_delete_removes_review(reviews, make_submission, reviewer):
    submission = make_submission()
    review = reviews.assign(submission.id, reviewer.id)

    assert reviews.delete(review.id) is True
    assert reviews.find_by_id(review.id) is None
    assert not reviews.is_reviewer_assigned(submission.id, reviewer.id)
    assert reviews.delete(review.id) is False


def test_lookups_by_submission_and_reviewer(reviews, make_submission, make_user, reviewer):
    submission = make_submission()
    other = make_user(role=UserRole.REVIEWER)
    mine = reviews.assign(submission.id, reviewer.id)
    reviews.assign(submission.id, other.id)

    assert {r.reviewer_id for r in reviews.find_by_submission(submission.id)} == {reviewer.id, other.id}
    assert [r.id for r in reviews.find_by_reviewer(reviewer.id)] == [mine.id]


class _Diag:
    def __init__(self, constraint_name):
        self.constraint_name = constraint_name


class _DriverError(Exception):
    def __init__(self, message, constraint_name=None):
        super().__init__(message)
        self.diag = _Diag(constraint_name)


@pytest.mark.parametrize(
    ("orig", "expected"),
    [
        (_DriverError("duplicate key value", "uq_reviews_submission_reviewer"), True),
        (_DriverError("uq_reviews_submission_reviewer mentioned", "fk_reviews_reviewer_id_users"), False),
        (Exception("UNIQUE constraint failed: reviews.submission_id, reviews.reviewer_id"), True),
        (Exception("NOT NULL constraint failed: reviews.reviewer_id"), False),
    ],
)
def test_duplicate_detection_prefers_constraint_name(orig, expected):
    error = IntegrityError("INSERT INTO reviews ...", {}, orig)

    assert _is_duplicate_assignment(error) is expected
