import uuid

from app.models.enums import SessionType, UserRole
from app.repositories.review import ReviewRepository, match_score
from app.schemas.review import ReviewUpdate


def test_match_score_levels():
    assert match_score(["quantum computing"], ["quantum computing", "algorithms"], "CSE") == 3
    assert match_score(["CSE"], ["quantum computing"], "CSE") == 2
    assert match_score(["biology"], ["quantum computing"], "CSE") == 1
    assert match_score([], [], "CSE") == 1


def test_keyword_overlap_ranks_first(db, make_user, make_submission):
    make_user(role=UserRole.REVIEWER, expertise=["biology"], first_name="Cleo")
    make_user(role=UserRole.REVIEWER, expertise=["CSE"], first_name="Bram")
    expert = make_user(role=UserRole.REVIEWER, expertise=["quantum computing"], first_name="Zoe")
    submission = make_submission(keywords=["quantum computing", "algorithms"], session_type=SessionType.CSE)

    suggestions = ReviewRepository(db).suggest_reviewers(submission.id)

    assert [s.match_score for s in suggestions] == [3, 2, 1]
    top = suggestions[0]
    assert top.reviewer_id == expert.id
    assert top.match_reason == "Expertise matches submission keywords"
    assert top.current_assignments == 0
    assert suggestions[1].match_reason == "Expertise matches session type"
    assert suggestions[2].match_reason == "Available reviewer"


def test_only_active_unassigned_reviewers_are_candidates(db, make_user, make_submission):
    submission = make_submission(keywords=["graphs"])
    assigned = make_user(role=UserRole.REVIEWER, expertise=["graphs"])
    make_user(role=UserRole.REVIEWER, expertise=["graphs"], is_active=False)
    make_user(role=UserRole.PARTICIPANT, expertise=["graphs"])
    candidate = make_user(role=UserRole.REVIEWER)
    repo = ReviewRepository(db)
    repo.assign(submission.id, assigned.id)

    suggestions = repo.suggest_reviewers(submission.id)

    assert [s.reviewer_id for s in suggestions] == [candidate.id]


def test_ties_broken_by_open_workload_then_first_name(db, make_user, make_submission):
    repo = ReviewRepository(db)
    busy = make_user(role=UserRole.REVIEWER, first_name="Aaron")
    idle_b = make_user(role=UserRole.REVIEWER, first_name="Beth")
    idle_c = make_user(role=UserRole.REVIEWER, first_name="Carl")
    repo.assign(make_submission().id, busy.id)
    finished = repo.assign(make_submission().id, idle_c.id)
    repo.complete_review(finished.id, ReviewUpdate(score=7))

    suggestions = repo.suggest_reviewers(make_submission().id)

    assert [s.reviewer_id for s in suggestions] == [idle_b.id, idle_c.id, busy.id]
    assert [s.current_assignments for s in suggestions] == [0, 0, 1]


def test_first_name_tie_break_ignores_case(db, make_user, make_submission):
    zed = make_user(role=UserRole.REVIEWER, first_name="Zed")
    bob = make_user(role=UserRole.REVIEWER, first_name="bob")
    amy = make_user(role=UserRole.REVIEWER, first_name="Amy")

    suggestions = ReviewRepository(db).suggest_reviewers(make_submission().id)

    assert [s.reviewer_id for s in suggestions] == [amy.id, bob.id, zed.id]


def test_suggestions_are_capped(db, make_user, make_submission):
    for _ in range(12):
        make_user(role=UserRole.REVIEWER)

    suggestions = ReviewRepository(db).suggest_reviewers(make_submission().id, limit=10)

    assert len(suggestions) == 10


def test_unknown_submission_has_no_suggestions(db, make_user):
    make_user(role=UserRole.REVIEWER)
    assert ReviewRepository(db).suggest_reviewers(uuid.uuid4()) == []
