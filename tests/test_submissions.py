from app.models.enums import PresentationType, SessionType, SubmissionStatus, UserRole
from app.repositories.submission import SubmissionRepository
from app.schemas.submission import SubmissionCreate


def submission_payload(**overrides):
    payload = {
        "title": "Sparse solvers on heterogeneous clusters",
        "abstract": "We benchmark **three** solver families.",
        "keywords": ["hpc", "linear algebra"],
        "sessionType": "CSE",
        "presentationType": "oral",
        "correspondingAuthor": "Lin Chen",
        "authors": [
            {"name": "Lin Chen", "affiliation": "NUS", "email": "lin@nus.edu", "isCorresponding": True, "authorOrder": 1},
            {"name": "Ravi Iyer", "affiliation": "IISc", "email": "ravi@iisc.edu", "authorOrder": 2},
        ],
    }
    payload.update(overrides)
    return payload


def test_create_with_authors_in_order(db, make_user):
    author = make_user(role=UserRole.PRESENTER)

    submission = SubmissionRepository(db).create(author.id, SubmissionCreate.model_validate(submission_payload()))

    assert submission.status == SubmissionStatus.SUBMITTED
    assert submission.presentation_type == PresentationType.ORAL
    assert [a.name for a in submission.authors] == ["Lin Chen", "Ravi Iyer"]
    assert submission.authors[0].is_corresponding is True


def test_lookups_by_user_status_and_session(db, make_user, make_submission):
    repo = SubmissionRepository(db)
    author = make_user(role=UserRole.PRESENTER)
    mine = make_submission(user=author, session_type=SessionType.BIO)
    make_submission(session_type=SessionType.CSE, status=SubmissionStatus.ACCEPTED)

    assert [s.id for s in repo.find_by_user_id(author.id)] == [mine.id]
    assert [s.id for s in repo.find_by_session_type(SessionType.BIO)] == [mine.id]
    assert [s.id for s in repo.find_by_status(SubmissionStatus.SUBMITTED)] == [mine.id]


def test_status_and_manuscript_updates(db, make_submission):
    repo = SubmissionRepository(db)
    submission = make_submission()

    repo.update_status(submission.id, SubmissionStatus.REJECTED)
    repo.update_manuscript_path(submission.id, "manuscripts/final.pdf")

    refreshed = repo.find_by_id(submission.id)
    assert refreshed.status == SubmissionStatus.REJECTED
    assert refreshed.manuscript_path == "manuscripts/final.pdf"


def test_count_by_status_is_zero_filled(db, make_submission):
    make_submission()
    make_submission(status=SubmissionStatus.ACCEPTED)
    make_submission(status=SubmissionStatus.ACCEPTED)

    assert SubmissionRepository(db).count_by_status() == {
        "submitted": 1,
        "under_review": 0,
        "accepted": 2,
        "rejected": 0,
    }


def test_create_submission_over_http(client, make_user, auth_headers_for):
    author = make_user(role=UserRole.PRESENTER)

    response = client.post("/api/submissions", json=submission_payload(), headers=auth_headers_for(author))

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["userId"] == str(author.id)
    assert len(data["authors"]) == 2
    assert data["abstractHtml"] == "<p>We benchmark <strong>three</strong> solver families.</p>"

    mine = client.get("/api/submissions/mine", headers=auth_headers_for(author)).json()["data"]
    assert [s["id"] for s in mine] == [data["id"]]


def test_submission_needs_exactly_one_corresponding_author(client, make_user, auth_headers_for):
    payload = submission_payload()
    payload["authors"][1]["isCorresponding"] = True

    response = client.post("/api/submissions", json=payload, headers=auth_headers_for(make_user()))

    assert response.status_code == 422


def test_submission_visible_to_owner_and_staff_only(client, make_user, make_submission, auth_headers_for):
    submission = make_submission()
    path = f"/api/submissions/{submission.id}"

    assert client.get(path, headers=auth_headers_for(make_user(role=UserRole.REVIEWER))).status_code == 200
    assert client.get(path, headers=auth_headers_for(make_user())).status_code == 403


def test_abstract_html_is_rendered_and_sanitised(db, make_user):
    author = make_user(role=UserRole.PRESENTER)
    payload = submission_payload(abstract="We benchmark **three** solvers.\n\n<script>alert('x')</script>")

    submission = SubmissionRepository(db).create(author.id, SubmissionCreate.model_validate(payload))

    db.refresh(submission)
    assert "<strong>three</strong>" in submission.abstract_html
    assert "<script" not in submission.abstract_html
    assert submission.abstract.endswith("<script>alert('x')</script>")
