from decimal import Decimal

import pytest

from app.models.enums import PaymentStatus, UserRole
from app.services import storage


def register_payload(**overrides):
    payload = {
        "email": "katherine@univ.edu",
        "password": "orbital-mechanics",
        "firstName": "Katherine",
        "lastName": "Johnson",
        "affiliation": "West Virginia State College",
        "country": "USA",
        "participantType": "oral_presenter",
        "selectedSessions": ["MST", "PFD"],
        "expertise": ["orbital mechanics"],
    }
    payload.update(overrides)
    return payload


def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"
    assert client.get("/api/health").status_code == 200


def test_register_and_login_envelope(client):
    response = client.post("/api/auth/register", json=register_payload())

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["timestamp"]
    user = body["data"]["user"]
    assert user["email"] == "katherine@univ.edu"
    assert user["firstName"] == "Katherine"
    assert sorted(user["selectedSessions"]) == ["MST", "PFD"]
    assert user["paymentStatus"] == "not_paid"
    assert "passwordHash" not in user

    login = client.post("/api/auth/login", json={"email": "katherine@univ.edu", "password": "orbital-mechanics"})
    assert login.status_code == 200
    token = login.json()["data"]["token"]

    me = client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})
    assert me.json()["data"]["id"] == user["id"]


def test_register_duplicate_email(client):
    client.post("/api/auth/register", json=register_payload())

    response = client.post("/api/auth/register", json=register_payload())

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "EMAIL_TAKEN"


def test_login_with_wrong_password(client):
    client.post("/api/auth/register", json=register_payload())

    response = client.post("/api/auth/login", json={"email": "katherine@univ.edu", "password": "wrong-password"})

    assert response.status_code == 401
    assert response.json()["success"] is False
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


def test_validation_errors_list_every_field(client):
    response = client.post("/api/auth/register", json={"email": "not-an-email"})

    assert response.status_code == 422
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    fields = {detail["field"] for detail in error["details"]}
    assert {"email", "password", "firstName", "participantType"} <= fields


def test_missing_token_is_unauthorized(client):
    response = client.get("/api/users/me")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


def test_request_id_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "abc12345"})

    assert response.headers["X-Request-ID"] == "abc12345"


def test_update_me_with_partial_payload(client, make_user, auth_headers_for):
    user = make_user()

    response = client.put("/api/users/me", json={"affiliation": "CERN"}, headers=auth_headers_for(user))

    assert response.status_code == 200
    assert response.json()["data"]["affiliation"] == "CERN"
    assert response.json()["data"]["firstName"] == user.first_name


def test_admin_routes_reject_other_roles(client, make_user, auth_headers_for):
    participant = make_user()

    for method, path in [
        ("get", "/api/reviews/progress/overview"),
        ("get", "/api/payments/admin/pending"),
        ("put", f"/api/users/{participant.id}/role"),
    ]:
        response = client.request(method, path, headers=auth_headers_for(participant), json={"role": "admin"})
        assert response.status_code == 403, path
        assert response.json()["error"]["code"] == "FORBIDDEN"


def test_assignment_flow_over_http(client, make_user, make_submission, auth_headers_for):
    organizer = make_user(role=UserRole.ORGANIZER)
    reviewer = make_user(role=UserRole.REVIEWER, expertise=["graphs"])
    submission = make_submission(keywords=["graphs"])
    headers = auth_headers_for(organizer)

    suggestions = client.get(f"/api/reviews/suggestions/{submission.id}", headers=headers).json()["data"]
    assert suggestions[0]["reviewerId"] == str(reviewer.id)
    assert suggestions[0]["matchScore"] == 3

    payload = {"submissionId": str(submission.id), "reviewerId": str(reviewer.id)}
    first = client.post("/api/reviews/assign", json=payload, headers=headers)
    assert first.status_code == 201
    review_id = first.json()["data"]["id"]

    second = client.post("/api/reviews/assign", json=payload, headers=headers)
    assert second.status_code == 409
    assert second.json()["error"]["code"] == "REVIEWER_ALREADY_ASSIGNED"
    assert second.json()["error"]["details"] == {"submissionId": str(submission.id), "reviewerId": str(reviewer.id)}

    completed = client.put(
        f"/api/reviews/{review_id}",
        json={"score": 8, "comments": "Convincing results", "recommendation": "accept"},
        headers=auth_headers_for(reviewer),
    )
    assert completed.status_code == 200
    assert completed.json()["data"]["isCompleted"] is True

    stats = client.get(f"/api/reviews/submission/{submission.id}/reviews", headers=headers).json()["data"]["stats"]
    assert stats == {"totalReviews": 1, "completedReviews": 1, "averageScore": 8.0}

    progress = client.get("/api/reviews/progress/overview", headers=headers).json()["data"]
    assert progress["completionPercentage"] == 100.0
    assert progress["submissionsByStatus"]["under_review"] == 1

    removal = client.delete(f"/api/reviews/assignments/{review_id}", headers=headers)
    assert removal.status_code == 409
    assert removal.json()["error"]["code"] == "REVIEW_COMPLETED"


def test_reviewer_sees_only_own_assignments(client, make_user, auth_headers_for):
    reviewer = make_user(role=UserRole.REVIEWER)
    other = make_user(role=UserRole.REVIEWER)

    own = client.get(f"/api/reviews/reviewer/{reviewer.id}/assignments", headers=auth_headers_for(reviewer))
    foreign = client.get(f"/api/reviews/reviewer/{other.id}/assignments", headers=auth_headers_for(reviewer))

    assert own.status_code == 200
    assert own.json()["data"] == []
    assert foreign.status_code == 403


def test_unknown_review_is_not_found(client, make_user, auth_headers_for):
    organizer = make_user(role=UserRole.ORGANIZER)

    response = client.get("/api/reviews/7f0c1c1e-0000-4000-8000-000000000000", headers=auth_headers_for(organizer))

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "REVIEW_NOT_FOUND"


@pytest.fixture
def fake_upload(monkeypatch):
    monkeypatch.setattr(
        storage,
        "upload_stream",
        lambda fileobj, original_name, content_type, prefix="uploads": f"{prefix}/test-{original_name}",
    )


def test_payment_flow_over_http(db, client, make_user, auth_headers_for, fake_upload):
    payer = make_user(registration_fee=Decimal("150.00"))
    admin = make_user(role=UserRole.ADMIN)

    submitted = client.post(
        "/api/payments/submit-proof",
        data={"amount": "150.00", "paymentMethod": "bank_transfer", "transactionReference": "TX-42"},
        files={"proofOfPayment": ("receipt.pdf", b"%PDF-1.4", "application/pdf")},
        headers=auth_headers_for(payer),
    )
    assert submitted.status_code == 201
    record = submitted.json()["data"]
    assert record["status"] == "pending"
    assert record["proofOfPaymentPath"] == "payment-proofs/test-receipt.pdf"

    status = client.get("/api/payments/status", headers=auth_headers_for(payer)).json()["data"]
    assert status["paymentStatus"] == "payment_submitted"
    assert status["canSubmitPayment"] is False

    pending = client.get("/api/payments/admin/pending", headers=auth_headers_for(admin)).json()["data"]
    assert [p["id"] for p in pending] == [record["id"]]
    assert pending[0]["userInfo"]["email"] == payer.email

    refused = client.put(
        f"/api/payments/admin/{record['id']}/reject",
        json={"adminNotes": "  "},
        headers=auth_headers_for(admin),
    )
    assert refused.status_code == 400

    verified = client.put(f"/api/payments/admin/{record['id']}/verify", json={}, headers=auth_headers_for(admin))
    assert verified.status_code == 200
    assert verified.json()["data"]["status"] == "verified"

    again = client.put(f"/api/payments/admin/{record['id']}/verify", json={}, headers=auth_headers_for(admin))
    assert again.status_code == 409

    db.refresh(payer)
    assert payer.payment_status == PaymentStatus.PAYMENT_VERIFIED

    stats = client.get("/api/payments/admin/statistics", headers=auth_headers_for(admin)).json()["data"]
    assert stats["verifiedPayments"] == 1
    assert Decimal(stats["totalAmount"]) == Decimal("150.00")


def test_submit_proof_with_wrong_amount(client, make_user, auth_headers_for, fake_upload):
    payer = make_user(registration_fee=Decimal("150.00"))

    response = client.post(
        "/api/payments/submit-proof",
        data={"amount": "100.00"},
        files={"proofOfPayment": ("receipt.png", b"\x89PNG", "image/png")},
        headers=auth_headers_for(payer),
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_AMOUNT"


@pytest.mark.parametrize("notes", ["", "   "])
def test_reject_over_http_needs_notes(client, make_user, auth_headers_for, fake_upload, notes):
    payer = make_user(registration_fee=Decimal("150.00"))
    admin = make_user(role=UserRole.ADMIN)
    record = client.post(
        "/api/payments/submit-proof",
        data={"amount": "150.00"},
        files={"proofOfPayment": ("receipt.pdf", b"%PDF-1.4", "application/pdf")},
        headers=auth_headers_for(payer),
    ).json()["data"]

    response = client.put(
        f"/api/payments/admin/{record['id']}/reject",
        json={"adminNotes": notes},
        headers=auth_headers_for(admin),
    )

    assert response.status_code == 400
    assert response.json()["error"]["details"] == {"field": "adminNotes"}
    status = client.get("/api/payments/status", headers=auth_headers_for(payer)).json()["data"]
    assert status["latestPayment"]["status"] == "pending"
    assert status["paymentStatus"] == "payment_submitted"


def test_active_conference_missing(client):
    response = client.get("/api/conference/active")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "CONFERENCE_NOT_FOUND"


def test_admin_creates_conference(client, make_user, auth_headers_for):
    admin = make_user(role=UserRole.ADMIN)

    created = client.post(
        "/api/conference",
        json={
            "name": "Computational Science Week",
            "startDate": "2030-09-15",
            "endDate": "2030-09-17",
            "venue": "Main Hall",
            "registrationDeadline": "2030-08-15T23:59:59Z",
            "submissionDeadline": "2030-07-31T23:59:59Z",
        },
        headers=auth_headers_for(admin),
    )
    assert created.status_code == 201

    active = client.get("/api/conference/active").json()["data"]
    assert active["name"] == "Computational Science Week"
    assert active["isActive"] is True
