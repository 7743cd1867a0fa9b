"""
Shared fixtures: a fresh in-memory SQLite schema per test, factories for the
rows most tests need, and a TestClient bound to the same session.
"""
import os
import uuid
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret-key"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ENVIRONMENT"] = "test"

import pytest
from faker import Faker
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.security import create_access_token, get_password_hash
from app.db.models import metadata
from app.db.session import get_db
from app.main import app
from app.models.conference import Conference, RegistrationFee
from app.models.enums import (
    ParticipantType,
    PresentationType,
    SessionType,
    SubmissionStatus,
    UserRole,
)
from app.models.submission import Author, Submission
from app.models.user import User

fake = Faker()

DEFAULT_PASSWORD = "password123"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    metadata.create_all(engine)
    yield engine
    metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)()
    yield session
    session.close()


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    def _make(
        role=UserRole.PARTICIPANT,
        expertise=None,
        participant_type=ParticipantType.REGULAR_PARTICIPANT,
        registration_fee=Decimal("0.00"),
        first_name=None,
        is_active=True,
    ):
        user = User(
            email=f"{uuid.uuid4().hex[:12]}@univ.edu",
            password_hash=get_password_hash(DEFAULT_PASSWORD),
            first_name=first_name or fake.first_name(),
            last_name=fake.last_name(),
            affiliation=fake.company(),
            country=fake.country(),
            participant_type=participant_type,
            role=role,
            expertise=list(expertise or []),
            registration_fee=registration_fee,
            is_active=is_active,
        )
        db.add(user)
        db.commit()
        return user

    return _make


@pytest.fixture
def make_submission(db, make_user):
    def _make(
        user=None,
        keywords=None,
        session_type=SessionType.CSE,
        status=SubmissionStatus.SUBMITTED,
    ):
        user = user or make_user(role=UserRole.PRESENTER)
        submission = Submission(
            user_id=user.id,
            title=fake.sentence(nb_words=6),
            abstract=fake.paragraph(),
            keywords=list(keywords or []),
            session_type=session_type,
            presentation_type=PresentationType.ORAL,
            status=status,
            corresponding_author=user.full_name,
        )
        submission.authors = [
            Author(
                name=user.full_name,
                affiliation=user.affiliation,
                email=user.email,
                is_corresponding=True,
                author_order=1,
            )
        ]
        db.add(submission)
        db.commit()
        return submission

    return _make


@pytest.fixture
def make_conference(db):
    def _make(fees=None, created_at=None, is_active=True):
        now = datetime.now(timezone.utc)
        conference = Conference(
            name=fake.catch_phrase(),
            start_date=date(2030, 9, 15),
            end_date=date(2030, 9, 17),
            venue=fake.address(),
            registration_deadline=now + timedelta(days=60),
            submission_deadline=now + timedelta(days=30),
            is_active=is_active,
        )
        if created_at is not None:
            conference.created_at = created_at
        for participant_type, fee in (fees or {}).items():
            conference.registration_fees.append(RegistrationFee(participant_type=participant_type, **fee))
        db.add(conference)
        db.commit()
        return conference

    return _make


@pytest.fixture
def auth_headers_for():
    def _headers(user):
        token = create_access_token(str(user.id), user.role.value)
        return {"Authorization": f"Bearer {token}"}

    return _headers
