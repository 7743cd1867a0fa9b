from __future__ import annotations

from enum import Enum

from sqlalchemy import Enum as SAEnum


class ParticipantType(str, Enum):
    # presenters / speakers
    KEYNOTE_SPEAKER = "keynote_speaker"
    ORAL_PRESENTER = "oral_presenter"
    POSTER_PRESENTER = "poster_presenter"
    PANELIST = "panelist"
    WORKSHOP_LEADER = "workshop_leader"
    # attendees
    REGULAR_PARTICIPANT = "regular_participant"
    OBSERVER = "observer"
    INDUSTRY_REPRESENTATIVE = "industry_representative"
    # organizers
    CONFERENCE_CHAIR = "conference_chair"
    SCIENTIFIC_COMMITTEE = "scientific_committee"
    ORGANIZING_COMMITTEE = "organizing_committee"
    SESSION_CHAIR = "session_chair"
    # support
    REVIEWER = "reviewer"
    TECHNICAL_SUPPORT = "technical_support"
    VOLUNTEER = "volunteer"
    # guests
    SPONSOR = "sponsor"
    GOVERNMENT_REPRESENTATIVE = "government_representative"


class UserRole(str, Enum):
    PARTICIPANT = "participant"
    PRESENTER = "presenter"
    ORGANIZER = "organizer"
    REVIEWER = "reviewer"
    ADMIN = "admin"


class PaymentStatus(str, Enum):
    NOT_PAID = "not_paid"
    PAYMENT_SUBMITTED = "payment_submitted"
    PAYMENT_VERIFIED = "payment_verified"
    PAYMENT_REJECTED = "payment_rejected"


class SessionType(str, Enum):
    CHE = "CHE"
    CSE = "CSE"
    BIO = "BIO"
    MST = "MST"
    PFD = "PFD"


class PresentationType(str, Enum):
    ORAL = "oral"
    POSTER = "poster"


class SubmissionStatus(str, Enum):
    SUBMITTED = "submitted"
    UNDER_REVIEW = "under_review"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class ReviewRecommendation(str, Enum):
    ACCEPT = "accept"
    REJECT = "reject"
    MINOR_REVISION = "minor_revision"
    MAJOR_REVISION = "major_revision"


class PaymentMethod(str, Enum):
    BANK_TRANSFER = "bank_transfer"
    CREDIT_CARD = "credit_card"
    OTHER = "other"


class PaymentRecordStatus(str, Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


def enum_column(enum_cls: type[Enum]) -> SAEnum:
    """VARCHAR-backed enum storing ``.value`` so the schema stays portable."""
    return SAEnum(
        enum_cls,
        native_enum=False,
        length=32,
        values_callable=lambda cls: [member.value for member in cls],
        validate_strings=True,
    )
