"""Imports every mapped class so that ``Base.metadata`` describes the whole schema."""
from app.db.base import Base
from app.models.conference import (
    Conference,
    PaymentInstructions,
    RegistrationFee,
    Session,
    SessionSchedule,
)
from app.models.payment_record import PaymentRecord
from app.models.review import Review
from app.models.submission import Author, Submission
from app.models.user import User, UserSession

metadata = Base.metadata

__all__ = [
    "Author",
    "Base",
    "Conference",
    "PaymentInstructions",
    "PaymentRecord",
    "RegistrationFee",
    "Review",
    "Session",
    "SessionSchedule",
    "Submission",
    "User",
    "UserSession",
    "metadata",
]
