import uuid
from datetime import date, datetime
from typing import Optional
from decimal import Decimal

from sqlalchemy import JSON, Boolean, Date, DateTime, ForeignKey, Numeric, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.models.enums import ParticipantType, SessionType, enum_column
from app.models.timestamps import utcnow


class Conference(Base):
    __tablename__ = "conferences"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    venue: Mapped[str] = mapped_column(Text, nullable=False)

    registration_deadline: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    submission_deadline: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    # Nothing stops two rows from being active; readers take the newest one.
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    sessions: Mapped[list["Session"]] = relationship(
        back_populates="conference",
        cascade="all, delete-orphan",
        order_by="Session.type",
        lazy="selectin",
    )
    registration_fees: Mapped[list["RegistrationFee"]] = relationship(
        cascade="all, delete-orphan",
        order_by="RegistrationFee.participant_type",
        lazy="selectin",
    )
    payment_instructions: Mapped[Optional["PaymentInstructions"]] = relationship(
        cascade="all, delete-orphan",
        uselist=False,
        lazy="selectin",
    )


class Session(Base):
    """A conference track (CHE, CSE, ...) with its time slots."""

    __tablename__ = "sessions"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    conference_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("conferences.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    type: Mapped[SessionType] = mapped_column(enum_column(SessionType), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    conference: Mapped[Conference] = relationship(back_populates="sessions")
    schedules: Mapped[list["SessionSchedule"]] = relationship(
        cascade="all, delete-orphan",
        order_by="SessionSchedule.start_time",
        lazy="selectin",
    )


class SessionSchedule(Base):
    __tablename__ = "session_schedules"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    session_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)


class RegistrationFee(Base):
    __tablename__ = "registration_fees"
    __table_args__ = (
        UniqueConstraint("conference_id", "participant_type", name="uq_registration_fees_conference_participant"),
    )

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    conference_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("conferences.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    participant_type: Mapped[ParticipantType] = mapped_column(enum_column(ParticipantType), nullable=False)

    early_bird_fee: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    regular_fee: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    late_fee: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="USD")

    early_bird_deadline: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    late_registration_start: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)


class PaymentInstructions(Base):
    __tablename__ = "payment_instructions"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    conference_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("conferences.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    bank_name: Mapped[str] = mapped_column(String(255), nullable=False)
    account_name: Mapped[str] = mapped_column(String(255), nullable=False)
    account_number: Mapped[str] = mapped_column(String(100), nullable=False)
    swift_code: Mapped[str | None] = mapped_column(String(20), nullable=True)
    routing_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    accepted_methods: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    instructions: Mapped[str] = mapped_column(Text, nullable=False)
    support_contact: Mapped[str | None] = mapped_column(String(255), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
