from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import Field

from app.models.enums import ParticipantType, SessionType
from app.schemas.common import CamelModel


class ConferenceCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    start_date: date
    end_date: date
    venue: str
    registration_deadline: datetime
    submission_deadline: datetime


class ConferenceUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    venue: str | None = None
    registration_deadline: datetime | None = None
    submission_deadline: datetime | None = None
    is_active: bool | None = None


class SessionCreate(CamelModel):
    type: SessionType
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None


class ScheduleCreate(CamelModel):
    start_time: datetime
    end_time: datetime
    location: str | None = None
    description: str | None = None


class RegistrationFeeUpsert(CamelModel):
    early_bird_fee: Decimal = Field(ge=0)
    regular_fee: Decimal = Field(ge=0)
    late_fee: Decimal = Field(ge=0)
    currency: str = Field(default="USD", min_length=3, max_length=3)
    early_bird_deadline: datetime
    late_registration_start: datetime


class PaymentInstructionsUpsert(CamelModel):
    bank_name: str
    account_name: str
    account_number: str
    swift_code: str | None = None
    routing_number: str | None = None
    accepted_methods: list[str] = Field(default_factory=list)
    instructions: str
    support_contact: str | None = None


class SessionScheduleRead(CamelModel):
    id: uuid.UUID
    start_time: datetime
    end_time: datetime
    location: str | None = None
    description: str | None = None


class SessionRead(CamelModel):
    id: uuid.UUID
    type: SessionType
    name: str
    description: str | None = None
    schedules: list[SessionScheduleRead] = Field(default_factory=list)


class RegistrationFeeRead(CamelModel):
    id: uuid.UUID
    participant_type: ParticipantType
    early_bird_fee: Decimal
    regular_fee: Decimal
    late_fee: Decimal
    currency: str
    early_bird_deadline: datetime
    late_registration_start: datetime


class PaymentInstructionsRead(CamelModel):
    id: uuid.UUID
    bank_name: str
    account_name: str
    account_number: str
    swift_code: str | None = None
    routing_number: str | None = None
    accepted_methods: list[str] = Field(default_factory=list)
    instructions: str
    support_contact: str | None = None


class ConferenceRead(CamelModel):
    id: uuid.UUID
    name: str
    description: str | None = None
    start_date: date
    end_date: date
    venue: str
    registration_deadline: datetime
    submission_deadline: datetime
    is_active: bool
    sessions: list[SessionRead] = Field(default_factory=list)
    registration_fees: list[RegistrationFeeRead] = Field(default_factory=list)
    payment_instructions: PaymentInstructionsRead | None = None
    created_at: datetime
    updated_at: datetime | None = None
