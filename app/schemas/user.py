from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import AliasChoices, EmailStr, Field

from app.models.enums import ParticipantType, PaymentStatus, SessionType, UserRole
from app.schemas.common import CamelModel


class UserCreate(CamelModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    affiliation: str = Field(min_length=1, max_length=255)
    country: str = Field(min_length=1, max_length=100)
    participant_type: ParticipantType
    selected_sessions: list[SessionType] = Field(default_factory=list)
    bio: str | None = None
    expertise: list[str] = Field(default_factory=list)


class UserUpdate(CamelModel):
    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    affiliation: str | None = Field(default=None, min_length=1, max_length=255)
    country: str | None = Field(default=None, min_length=1, max_length=100)
    bio: str | None = None
    expertise: list[str] | None = None
    selected_sessions: list[SessionType] | None = None


class LoginRequest(CamelModel):
    email: EmailStr
    password: str


class RoleUpdate(CamelModel):
    role: UserRole


class UserRead(CamelModel):
    id: uuid.UUID
    email: str
    first_name: str
    last_name: str
    affiliation: str
    country: str
    participant_type: ParticipantType
    role: UserRole
    registration_date: datetime
    is_active: bool
    bio: str | None = None
    expertise: list[str] = Field(default_factory=list)
    payment_status: PaymentStatus
    registration_fee: Decimal
    selected_sessions: list[SessionType] = Field(
        default_factory=list,
        validation_alias=AliasChoices("session_types", "selectedSessions", "selected_sessions"),
    )
    created_at: datetime
    updated_at: datetime | None = None


class LoginResponse(CamelModel):
    user: UserRead
    token: str
    token_type: str = "bearer"
