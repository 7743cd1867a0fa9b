from __future__ import annotations

import uuid
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.db.session import transaction
from app.models.conference import Conference, RegistrationFee
from app.models.enums import ParticipantType, PaymentStatus, SessionType, UserRole
from app.models.timestamps import as_utc, utcnow
from app.models.user import User, UserSession
from app.repositories.base import apply_patch, patch_fields
from app.schemas.user import UserCreate, UserUpdate


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(self, data: UserCreate, password_hash: str, role: UserRole = UserRole.PARTICIPANT) -> User:
        user = User(
            email=data.email.lower(),
            password_hash=password_hash,
            first_name=data.first_name,
            last_name=data.last_name,
            affiliation=data.affiliation,
            country=data.country,
            participant_type=data.participant_type,
            role=role,
            bio=data.bio,
            expertise=list(data.expertise),
            registration_fee=self.registration_fee_for(data.participant_type),
        )
        user.selected_sessions = [UserSession(session_type=t) for t in dict.fromkeys(data.selected_sessions)]
        with transaction(self.db):
            self.db.add(user)
        return user

    def registration_fee_for(self, participant_type: ParticipantType) -> Decimal:
        """Fee tier for a registration happening now, from the active conference's schedule."""
        fee = self.db.scalars(
            select(RegistrationFee)
            .join(Conference, Conference.id == RegistrationFee.conference_id)
            .where(Conference.is_active.is_(True), RegistrationFee.participant_type == participant_type)
            .order_by(Conference.created_at.desc())
            .limit(1)
        ).first()
        if fee is None:
            return Decimal("0.00")

        now = utcnow()
        if now < as_utc(fee.early_bird_deadline):
            return fee.early_bird_fee
        if now >= as_utc(fee.late_registration_start):
            return fee.late_fee
        return fee.regular_fee

    def find_by_id(self, user_id: uuid.UUID) -> User | None:
        return self.db.scalars(select(User).where(User.id == user_id, User.is_active.is_(True))).first()

    def find_by_email(self, email: str) -> User | None:
        return self.db.scalars(
            select(User).where(User.email == email.lower(), User.is_active.is_(True))
        ).first()

    def get_user_sessions(self, user_id: uuid.UUID) -> list[SessionType]:
        rows = self.db.scalars(select(UserSession.session_type).where(UserSession.user_id == user_id))
        return list(rows)

    def update(self, user_id: uuid.UUID, data: UserUpdate) -> User | None:
        user = self.find_by_id(user_id)
        if user is None:
            return None

        fields = patch_fields(data, exclude={"selected_sessions"})
        sessions = data.selected_sessions if "selected_sessions" in data.model_fields_set else None
        if not fields and sessions is None:
            return user

        with transaction(self.db):
            if not apply_patch(user, fields):
                user.updated_at = utcnow()
            if sessions is not None:
                # replace the whole selection
                user.selected_sessions.clear()
                self.db.flush()
                user.selected_sessions.extend(UserSession(session_type=t) for t in dict.fromkeys(sessions))
        return user

    def _set(self, user_id: uuid.UUID, **values) -> User | None:
        user = self.find_by_id(user_id)
        if user is None:
            return None
        with transaction(self.db):
            apply_patch(user, values)
        return user

    def update_payment_status(self, user_id: uuid.UUID, status: PaymentStatus) -> User | None:
        return self._set(user_id, payment_status=status)

    def update_role(self, user_id: uuid.UUID, role: UserRole) -> User | None:
        return self._set(user_id, role=role)

    def update_password(self, user_id: uuid.UUID, password_hash: str) -> User | None:
        return self._set(user_id, password_hash=password_hash)

    def deactivate(self, user_id: uuid.UUID) -> bool:
        user = self.db.get(User, user_id)
        if user is None:
            return False
        with transaction(self.db):
            apply_patch(user, {"is_active": False})
        return True

    def find_by_role(self, role: UserRole) -> list[User]:
        return list(
            self.db.scalars(
                select(User).where(User.role == role, User.is_active.is_(True)).order_by(User.created_at.desc())
            )
        )

    def find_by_participant_type(self, participant_type: ParticipantType) -> list[User]:
        return list(
            self.db.scalars(
                select(User)
                .where(User.participant_type == participant_type, User.is_active.is_(True))
                .order_by(User.created_at.desc())
            )
        )
