from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session as DBSession

from app.db.session import transaction
from app.models.conference import Conference, RegistrationFee, Session, SessionSchedule
from app.models.enums import ParticipantType
from app.repositories.base import apply_patch, patch_fields
from app.schemas.conference import (
    ConferenceCreate,
    ConferenceUpdate,
    RegistrationFeeUpsert,
    ScheduleCreate,
    SessionCreate,
)


class ConferenceRepository:
    def __init__(self, db: DBSession):
        self.db = db

    def create(self, data: ConferenceCreate) -> Conference:
        conference = Conference(**data.model_dump())
        with transaction(self.db):
            self.db.add(conference)
        return conference

    def find_by_id(self, conference_id: uuid.UUID) -> Conference | None:
        return self.db.get(Conference, conference_id)

    def find_active(self) -> Conference | None:
        # more than one active row is possible; the newest wins
        return self.db.scalars(
            select(Conference)
            .where(Conference.is_active.is_(True))
            .order_by(Conference.created_at.desc())
            .limit(1)
        ).first()

    def update(self, conference_id: uuid.UUID, data: ConferenceUpdate) -> Conference | None:
        conference = self.find_by_id(conference_id)
        if conference is None:
            return None
        fields = patch_fields(data)
        if not fields:
            return conference
        with transaction(self.db):
            apply_patch(conference, fields)
        return conference

    def add_session(self, conference_id: uuid.UUID, data: SessionCreate) -> Session | None:
        conference = self.find_by_id(conference_id)
        if conference is None:
            return None
        session = Session(conference_id=conference.id, **data.model_dump())
        with transaction(self.db):
            self.db.add(session)
        self.db.refresh(conference, attribute_names=["sessions"])
        return session

    def find_session(self, session_id: uuid.UUID) -> Session | None:
        return self.db.get(Session, session_id)

    def add_schedule(self, session_id: uuid.UUID, data: ScheduleCreate) -> SessionSchedule | None:
        session = self.find_session(session_id)
        if session is None:
            return None
        schedule = SessionSchedule(session_id=session.id, **data.model_dump())
        with transaction(self.db):
            self.db.add(schedule)
        self.db.refresh(session, attribute_names=["schedules"])
        return schedule

    def get_registration_fees(self, conference_id: uuid.UUID) -> list[RegistrationFee]:
        return list(
            self.db.scalars(
                select(RegistrationFee)
                .where(RegistrationFee.conference_id == conference_id)
                .order_by(RegistrationFee.participant_type)
            )
        )

    def get_registration_fee(
        self, conference_id: uuid.UUID, participant_type: ParticipantType
    ) -> RegistrationFee | None:
        return self.db.scalars(
            select(RegistrationFee).where(
                RegistrationFee.conference_id == conference_id,
                RegistrationFee.participant_type == participant_type,
            )
        ).first()

    def upsert_registration_fee(
        self, conference_id: uuid.UUID, participant_type: ParticipantType, data: RegistrationFeeUpsert
    ) -> RegistrationFee:
        fee = self.get_registration_fee(conference_id, participant_type)
        with transaction(self.db):
            if fee is None:
                fee = RegistrationFee(conference_id=conference_id, participant_type=participant_type)
                self.db.add(fee)
            for name, value in data.model_dump().items():
                setattr(fee, name, value)
        conference = self.find_by_id(conference_id)
        if conference is not None:
            self.db.refresh(conference, attribute_names=["registration_fees"])
        return fee
