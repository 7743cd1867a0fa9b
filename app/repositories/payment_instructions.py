from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.db.session import transaction
from app.models.conference import Conference, PaymentInstructions
from app.models.timestamps import utcnow
from app.schemas.conference import PaymentInstructionsUpsert


class PaymentInstructionsRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_by_conference_id(self, conference_id: uuid.UUID) -> PaymentInstructions | None:
        return self.db.scalars(
            select(PaymentInstructions).where(PaymentInstructions.conference_id == conference_id)
        ).first()

    def get_active(self) -> PaymentInstructions | None:
        return self.db.scalars(
            select(PaymentInstructions)
            .join(Conference, Conference.id == PaymentInstructions.conference_id)
            .where(Conference.is_active.is_(True))
            .order_by(Conference.created_at.desc())
            .limit(1)
        ).first()

    def upsert(self, conference_id: uuid.UUID, data: PaymentInstructionsUpsert) -> PaymentInstructions:
        instructions = self.find_by_conference_id(conference_id)
        with transaction(self.db):
            if instructions is None:
                instructions = PaymentInstructions(conference_id=conference_id)
                self.db.add(instructions)
            for name, value in data.model_dump().items():
                setattr(instructions, name, value)
            instructions.updated_at = utcnow()
        self._refresh_conference(conference_id)
        return instructions

    def delete(self, conference_id: uuid.UUID) -> bool:
        instructions = self.find_by_conference_id(conference_id)
        if instructions is None:
            return False
        with transaction(self.db):
            self.db.delete(instructions)
        self._refresh_conference(conference_id)
        return True

    def _refresh_conference(self, conference_id: uuid.UUID) -> None:
        conference = self.db.get(Conference, conference_id)
        if conference is not None:
            self.db.refresh(conference, attribute_names=["payment_instructions"])
