from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import require_admin
from app.core.exceptions import NotFoundError
from app.db.session import get_db
from app.models.enums import ParticipantType
from app.models.user import User
from app.repositories.conference import ConferenceRepository
from app.repositories.payment_instructions import PaymentInstructionsRepository
from app.schemas.common import ApiResponse
from app.schemas.conference import (
    ConferenceCreate,
    ConferenceRead,
    ConferenceUpdate,
    PaymentInstructionsRead,
    PaymentInstructionsUpsert,
    RegistrationFeeRead,
    RegistrationFeeUpsert,
    ScheduleCreate,
    SessionCreate,
    SessionRead,
    SessionScheduleRead,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/conference", tags=["conference"])


def _require_conference(repo: ConferenceRepository, conference_id: uuid.UUID) -> None:
    if repo.find_by_id(conference_id) is None:
        raise NotFoundError("Conference", conference_id)


@router.get("/active", response_model=ApiResponse[ConferenceRead])
def active_conference(db: Session = Depends(get_db)):
    conference = ConferenceRepository(db).find_active()
    if conference is None:
        raise NotFoundError("Conference", message="No active conference")
    return ApiResponse[ConferenceRead](data=ConferenceRead.model_validate(conference))


@router.post("", response_model=ApiResponse[ConferenceRead], status_code=status.HTTP_201_CREATED)
def create_conference(
    payload: ConferenceCreate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    conference = ConferenceRepository(db).create(payload)
    logger.info("Conference %s created by %s", conference.id, admin.id)
    return ApiResponse[ConferenceRead](data=ConferenceRead.model_validate(conference))


@router.put("/{conference_id}", response_model=ApiResponse[ConferenceRead])
def update_conference(
    conference_id: uuid.UUID,
    payload: ConferenceUpdate,
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    conference = ConferenceRepository(db).update(conference_id, payload)
    if conference is None:
        raise NotFoundError("Conference", conference_id)
    return ApiResponse[ConferenceRead](data=ConferenceRead.model_validate(conference))


@router.post("/{conference_id}/sessions", response_model=ApiResponse[SessionRead], status_code=status.HTTP_201_CREATED)
def add_session(
    conference_id: uuid.UUID,
    payload: SessionCreate,
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    session = ConferenceRepository(db).add_session(conference_id, payload)
    if session is None:
        raise NotFoundError("Conference", conference_id)
    return ApiResponse[SessionRead](data=SessionRead.model_validate(session))


@router.post(
    "/sessions/{session_id}/schedules",
    response_model=ApiResponse[SessionScheduleRead],
    status_code=status.HTTP_201_CREATED,
)
def add_schedule(
    session_id: uuid.UUID,
    payload: ScheduleCreate,
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    schedule = ConferenceRepository(db).add_schedule(session_id, payload)
    if schedule is None:
        raise NotFoundError("Session", session_id)
    return ApiResponse[SessionScheduleRead](data=SessionScheduleRead.model_validate(schedule))


@router.put("/{conference_id}/fees/{participant_type}", response_model=ApiResponse[RegistrationFeeRead])
def upsert_fee(
    conference_id: uuid.UUID,
    participant_type: ParticipantType,
    payload: RegistrationFeeUpsert,
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    repo = ConferenceRepository(db)
    _require_conference(repo, conference_id)
    fee = repo.upsert_registration_fee(conference_id, participant_type, payload)
    return ApiResponse[RegistrationFeeRead](data=RegistrationFeeRead.model_validate(fee))


@router.put("/{conference_id}/payment-instructions", response_model=ApiResponse[PaymentInstructionsRead])
def upsert_payment_instructions(
    conference_id: uuid.UUID,
    payload: PaymentInstructionsUpsert,
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    _require_conference(ConferenceRepository(db), conference_id)
    instructions = PaymentInstructionsRepository(db).upsert(conference_id, payload)
    return ApiResponse[PaymentInstructionsRead](data=PaymentInstructionsRead.model_validate(instructions))


@router.delete("/{conference_id}/payment-instructions", response_model=ApiResponse[None])
def delete_payment_instructions(
    conference_id: uuid.UUID,
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    if not PaymentInstructionsRepository(db).delete(conference_id):
        raise NotFoundError("Payment instructions", conference_id)
    return ApiResponse[None](message="Payment instructions removed")
