from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import Field

from app.models.enums import ParticipantType, PaymentMethod, PaymentRecordStatus, PaymentStatus
from app.schemas.common import CamelModel
from app.schemas.conference import PaymentInstructionsRead


class PaymentVerifyRequest(CamelModel):
    admin_notes: str | None = Field(default=None, max_length=1000)


class PaymentRejectRequest(CamelModel):
    admin_notes: str = Field(max_length=1000)


class PaymentRead(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID
    amount: Decimal
    currency: str
    payment_method: PaymentMethod
    proof_of_payment_path: str | None = None
    transaction_reference: str | None = None
    payment_date: datetime
    status: PaymentRecordStatus
    admin_notes: str | None = None
    verified_by: uuid.UUID | None = None
    verification_date: datetime | None = None
    created_at: datetime
    updated_at: datetime | None = None


class PayerInfo(CamelModel):
    first_name: str
    last_name: str
    email: str
    participant_type: ParticipantType


class PendingPaymentRead(PaymentRead):
    user_info: PayerInfo


class PaymentStatusRead(CamelModel):
    payment_status: PaymentStatus
    registration_fee: Decimal
    payment_records: list[PaymentRead]
    latest_payment: PaymentRead | None = None
    can_submit_payment: bool


class PaymentInfoRead(CamelModel):
    payment_status: PaymentStatus
    registration_fee: Decimal
    participant_type: ParticipantType
    payment_instructions: PaymentInstructionsRead
    payment_records: list[PaymentRead]
    latest_payment: PaymentRead | None = None


class PaymentStats(CamelModel):
    total_payments: int
    pending_payments: int
    verified_payments: int
    rejected_payments: int
    total_amount: Decimal
