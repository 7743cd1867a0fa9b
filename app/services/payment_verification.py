"""
Registration payment workflow.

A participant uploads a proof of payment for their registration fee, an
admin then verifies or rejects the record. The user's ``payment_status``
mirrors the outcome of their latest record.
"""
from __future__ import annotations

import logging
import os
import uuid
from decimal import Decimal
from typing import BinaryIO

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import ForbiddenError, NotFoundError, ValidationFailure
from app.db.session import transaction
from app.models.enums import PaymentMethod, PaymentRecordStatus, PaymentStatus, UserRole
from app.models.payment_record import PaymentRecord
from app.models.user import User
from app.repositories.payment import PaymentRepository
from app.repositories.payment_instructions import PaymentInstructionsRepository
from app.repositories.user import UserRepository
from app.schemas.conference import PaymentInstructionsRead
from app.schemas.file import DownloadLink
from app.schemas.payment import PaymentInfoRead, PaymentRead, PaymentStatusRead
from app.services import storage

logger = logging.getLogger(__name__)

CAN_SUBMIT = {PaymentStatus.NOT_PAID, PaymentStatus.PAYMENT_REJECTED}


def _stream_size(fileobj: BinaryIO) -> int:
    fileobj.seek(0, os.SEEK_END)
    size = fileobj.tell()
    fileobj.seek(0)
    return size


class PaymentVerificationService:
    def __init__(self, db: Session):
        self.db = db
        self.payments = PaymentRepository(db)
        self.users = UserRepository(db)
        self.instructions = PaymentInstructionsRepository(db)

    def _get_user(self, user_id: uuid.UUID) -> User:
        user = self.users.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def submit_proof(
        self,
        user_id: uuid.UUID,
        amount: Decimal,
        proof: BinaryIO | None,
        filename: str | None,
        content_type: str | None,
        *,
        currency: str = "USD",
        payment_method: PaymentMethod = PaymentMethod.BANK_TRANSFER,
        transaction_reference: str | None = None,
    ) -> PaymentRecord:
        user = self._get_user(user_id)

        if proof is None or not filename:
            raise ValidationFailure("Proof of payment file is required", code="FILE_REQUIRED", field="proofOfPayment")
        if content_type not in settings.payment_proof_content_types:
            raise ValidationFailure(
                "Only JPEG, PNG and PDF files are allowed", code="INVALID_FILE_TYPE", field="proofOfPayment"
            )
        if _stream_size(proof) > settings.payment_proof_max_bytes:
            raise ValidationFailure("File size must be less than 5MB", code="FILE_TOO_LARGE", field="proofOfPayment")

        if Decimal(amount).quantize(Decimal("0.01")) != Decimal(user.registration_fee).quantize(Decimal("0.01")):
            logger.warning("Payment amount %s does not match fee %s for user %s", amount, user.registration_fee, user_id)
            raise ValidationFailure(
                f"Payment amount must match registration fee of {user.registration_fee}",
                code="INVALID_AMOUNT",
                field="amount",
            )

        object_key = None
        try:
            with transaction(self.db):
                record = self.payments.create(
                    user_id,
                    amount,
                    currency=currency,
                    payment_method=payment_method,
                    transaction_reference=transaction_reference,
                )
                object_key = storage.upload_stream(proof, filename, content_type, prefix=storage.PAYMENT_PROOF_PREFIX)
                self.payments.update_proof_path(record.id, object_key)
                self.users.update_payment_status(user_id, PaymentStatus.PAYMENT_SUBMITTED)
        except Exception:
            logger.exception("Payment proof submission failed for user %s", user_id)
            if object_key is not None:
                storage.delete_object(object_key)
            raise

        logger.info("Payment %s submitted by user %s", record.id, user_id)
        return record

    def verify(self, payment_id: uuid.UUID, admin_id: uuid.UUID, notes: str | None = None) -> PaymentRecord:
        with transaction(self.db):
            record = self.payments.verify(payment_id, admin_id, notes)
            if record is None:
                raise NotFoundError("Payment", payment_id)
            self.users.update_payment_status(record.user_id, PaymentStatus.PAYMENT_VERIFIED)
        logger.info("Payment %s verified by %s", payment_id, admin_id)
        return record

    def reject(self, payment_id: uuid.UUID, admin_id: uuid.UUID, notes: str) -> PaymentRecord:
        with transaction(self.db):
            record = self.payments.reject(payment_id, admin_id, notes)
            if record is None:
                raise NotFoundError("Payment", payment_id)
            self.users.update_payment_status(record.user_id, PaymentStatus.PAYMENT_REJECTED)
        logger.info("Payment %s rejected by %s", payment_id, admin_id)
        return record

    def payment_info(self, user_id: uuid.UUID) -> PaymentInfoRead:
        user = self._get_user(user_id)
        instructions = self.instructions.get_active()
        if instructions is None:
            raise NotFoundError("Payment instructions", message="Payment instructions are not configured")

        records = self.payments.find_by_user_id(user_id)
        return PaymentInfoRead(
            payment_status=user.payment_status,
            registration_fee=user.registration_fee,
            participant_type=user.participant_type,
            payment_instructions=PaymentInstructionsRead.model_validate(instructions),
            payment_records=[PaymentRead.model_validate(r) for r in records],
            latest_payment=PaymentRead.model_validate(records[0]) if records else None,
        )

    def payment_status(self, user_id: uuid.UUID) -> PaymentStatusRead:
        user = self._get_user(user_id)
        records = self.payments.find_by_user_id(user_id)
        latest = self.payments.latest_for_user(user_id)
        return PaymentStatusRead(
            payment_status=user.payment_status,
            registration_fee=user.registration_fee,
            payment_records=[PaymentRead.model_validate(r) for r in records],
            latest_payment=PaymentRead.model_validate(latest) if latest else None,
            can_submit_payment=user.payment_status in CAN_SUBMIT,
        )

    def proof_download(self, payment_id: uuid.UUID, requester: User) -> DownloadLink:
        record = self.payments.find_by_id(payment_id)
        if record is None:
            raise NotFoundError("Payment", payment_id)
        if record.user_id != requester.id and requester.role != UserRole.ADMIN:
            raise ForbiddenError("You can only download your own payment proofs")
        if not record.proof_of_payment_path:
            raise NotFoundError("Payment proof", payment_id)
        return storage.presigned_download_url(record.proof_of_payment_path)

    def list_payments(self, status: PaymentRecordStatus | None = None) -> list[PaymentRecord]:
        if status is None:
            return self.payments.find_all()
        return self.payments.find_by_status(status)
