from __future__ import annotations

import uuid
from decimal import Decimal

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session

from app.core.exceptions import InvalidTransitionError, ValidationFailure
from app.db.session import transaction
from app.models.enums import PaymentMethod, PaymentRecordStatus
from app.models.payment_record import PaymentRecord
from app.models.timestamps import utcnow
from app.models.user import User
from app.schemas.payment import PayerInfo, PaymentRead, PaymentStats, PendingPaymentRead


class PaymentRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(
        self,
        user_id: uuid.UUID,
        amount: Decimal,
        *,
        currency: str = "USD",
        payment_method: PaymentMethod = PaymentMethod.BANK_TRANSFER,
        transaction_reference: str | None = None,
        proof_of_payment_path: str | None = None,
    ) -> PaymentRecord:
        record = PaymentRecord(
            user_id=user_id,
            amount=amount,
            currency=currency,
            payment_method=payment_method,
            transaction_reference=transaction_reference,
            proof_of_payment_path=proof_of_payment_path,
            status=PaymentRecordStatus.PENDING,
        )
        with transaction(self.db):
            self.db.add(record)
        return record

    def find_by_id(self, payment_id: uuid.UUID) -> PaymentRecord | None:
        return self.db.get(PaymentRecord, payment_id)

    def find_by_user_id(self, user_id: uuid.UUID) -> list[PaymentRecord]:
        return list(
            self.db.scalars(
                select(PaymentRecord)
                .where(PaymentRecord.user_id == user_id)
                .order_by(PaymentRecord.payment_date.desc(), PaymentRecord.created_at.desc())
            )
        )

    def latest_for_user(self, user_id: uuid.UUID) -> PaymentRecord | None:
        records = self.find_by_user_id(user_id)
        return records[0] if records else None

    def find_by_status(self, status: PaymentRecordStatus) -> list[PaymentRecord]:
        return list(
            self.db.scalars(
                select(PaymentRecord).where(PaymentRecord.status == status).order_by(PaymentRecord.created_at.desc())
            )
        )

    def find_all(self) -> list[PaymentRecord]:
        return list(self.db.scalars(select(PaymentRecord).order_by(PaymentRecord.created_at.desc())))

    def pending_with_users(self) -> list[PendingPaymentRead]:
        """Pending records joined with their payer, oldest first."""
        stmt = (
            select(PaymentRecord, User)
            .join(User, User.id == PaymentRecord.user_id)
            .where(PaymentRecord.status == PaymentRecordStatus.PENDING)
            .order_by(PaymentRecord.created_at.asc())
        )
        return [
            PendingPaymentRead(**PaymentRead.model_validate(record).model_dump(), user_info=PayerInfo.model_validate(user))
            for record, user in self.db.execute(stmt)
        ]

    def verify(self, payment_id: uuid.UUID, admin_id: uuid.UUID, notes: str | None = None) -> PaymentRecord | None:
        record = self.find_by_id(payment_id)
        if record is None:
            return None
        self._ensure_pending(record, "verify")

        with transaction(self.db):
            now = utcnow()
            record.status = PaymentRecordStatus.VERIFIED
            record.verified_by = admin_id
            record.verification_date = now
            record.admin_notes = notes
            record.updated_at = now
        return record

    def reject(self, payment_id: uuid.UUID, admin_id: uuid.UUID, notes: str) -> PaymentRecord | None:
        if not notes or not notes.strip():
            raise ValidationFailure("Admin notes are required when rejecting a payment", field="adminNotes")

        record = self.find_by_id(payment_id)
        if record is None:
            return None
        self._ensure_pending(record, "reject")

        with transaction(self.db):
            now = utcnow()
            record.status = PaymentRecordStatus.REJECTED
            record.verified_by = admin_id
            record.verification_date = now
            record.admin_notes = notes.strip()
            record.updated_at = now
        return record

    @staticmethod
    def _ensure_pending(record: PaymentRecord, action: str) -> None:
        if record.status != PaymentRecordStatus.PENDING:
            raise InvalidTransitionError(
                f"Cannot {action} a payment that is already {record.status.value}",
                details={"paymentId": str(record.id), "status": record.status.value},
            )

    def update_proof_path(self, payment_id: uuid.UUID, path: str) -> PaymentRecord | None:
        record = self.find_by_id(payment_id)
        if record is None:
            return None
        with transaction(self.db):
            record.proof_of_payment_path = path
            record.updated_at = utcnow()
        return record

    def count_by_status(self) -> dict[str, int]:
        counts = {status.value: 0 for status in PaymentRecordStatus}
        for status, count in self.db.execute(
            select(PaymentRecord.status, func.count(PaymentRecord.id)).group_by(PaymentRecord.status)
        ):
            counts[PaymentRecordStatus(status).value] = count
        return counts

    def stats(self) -> PaymentStats:
        """Counts per status plus the sum of verified amounts."""
        total, verified_amount = self.db.execute(
            select(
                func.count(PaymentRecord.id),
                func.sum(case((PaymentRecord.status == PaymentRecordStatus.VERIFIED, PaymentRecord.amount))),
            )
        ).one()
        counts = self.count_by_status()
        return PaymentStats(
            total_payments=total or 0,
            pending_payments=counts[PaymentRecordStatus.PENDING.value],
            verified_payments=counts[PaymentRecordStatus.VERIFIED.value],
            rejected_payments=counts[PaymentRecordStatus.REJECTED.value],
            total_amount=Decimal(str(verified_amount)) if verified_amount is not None else Decimal("0.00"),
        )
