from __future__ import annotations

import uuid
from decimal import Decimal

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_user, require_admin
from app.db.session import get_db
from app.models.enums import PaymentMethod, PaymentRecordStatus
from app.models.user import User
from app.repositories.payment import PaymentRepository
from app.schemas.common import ApiResponse
from app.schemas.file import DownloadLink
from app.schemas.payment import (
    PaymentInfoRead,
    PaymentRead,
    PaymentRejectRequest,
    PaymentStats,
    PaymentStatusRead,
    PaymentVerifyRequest,
    PendingPaymentRead,
)
from app.services.payment_verification import PaymentVerificationService

router = APIRouter(prefix="/payments", tags=["payments"])


@router.get("/info", response_model=ApiResponse[PaymentInfoRead])
def payment_info(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return ApiResponse[PaymentInfoRead](data=PaymentVerificationService(db).payment_info(current_user.id))


@router.get("/status", response_model=ApiResponse[PaymentStatusRead])
def payment_status(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return ApiResponse[PaymentStatusRead](data=PaymentVerificationService(db).payment_status(current_user.id))


@router.post("/submit-proof", response_model=ApiResponse[PaymentRead], status_code=status.HTTP_201_CREATED)
def submit_proof(
    amount: Decimal = Form(...),
    currency: str = Form("USD", min_length=3, max_length=3),
    payment_method: PaymentMethod = Form(PaymentMethod.BANK_TRANSFER, alias="paymentMethod"),
    transaction_reference: str | None = Form(None, alias="transactionReference"),
    proof_of_payment: UploadFile | None = File(None, alias="proofOfPayment"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    record = PaymentVerificationService(db).submit_proof(
        current_user.id,
        amount,
        proof_of_payment.file if proof_of_payment is not None else None,
        proof_of_payment.filename if proof_of_payment is not None else None,
        proof_of_payment.content_type if proof_of_payment is not None else None,
        currency=currency.upper(),
        payment_method=payment_method,
        transaction_reference=transaction_reference,
    )
    return ApiResponse[PaymentRead](data=PaymentRead.model_validate(record), message="Payment proof submitted")


@router.get("/proof/{payment_id}/download", response_model=ApiResponse[DownloadLink])
def download_proof(
    payment_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ApiResponse[DownloadLink](data=PaymentVerificationService(db).proof_download(payment_id, current_user))


@router.get("/admin/pending", response_model=ApiResponse[list[PendingPaymentRead]])
def pending_payments(_: User = Depends(require_admin), db: Session = Depends(get_db)):
    return ApiResponse[list[PendingPaymentRead]](data=PaymentRepository(db).pending_with_users())


@router.get("/admin/all", response_model=ApiResponse[list[PaymentRead]])
def all_payments(
    status_filter: PaymentRecordStatus | None = Query(None, alias="status"),
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    records = PaymentVerificationService(db).list_payments(status_filter)
    return ApiResponse[list[PaymentRead]](data=[PaymentRead.model_validate(r) for r in records])


@router.get("/admin/statistics", response_model=ApiResponse[PaymentStats])
def payment_statistics(_: User = Depends(require_admin), db: Session = Depends(get_db)):
    return ApiResponse[PaymentStats](data=PaymentRepository(db).stats())


@router.put("/admin/{payment_id}/verify", response_model=ApiResponse[PaymentRead])
def verify_payment(
    payment_id: uuid.UUID,
    payload: PaymentVerifyRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    record = PaymentVerificationService(db).verify(payment_id, admin.id, payload.admin_notes)
    return ApiResponse[PaymentRead](data=PaymentRead.model_validate(record), message="Payment verified")


@router.put("/admin/{payment_id}/reject", response_model=ApiResponse[PaymentRead])
def reject_payment(
    payment_id: uuid.UUID,
    payload: PaymentRejectRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    record = PaymentVerificationService(db).reject(payment_id, admin.id, payload.admin_notes)
    return ApiResponse[PaymentRead](data=PaymentRead.model_validate(record), message="Payment rejected")
