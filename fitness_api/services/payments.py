# fitness_api/services/payments.py
from __future__ import annotations

import logging
import secrets
import string
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from fitness_api.core.errors import NotFoundError, ValidationError
from fitness_api.crud.payment import payment_crud
from fitness_api.models.enums import PaymentStatus
from fitness_api.models.payment import Payment
from fitness_api.schemas.payment import PaymentCreate, PaymentStatusUpdate
from fitness_api.util.time import utcnow

logger = logging.getLogger(__name__)

_INVOICE_ALPHABET = string.ascii_uppercase + string.digits


def generate_invoice_number(now: Optional[datetime] = None) -> str:
    """``INV-<epoch millis>-<9 random chars>``."""
    millis = int((now or utcnow()).timestamp() * 1000)
    suffix = "".join(secrets.choice(_INVOICE_ALPHABET) for _ in range(9))
    return f"INV-{millis}-{suffix}"


class PaymentService:
    def __init__(self, db: Session, default_currency: str = "LSL"):
        self.db = db
        self.default_currency = default_currency

    def get(self, payment_id: int) -> Payment:
        payment = payment_crud.get(self.db, payment_id)
        if payment is None:
            raise NotFoundError("Payment not found")
        return payment

    def list_for_user(self, user_id: int) -> List[Payment]:
        return payment_crud.list_by_user(self.db, user_id)

    def list_all(self, status: Optional[str] = None) -> List[Payment]:
        return payment_crud.list_all(self.db, status)

    def create(self, user_id: int, body: PaymentCreate) -> Payment:
        if body.amount <= 0:
            raise ValidationError("Amount must be greater than 0")
        payment = payment_crud.create(self.db, body, extra={
            "user_id": user_id,
            "status": PaymentStatus.PENDING.value,
            "currency": body.currency or self.default_currency,
            "invoice_number": generate_invoice_number(),
        })
        logger.info("payment created id=%s user=%s invoice=%s", payment.id, user_id, payment.invoice_number)
        return payment

    def set_status(self, payment_id: int, body: PaymentStatusUpdate) -> Payment:
        payment = self.get(payment_id)
        return payment_crud.update(self.db, payment, body)

    def refund(self, payment_id: int) -> Payment:
        payment = self.get(payment_id)
        if payment.status != PaymentStatus.COMPLETED.value:
            raise ValidationError("Only completed payments can be refunded")
        if payment.refunded_at is not None:
            raise ValidationError("Payment already refunded")
        payment = payment_crud.update(self.db, payment, {
            "status": PaymentStatus.REFUNDED.value,
            "refunded_at": utcnow(),
        })
        logger.info("payment refunded id=%s", payment.id)
        return payment
