# fitness_api/crud/payment.py
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from fitness_api.crud.base import CRUDBase
from fitness_api.models.payment import Payment
from fitness_api.schemas.payment import PaymentCreate, PaymentStatusUpdate


class CRUDPayment(CRUDBase[Payment, PaymentCreate, PaymentStatusUpdate]):
    def list_by_user(self, db: Session, user_id: int) -> List[Payment]:
        stmt = select(Payment).where(Payment.user_id == user_id).order_by(Payment.created_at.desc(), Payment.id.desc())
        return list(db.scalars(stmt).all())

    def list_all(self, db: Session, status: Optional[str] = None) -> List[Payment]:
        stmt = select(Payment)
        if status is not None:
            stmt = stmt.where(Payment.status == status)
        return list(db.scalars(stmt.order_by(Payment.created_at.desc(), Payment.id.desc())).all())


payment_crud = CRUDPayment(Payment)
