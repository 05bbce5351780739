# fitness_api/api/v1/payments.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from fitness_api.api.deps import get_current_user, get_db, require_roles
from fitness_api.models.enums import PaymentStatus, UserRole
from fitness_api.models.user import User
from fitness_api.schemas.payment import PaymentCreate, PaymentOut, PaymentStatusUpdate
from fitness_api.services.payments import PaymentService

router = APIRouter()

_admin = [Depends(require_roles(UserRole.ADMIN))]


def _service(request: Request, db: Session) -> PaymentService:
    return PaymentService(db, request.app.state.settings.DEFAULT_CURRENCY)


@router.get("/my-payments", response_model=List[PaymentOut])
def my_payments(request: Request, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return _service(request, db).list_for_user(user.id)


@router.post("/", response_model=PaymentOut, status_code=status.HTTP_201_CREATED)
def create_payment(body: PaymentCreate, request: Request,
                   user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return _service(request, db).create(user.id, body)


@router.get("/", response_model=List[PaymentOut], dependencies=_admin)
def list_payments(
    request: Request,
    status_filter: Optional[PaymentStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db),
):
    return _service(request, db).list_all(status_filter.value if status_filter else None)


@router.get("/{payment_id}", response_model=PaymentOut, dependencies=_admin)
def get_payment(payment_id: int, request: Request, db: Session = Depends(get_db)):
    return _service(request, db).get(payment_id)


@router.patch("/{payment_id}/status", response_model=PaymentOut, dependencies=_admin)
def set_payment_status(payment_id: int, body: PaymentStatusUpdate, request: Request,
                       db: Session = Depends(get_db)):
    return _service(request, db).set_status(payment_id, body)


@router.patch("/{payment_id}/refund", response_model=PaymentOut, dependencies=_admin)
def refund_payment(payment_id: int, request: Request, db: Session = Depends(get_db)):
    return _service(request, db).refund(payment_id)
