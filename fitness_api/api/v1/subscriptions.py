# fitness_api/api/v1/subscriptions.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from fitness_api.api.deps import get_current_user, get_db, require_roles
from fitness_api.models.enums import UserRole
from fitness_api.models.user import User
from fitness_api.schemas.subscription import SubscriptionCreate, SubscriptionOut, SubscriptionUpdate
from fitness_api.services.subscriptions import SubscriptionService

router = APIRouter()

_admin = [Depends(require_roles(UserRole.ADMIN))]


def _service(request: Request, db: Session) -> SubscriptionService:
    return SubscriptionService(db, request.app.state.settings.DEFAULT_CURRENCY)


@router.get("/my-subscriptions", response_model=List[SubscriptionOut])
def my_subscriptions(request: Request, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return _service(request, db).list_for_user(user.id)


@router.get("/active", response_model=Optional[SubscriptionOut])
def active_subscription(request: Request, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return _service(request, db).active_for_user(user.id)


@router.post("/", response_model=SubscriptionOut, status_code=status.HTTP_201_CREATED)
def create_subscription(body: SubscriptionCreate, request: Request,
                        user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return _service(request, db).create(user.id, body)


@router.patch("/{subscription_id}/cancel", response_model=SubscriptionOut)
def cancel_subscription(subscription_id: int, request: Request,
                        user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return _service(request, db).cancel(subscription_id, user)


@router.get("/{subscription_id}", response_model=SubscriptionOut, dependencies=_admin)
def get_subscription(subscription_id: int, request: Request, db: Session = Depends(get_db)):
    return _service(request, db).get(subscription_id)


@router.put("/{subscription_id}", response_model=SubscriptionOut, dependencies=_admin)
def update_subscription(subscription_id: int, body: SubscriptionUpdate, request: Request,
                        db: Session = Depends(get_db)):
    return _service(request, db).update(subscription_id, body)
