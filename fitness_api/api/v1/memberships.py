# fitness_api/api/v1/memberships.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from fitness_api.api.deps import get_current_user, get_db, require_roles
from fitness_api.models.enums import UserRole
from fitness_api.models.user import User
from fitness_api.schemas.membership import MembershipCreate, MembershipOut, MembershipStatusUpdate
from fitness_api.services.memberships import MembershipService

router = APIRouter()

_admin = [Depends(require_roles(UserRole.ADMIN))]


def _service(request: Request, db: Session) -> MembershipService:
    return MembershipService(db, request.app.state.settings.DEFAULT_CURRENCY)


@router.get("/my-memberships", response_model=List[MembershipOut])
def my_memberships(request: Request, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return _service(request, db).list_for_user(user.id)


@router.get("/active", response_model=Optional[MembershipOut])
def active_membership(request: Request, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return _service(request, db).active_for_user(user.id)


@router.post("/", response_model=MembershipOut, status_code=status.HTTP_201_CREATED)
def create_membership(body: MembershipCreate, request: Request,
                      user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return _service(request, db).create(user.id, body)


@router.patch("/{membership_id}/cancel", response_model=MembershipOut)
def cancel_membership(membership_id: int, request: Request,
                      user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return _service(request, db).cancel(membership_id, user)


@router.get("/{membership_id}", response_model=MembershipOut, dependencies=_admin)
def get_membership(membership_id: int, request: Request, db: Session = Depends(get_db)):
    return _service(request, db).get(membership_id)


@router.patch("/{membership_id}/status", response_model=MembershipOut, dependencies=_admin)
def set_membership_status(membership_id: int, body: MembershipStatusUpdate, request: Request,
                          db: Session = Depends(get_db)):
    return _service(request, db).set_status(membership_id, body.status)
