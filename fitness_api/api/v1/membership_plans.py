# fitness_api/api/v1/membership_plans.py
from typing import List

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from fitness_api.api.deps import get_db, require_roles
from fitness_api.models.enums import UserRole
from fitness_api.schemas.membership import MembershipPlanCreate, MembershipPlanOut, MembershipPlanUpdate
from fitness_api.services.membership_plans import MembershipPlanService

router = APIRouter()

_admin = [Depends(require_roles(UserRole.ADMIN))]


def _service(request: Request, db: Session) -> MembershipPlanService:
    return MembershipPlanService(db, request.app.state.settings.DEFAULT_CURRENCY)


@router.get("/", response_model=List[MembershipPlanOut])
def list_active_plans(request: Request, db: Session = Depends(get_db)):
    return _service(request, db).list_active()


@router.get("/all", response_model=List[MembershipPlanOut])
def list_all_plans(request: Request, db: Session = Depends(get_db)):
    return _service(request, db).list_all()


@router.get("/{plan_id}", response_model=MembershipPlanOut)
def get_plan(plan_id: int, request: Request, db: Session = Depends(get_db)):
    return _service(request, db).get(plan_id)


@router.post("/", response_model=MembershipPlanOut, status_code=status.HTTP_201_CREATED, dependencies=_admin)
def create_plan(body: MembershipPlanCreate, request: Request, db: Session = Depends(get_db)):
    return _service(request, db).create(body)


@router.put("/{plan_id}", response_model=MembershipPlanOut, dependencies=_admin)
def update_plan(plan_id: int, body: MembershipPlanUpdate, request: Request, db: Session = Depends(get_db)):
    return _service(request, db).update(plan_id, body)


@router.delete("/{plan_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=_admin)
def delete_plan(plan_id: int, request: Request, db: Session = Depends(get_db)):
    _service(request, db).delete(plan_id)
    return None  # 204
