# fitness_api/services/membership_plans.py
from __future__ import annotations

from typing import List, Optional

from sqlalchemy.orm import Session

from fitness_api.core.errors import ConflictError, NotFoundError, ValidationError
from fitness_api.crud.membership import membership_plan_crud
from fitness_api.models.membership import MembershipPlan
from fitness_api.schemas.membership import MembershipPlanCreate, MembershipPlanUpdate


def _check_prices(monthly: Optional[float], quarterly: Optional[float], yearly: Optional[float]) -> None:
    if monthly is not None and monthly <= 0:
        raise ValidationError("Monthly price must be greater than 0")
    for label, price in (("Quarterly", quarterly), ("Yearly", yearly)):
        if price is not None and price <= 0:
            raise ValidationError(f"{label} price must be greater than 0")


class MembershipPlanService:
    def __init__(self, db: Session, default_currency: str = "LSL"):
        self.db = db
        self.default_currency = default_currency

    def get(self, plan_id: int) -> MembershipPlan:
        plan = membership_plan_crud.get(self.db, plan_id)
        if plan is None:
            raise NotFoundError("Membership plan not found")
        return plan

    def list_active(self) -> List[MembershipPlan]:
        return membership_plan_crud.list_active(self.db)

    def list_all(self) -> List[MembershipPlan]:
        return membership_plan_crud.list_all(self.db)

    def create(self, body: MembershipPlanCreate) -> MembershipPlan:
        _check_prices(body.monthly_price, body.quarterly_price, body.yearly_price)
        if membership_plan_crud.get_by_tier(self.db, body.tier) is not None:
            raise ConflictError("A plan for this tier already exists")
        return membership_plan_crud.create(self.db, body, extra={"currency": body.currency or self.default_currency})

    def update(self, plan_id: int, body: MembershipPlanUpdate) -> MembershipPlan:
        plan = self.get(plan_id)
        _check_prices(body.monthly_price, body.quarterly_price, body.yearly_price)
        return membership_plan_crud.update(self.db, plan, body)

    def delete(self, plan_id: int) -> None:
        self.get(plan_id)
        membership_plan_crud.remove(self.db, plan_id)
