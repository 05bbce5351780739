# fitness_api/crud/membership.py
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from fitness_api.crud.base import CRUDBase
from fitness_api.models.enums import MembershipStatus
from fitness_api.models.membership import Membership, MembershipPlan
from fitness_api.schemas.membership import (
    MembershipCreate,
    MembershipPlanCreate,
    MembershipPlanUpdate,
    MembershipStatusUpdate,
)


class CRUDMembershipPlan(CRUDBase[MembershipPlan, MembershipPlanCreate, MembershipPlanUpdate]):
    def get_by_tier(self, db: Session, tier: str) -> Optional[MembershipPlan]:
        return db.execute(select(MembershipPlan).where(MembershipPlan.tier == tier)).scalar_one_or_none()

    def list_active(self, db: Session) -> List[MembershipPlan]:
        stmt = select(MembershipPlan).where(MembershipPlan.is_active.is_(True)).order_by(MembershipPlan.monthly_price)
        return list(db.scalars(stmt).all())

    def list_all(self, db: Session) -> List[MembershipPlan]:
        return self.get_multi(db, limit=None, order_by=MembershipPlan.monthly_price)


class CRUDMembership(CRUDBase[Membership, MembershipCreate, MembershipStatusUpdate]):
    def list_by_user(self, db: Session, user_id: int) -> List[Membership]:
        stmt = select(Membership).where(Membership.user_id == user_id).order_by(Membership.created_at.desc(), Membership.id.desc())
        return list(db.scalars(stmt).all())

    def list_active_by_user(self, db: Session, user_id: int, now: datetime) -> List[Membership]:
        stmt = (
            select(Membership)
            .where(
                Membership.user_id == user_id,
                Membership.status == MembershipStatus.ACTIVE.value,
                Membership.end_date >= now,
            )
            .order_by(Membership.end_date.desc(), Membership.id.desc())
        )
        return list(db.scalars(stmt).all())


membership_plan_crud = CRUDMembershipPlan(MembershipPlan)
membership_crud = CRUDMembership(Membership)
