# fitness_api/crud/subscription.py
from datetime import datetime
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from fitness_api.crud.base import CRUDBase
from fitness_api.models.enums import MembershipStatus
from fitness_api.models.subscription import Subscription
from fitness_api.schemas.subscription import SubscriptionCreate, SubscriptionUpdate

_OPEN = (MembershipStatus.ACTIVE.value, MembershipStatus.PENDING.value)


class CRUDSubscription(CRUDBase[Subscription, SubscriptionCreate, SubscriptionUpdate]):
    def list_by_user(self, db: Session, user_id: int) -> List[Subscription]:
        stmt = select(Subscription).where(Subscription.user_id == user_id).order_by(Subscription.created_at.desc(), Subscription.id.desc())
        return list(db.scalars(stmt).all())

    def list_open_by_user(self, db: Session, user_id: int) -> List[Subscription]:
        """ACTIVE and PENDING subscriptions, regardless of period."""
        stmt = select(Subscription).where(
            Subscription.user_id == user_id,
            Subscription.status.in_(_OPEN),
        )
        return list(db.scalars(stmt).all())

    def list_active_by_user(self, db: Session, user_id: int, now: datetime) -> List[Subscription]:
        stmt = (
            select(Subscription)
            .where(
                Subscription.user_id == user_id,
                Subscription.status == MembershipStatus.ACTIVE.value,
                Subscription.current_period_end >= now,
            )
            .order_by(Subscription.current_period_end.desc(), Subscription.id.desc())
        )
        return list(db.scalars(stmt).all())


subscription_crud = CRUDSubscription(Subscription)
