# fitness_api/services/subscriptions.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from fitness_api.core.errors import AccessDeniedError, ConflictError, NotFoundError, ValidationError
from fitness_api.crud.subscription import subscription_crud
from fitness_api.models.enums import BillingCycle, MembershipStatus, UserRole
from fitness_api.models.subscription import Subscription
from fitness_api.models.user import User
from fitness_api.schemas.subscription import SubscriptionCreate, SubscriptionUpdate
from fitness_api.services.access import highest_tier_row
from fitness_api.util.time import add_months, utcnow

logger = logging.getLogger(__name__)

_CYCLE_MONTHS = {
    BillingCycle.monthly.value: 1,
    BillingCycle.quarterly.value: 3,
    BillingCycle.yearly.value: 12,
}


def period_end(start: datetime, billing_cycle: str) -> datetime:
    try:
        months = _CYCLE_MONTHS[BillingCycle(billing_cycle).value]
    except ValueError:
        raise ValidationError(f"Unknown billing cycle: {billing_cycle!r}")
    return add_months(start, months)


class SubscriptionService:
    def __init__(self, db: Session, default_currency: str = "LSL"):
        self.db = db
        self.default_currency = default_currency

    def get(self, subscription_id: int) -> Subscription:
        subscription = subscription_crud.get(self.db, subscription_id)
        if subscription is None:
            raise NotFoundError("Subscription not found")
        return subscription

    def list_for_user(self, user_id: int) -> List[Subscription]:
        return subscription_crud.list_by_user(self.db, user_id)

    def active_for_user(self, user_id: int) -> Optional[Subscription]:
        return highest_tier_row(subscription_crud.list_active_by_user(self.db, user_id, utcnow()))

    def _cancel(self, subscription: Subscription) -> Subscription:
        return subscription_crud.update(self.db, subscription, {
            "status": MembershipStatus.CANCELLED.value,
            "canceled_at": utcnow(),
            "cancel_at_period_end": True,
        })

    def create(self, user_id: int, body: SubscriptionCreate, now: Optional[datetime] = None) -> Subscription:
        """Open a PENDING subscription; it grants its tier once an admin activates it."""
        if body.amount <= 0:
            raise ValidationError("Amount must be greater than 0")

        opened = subscription_crud.list_open_by_user(self.db, user_id)
        if any(row.tier == body.tier for row in opened):
            raise ConflictError("User already has an open subscription for this tier")
        for row in opened:
            # a newer request replaces older pending ones
            if row.status == MembershipStatus.PENDING.value:
                self._cancel(row)
                logger.info("pending subscription id=%s cancelled by tier change", row.id)

        start = now or utcnow()
        subscription = subscription_crud.create(self.db, body, extra={
            "user_id": user_id,
            "status": MembershipStatus.PENDING.value,
            "currency": body.currency or self.default_currency,
            "current_period_start": start,
            "current_period_end": period_end(start, body.billing_cycle),
        })
        logger.info("subscription created id=%s user=%s tier=%s", subscription.id, user_id, subscription.tier)
        return subscription

    def cancel(self, subscription_id: int, actor: User) -> Subscription:
        subscription = self.get(subscription_id)
        if subscription.user_id != actor.id and actor.role != UserRole.ADMIN.value:
            raise AccessDeniedError("Not allowed to cancel this subscription")
        return self._cancel(subscription)

    def update(self, subscription_id: int, body: SubscriptionUpdate) -> Subscription:
        subscription = self.get(subscription_id)
        if body.amount is not None and body.amount <= 0:
            raise ValidationError("Amount must be greater than 0")
        if body.status == MembershipStatus.ACTIVE.value and subscription.status != MembershipStatus.ACTIVE.value:
            # activating switches tiers: the user's other open subscriptions end
            for row in subscription_crud.list_open_by_user(self.db, subscription.user_id):
                if row.id != subscription.id:
                    self._cancel(row)
                    logger.info("subscription id=%s cancelled by tier change", row.id)
        return subscription_crud.update(self.db, subscription, body)
