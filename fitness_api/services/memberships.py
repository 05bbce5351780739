# fitness_api/services/memberships.py
from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from fitness_api.core.errors import AccessDeniedError, NotFoundError, ValidationError
from fitness_api.crud.membership import membership_crud
from fitness_api.models.enums import MembershipStatus, UserRole
from fitness_api.models.membership import Membership
from fitness_api.models.user import User
from fitness_api.schemas.membership import MembershipCreate
from fitness_api.services.access import highest_tier_row
from fitness_api.util.time import as_utc, utcnow

logger = logging.getLogger(__name__)


class MembershipService:
    def __init__(self, db: Session, default_currency: str = "LSL"):
        self.db = db
        self.default_currency = default_currency

    def get(self, membership_id: int) -> Membership:
        membership = membership_crud.get(self.db, membership_id)
        if membership is None:
            raise NotFoundError("Membership not found")
        return membership

    def list_for_user(self, user_id: int) -> List[Membership]:
        return membership_crud.list_by_user(self.db, user_id)

    def active_for_user(self, user_id: int) -> Optional[Membership]:
        return highest_tier_row(membership_crud.list_active_by_user(self.db, user_id, utcnow()))

    def create(self, user_id: int, body: MembershipCreate) -> Membership:
        if as_utc(body.end_date) <= as_utc(body.start_date):
            raise ValidationError("End date must be after start date")
        if body.amount <= 0:
            raise ValidationError("Amount must be greater than 0")
        membership = membership_crud.create(self.db, body, extra={
            "user_id": user_id,
            "status": MembershipStatus.PENDING.value,
            "currency": body.currency or self.default_currency,
        })
        logger.info("membership created id=%s user=%s tier=%s", membership.id, user_id, membership.tier)
        return membership

    def cancel(self, membership_id: int, actor: User) -> Membership:
        membership = self.get(membership_id)
        if membership.user_id != actor.id and actor.role != UserRole.ADMIN.value:
            raise AccessDeniedError("Not allowed to cancel this membership")
        return membership_crud.update(self.db, membership, {
            "status": MembershipStatus.CANCELLED.value,
            "auto_renew": False,
        })

    def set_status(self, membership_id: int, status: str) -> Membership:
        membership = self.get(membership_id)
        return membership_crud.update(self.db, membership, {"status": status})
