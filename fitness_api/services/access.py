# fitness_api/services/access.py
from datetime import datetime
from typing import Any, Iterable, Optional

from sqlalchemy.orm import Session

from fitness_api.core.tiers import MembershipTier, highest_tier, tier_rank
from fitness_api.crud.membership import membership_crud
from fitness_api.crud.subscription import subscription_crud
from fitness_api.util.time import utcnow


def highest_tier_row(rows: Iterable[Any]) -> Optional[Any]:
    """Row with the highest ``tier``; the first one wins a tie."""
    return max(rows, key=lambda row: tier_rank(row.tier), default=None)


def resolve_user_tier(db: Session, user_id: int, now: Optional[datetime] = None) -> MembershipTier:
    """Highest tier among the user's live memberships and subscriptions, FREE otherwise."""
    now = now or utcnow()
    tiers = [MembershipTier.FREE]
    tiers += [m.tier for m in membership_crud.list_active_by_user(db, user_id, now)]
    tiers += [s.tier for s in subscription_crud.list_active_by_user(db, user_id, now)]
    return highest_tier(tiers)
