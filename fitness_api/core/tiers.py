# fitness_api/core/tiers.py
"""Membership tier hierarchy and content gating.

Tiers are totally ordered ``FREE < BASIC < PREMIUM < VIP``. A user may see
gated content (workouts, exercises) when the content's ``required_tier`` is
ranked at or below the user's tier, and premium-flagged content is never
shown to FREE users.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterable, List, Protocol, TypeVar

from fitness_api.core.errors import ValidationError


class MembershipTier(str, Enum):
    FREE = "FREE"
    BASIC = "BASIC"
    PREMIUM = "PREMIUM"
    VIP = "VIP"


_HIERARCHY = [MembershipTier.FREE, MembershipTier.BASIC, MembershipTier.PREMIUM, MembershipTier.VIP]
_RANK = {tier: idx for idx, tier in enumerate(_HIERARCHY)}


class UnknownTierError(ValidationError):
    default_message = "Invalid tier"


class GatedContent(Protocol):
    required_tier: Any
    is_premium: bool


T = TypeVar("T", bound=GatedContent)


def coerce_tier(value: Any) -> MembershipTier:
    """Return ``value`` as a MembershipTier or raise UnknownTierError."""
    if isinstance(value, MembershipTier):
        return value
    if isinstance(value, str):
        try:
            return MembershipTier(value)
        except ValueError:
            pass
    raise UnknownTierError(f"Unknown membership tier: {value!r}")


def tier_rank(tier: Any) -> int:
    return _RANK[coerce_tier(tier)]


def accessible_tiers(user_tier: Any) -> List[MembershipTier]:
    need = tier_rank(user_tier)
    return [t for t in _HIERARCHY if _RANK[t] <= need]


def is_accessible(content: GatedContent, user_tier: Any) -> bool:
    tier = coerce_tier(user_tier)
    required = coerce_tier(content.required_tier)
    if _RANK[required] > _RANK[tier]:
        return False
    return not content.is_premium or tier is not MembershipTier.FREE


def filter_accessible(user_tier: Any, items: Iterable[T]) -> List[T]:
    tier = coerce_tier(user_tier)
    return [item for item in items if is_accessible(item, tier)]


def highest_tier(tiers: Iterable[Any]) -> MembershipTier:
    best = MembershipTier.FREE
    for t in tiers:
        t = coerce_tier(t)
        if _RANK[t] > _RANK[best]:
            best = t
    return best


def tier_access_summary(user_tier: Any, items: Iterable[GatedContent]) -> Dict[str, Any]:
    tier = coerce_tier(user_tier)
    counts = {t.value: 0 for t in _HIERARCHY}
    accessible = 0
    for item in items:
        counts[coerce_tier(item.required_tier).value] += 1
        if is_accessible(item, tier):
            accessible += 1
    return {
        "current_tier": tier.value,
        "content_by_tier": counts,
        "total": sum(counts.values()),
        "accessible": accessible,
    }
