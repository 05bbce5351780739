# fitness_api/db/init_db.py
import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from fitness_api.models.enums import MembershipTier
from fitness_api.models.membership import MembershipPlan

logger = logging.getLogger(__name__)

# FREE needs no plan; every paid tier gets one
DEFAULT_PLANS = [
    {
        "name": "Basic",
        "tier": MembershipTier.BASIC.value,
        "description": "Full library of free and basic workouts.",
        "monthly_price": 150.0,
        "quarterly_price": 405.0,
        "yearly_price": 1500.0,
        "features": ["Basic workouts", "Progress tracking"],
        "max_workouts": 30,
    },
    {
        "name": "Premium",
        "tier": MembershipTier.PREMIUM.value,
        "description": "Premium programs and video library.",
        "monthly_price": 300.0,
        "quarterly_price": 810.0,
        "yearly_price": 3000.0,
        "features": ["Premium workouts", "Video library", "Progress tracking"],
        "has_nutrition_plan": True,
    },
    {
        "name": "VIP",
        "tier": MembershipTier.VIP.value,
        "description": "Everything, plus personal training.",
        "monthly_price": 500.0,
        "quarterly_price": 1350.0,
        "yearly_price": 5000.0,
        "features": ["All workouts", "Personal training", "Nutrition plan"],
        "has_personal_training": True,
        "has_nutrition_plan": True,
    },
]


def init_db(db: Session, currency: str = "LSL") -> None:
    existing = set(db.scalars(select(MembershipPlan.tier)).all())
    added = 0
    for plan in DEFAULT_PLANS:
        if plan["tier"] in existing:
            continue
        db.add(MembershipPlan(currency=currency, **plan))
        added += 1
    db.commit()
    if added:
        logger.info("seeded %d membership plans", added)
