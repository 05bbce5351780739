# fitness_api/schemas/subscription.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from fitness_api.models.enums import BillingCycle, MembershipStatus, MembershipTier, PaymentMethod


class SubscriptionCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    tier: MembershipTier
    billing_cycle: BillingCycle
    amount: float
    currency: Optional[str] = None
    payment_method: Optional[PaymentMethod] = None
    stripe_subscription_id: Optional[str] = None


class SubscriptionUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    status: MembershipStatus | None = None
    amount: float | None = None
    payment_method: PaymentMethod | None = None
    cancel_at_period_end: bool | None = None


class SubscriptionOut(BaseModel):
    id: int
    user_id: int
    tier: str
    status: str
    billing_cycle: str
    amount: float
    currency: str
    current_period_start: datetime
    current_period_end: datetime
    cancel_at_period_end: bool
    canceled_at: Optional[datetime] = None
    payment_method: Optional[str] = None
    stripe_subscription_id: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
