# fitness_api/schemas/membership.py
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fitness_api.models.enums import MembershipStatus, MembershipTier
from fitness_api.util.time import as_utc

# ---------------------------
# Membership plans
# ---------------------------

class MembershipPlanCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    name: str
    tier: MembershipTier
    description: Optional[str] = None
    monthly_price: float
    quarterly_price: Optional[float] = None
    yearly_price: Optional[float] = None
    currency: Optional[str] = None
    features: List[str] = Field(default_factory=list)
    max_workouts: Optional[int] = None
    max_videos: Optional[int] = None
    has_personal_training: bool = False
    has_nutrition_plan: bool = False
    is_active: bool = True


class MembershipPlanUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    monthly_price: float | None = None
    quarterly_price: float | None = None
    yearly_price: float | None = None
    currency: str | None = None
    features: List[str] | None = None
    max_workouts: int | None = None
    max_videos: int | None = None
    has_personal_training: bool | None = None
    has_nutrition_plan: bool | None = None
    is_active: bool | None = None


class MembershipPlanOut(BaseModel):
    id: int
    name: str
    tier: str
    description: Optional[str] = None
    monthly_price: float
    quarterly_price: Optional[float] = None
    yearly_price: Optional[float] = None
    currency: str
    features: List[str] = Field(default_factory=list)
    max_workouts: Optional[int] = None
    max_videos: Optional[int] = None
    has_personal_training: bool
    has_nutrition_plan: bool
    is_active: bool

    model_config = {"from_attributes": True}

# ---------------------------
# Memberships
# ---------------------------

class MembershipCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    tier: MembershipTier
    start_date: datetime
    end_date: datetime
    amount: float
    currency: Optional[str] = None
    auto_renew: bool = True

    # stored without offset on SQLite, so persist UTC
    @field_validator("start_date", "end_date")
    @classmethod
    def _to_utc(cls, v):
        return as_utc(v)


class MembershipStatusUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    status: MembershipStatus


class MembershipOut(BaseModel):
    id: int
    user_id: int
    tier: str
    status: str
    start_date: datetime
    end_date: datetime
    auto_renew: bool
    amount: float
    currency: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
