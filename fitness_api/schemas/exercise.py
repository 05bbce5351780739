# fitness_api/schemas/exercise.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from fitness_api.models.enums import ExerciseDifficulty, MembershipTier


class ExerciseBase(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    name: str
    description: Optional[str] = None
    difficulty: ExerciseDifficulty
    duration: int
    calories: int
    image: Optional[str] = None
    video_url: Optional[str] = None
    instructions: Optional[Any] = None
    required_tier: MembershipTier = MembershipTier.FREE
    is_premium: bool = False


class ExerciseCreate(ExerciseBase):
    pass


class ExerciseUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    name: str | None = None
    description: str | None = None
    difficulty: ExerciseDifficulty | None = None
    duration: int | None = None
    calories: int | None = None
    image: str | None = None
    video_url: str | None = None
    instructions: Any | None = None
    required_tier: MembershipTier | None = None
    is_premium: bool | None = None


class ExerciseFilter(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    difficulty: Optional[ExerciseDifficulty] = None
    required_tier: Optional[MembershipTier] = None
    is_premium: Optional[bool] = None
    duration_min: Optional[int] = None
    duration_max: Optional[int] = None
    search: Optional[str] = None


class ExerciseOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    difficulty: str
    duration: int
    calories: int
    image: Optional[str] = None
    video_url: Optional[str] = None
    instructions: Optional[Any] = None
    required_tier: str
    is_premium: bool
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
