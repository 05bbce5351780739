# fitness_api/schemas/workout.py
from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from fitness_api.models.enums import MembershipTier, WorkoutType
from fitness_api.schemas.exercise import ExerciseOut


class WorkoutExerciseIn(BaseModel):
    exercise_id: int
    order: int = 0
    sets: Optional[int] = None
    reps: Optional[int] = None
    duration: Optional[int] = None


class WorkoutExerciseLink(BaseModel):
    order: int = 0
    sets: Optional[int] = None
    reps: Optional[int] = None
    duration: Optional[int] = None


class WorkoutBase(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    title: str
    description: Optional[str] = None
    type: WorkoutType
    duration: int
    total_calories: int
    image: Optional[str] = None
    required_tier: MembershipTier = MembershipTier.FREE
    is_premium: bool = False


class WorkoutCreate(WorkoutBase):
    exercises: List[WorkoutExerciseIn] = Field(default_factory=list)


class WorkoutUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    title: str | None = None
    description: str | None = None
    type: WorkoutType | None = None
    duration: int | None = None
    total_calories: int | None = None
    image: str | None = None
    required_tier: MembershipTier | None = None
    is_premium: bool | None = None


class WorkoutFilter(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    type: Optional[WorkoutType] = None
    required_tier: Optional[MembershipTier] = None
    is_premium: Optional[bool] = None
    duration_min: Optional[int] = None
    duration_max: Optional[int] = None
    search: Optional[str] = None


class WorkoutExerciseOut(BaseModel):
    id: int
    exercise_id: int
    order: int
    sets: Optional[int] = None
    reps: Optional[int] = None
    duration: Optional[int] = None
    exercise: Optional[ExerciseOut] = None
    # exercise is withheld when the caller's tier cannot open it
    locked: bool = False

    model_config = {"from_attributes": True}


class WorkoutOut(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    type: str
    duration: int
    total_calories: int
    image: Optional[str] = None
    required_tier: str
    is_premium: bool
    created_at: Optional[datetime] = None
    workout_exercises: List[WorkoutExerciseOut] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class MembershipInfo(BaseModel):
    current_tier: str
    content_by_tier: Dict[str, int]
    total: int
    accessible: int
