# fitness_api/schemas/progress.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from fitness_api.util.time import as_utc


class ProgressCreate(BaseModel):
    workout_id: int
    exercise_id: Optional[int] = None
    completed: bool = False
    progress: Optional[float] = None
    duration: Optional[int] = None
    calories_burned: Optional[int] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @field_validator("started_at", "completed_at")
    @classmethod
    def _to_utc(cls, v):
        return as_utc(v)


class ProgressUpdate(BaseModel):
    completed: bool | None = None
    progress: float | None = None
    duration: int | None = None
    calories_burned: int | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None

    @field_validator("started_at", "completed_at")
    @classmethod
    def _to_utc(cls, v):
        return as_utc(v)


class ProgressFilter(BaseModel):
    workout_id: Optional[int] = None
    exercise_id: Optional[int] = None
    completed: Optional[bool] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None

    @field_validator("date_from", "date_to")
    @classmethod
    def _to_utc(cls, v):
        return as_utc(v)


class ProgressOut(BaseModel):
    id: int
    user_id: int
    workout_id: int
    exercise_id: Optional[int] = None
    completed: bool
    progress: Optional[float] = None
    duration: Optional[int] = None
    calories_burned: Optional[int] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ProgressStats(BaseModel):
    total_workouts: int
    completed_workouts: int
    completion_rate: float
    total_duration: int
    total_calories: int
    average_progress: float
