# fitness_api/services/workouts.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from fitness_api.core.errors import AccessDeniedError, ConflictError, NotFoundError, ValidationError
from fitness_api.core.tiers import coerce_tier, filter_accessible, is_accessible, tier_access_summary
from fitness_api.crud.exercise import exercise_crud
from fitness_api.crud.workout import workout_crud
from fitness_api.models.enums import MembershipTier, WorkoutType
from fitness_api.models.workout import Workout, WorkoutExercise
from fitness_api.schemas.workout import (
    WorkoutCreate,
    WorkoutExerciseLink,
    WorkoutFilter,
    WorkoutOut,
    WorkoutUpdate,
)
from fitness_api.util.time import utcnow

logger = logging.getLogger(__name__)

# indexed by date.isoweekday() % 7, Sunday first
_DAY_TYPES = [
    WorkoutType.CARDIO,
    WorkoutType.STRENGTH,
    WorkoutType.HIIT,
    WorkoutType.YOGA,
    WorkoutType.STRENGTH,
    WorkoutType.CARDIO,
    WorkoutType.FLEXIBILITY,
]

TRENDING_LIMIT = 6
TODAY_LIMIT = 3


def workout_type_for_day(day: datetime) -> WorkoutType:
    return _DAY_TYPES[day.isoweekday() % 7]


def _check_numbers(duration: Optional[int], calories: Optional[int]) -> None:
    if duration is not None and duration <= 0:
        raise ValidationError("Duration must be greater than 0")
    if calories is not None and calories < 0:
        raise ValidationError("Calories cannot be negative")


def workout_view(workout: Workout, user_tier: MembershipTier) -> WorkoutOut:
    """Serialize a workout, locking linked exercises above ``user_tier``."""
    view = WorkoutOut.model_validate(workout)
    for link in view.workout_exercises:
        if link.exercise is not None and not is_accessible(link.exercise, user_tier):
            link.exercise = None
            link.locked = True
    return view


class WorkoutService:
    def __init__(self, db: Session):
        self.db = db

    # ---- reads ----
    def get(self, workout_id: int) -> Workout:
        workout = workout_crud.get(self.db, workout_id)
        if workout is None:
            raise NotFoundError("Workout not found")
        return workout

    def _views(self, user_tier: MembershipTier, rows: List[Workout]) -> List[WorkoutOut]:
        return [workout_view(w, user_tier) for w in filter_accessible(user_tier, rows)]

    def get_for_tier(self, workout_id: int, user_tier: MembershipTier) -> WorkoutOut:
        workout = self.get(workout_id)
        if not is_accessible(workout, user_tier):
            raise AccessDeniedError("This workout requires a higher membership tier")
        return workout_view(workout, user_tier)

    def list(self, user_tier: MembershipTier, filters: Optional[WorkoutFilter] = None) -> List[WorkoutOut]:
        return self._views(user_tier, workout_crud.list_by_filters(self.db, filters))

    def available(self, user_tier: MembershipTier) -> List[WorkoutOut]:
        return self.list(user_tier)

    def by_tier(self, tier: Any, user_tier: MembershipTier) -> List[WorkoutOut]:
        wanted = coerce_tier(tier)
        rows = workout_crud.list_by_filters(self.db, WorkoutFilter(required_tier=wanted))
        return self._views(user_tier, rows)

    def by_type(self, workout_type: WorkoutType, user_tier: MembershipTier) -> List[WorkoutOut]:
        rows = workout_crud.list_by_filters(self.db, WorkoutFilter(type=workout_type, is_premium=False))
        return self._views(user_tier, rows)

    def trending(self, user_tier: MembershipTier) -> List[WorkoutOut]:
        rows = workout_crud.list_by_filters(
            self.db, WorkoutFilter(is_premium=False, duration_min=5, duration_max=30)
        )
        return self._views(user_tier, rows)[:TRENDING_LIMIT]

    def today(self, user_tier: MembershipTier, now: Optional[datetime] = None) -> List[WorkoutOut]:
        day_type = workout_type_for_day(now or utcnow())
        return [w for w in self.list(user_tier) if w.type == day_type.value][:TODAY_LIMIT]

    def membership_info(self, user_tier: MembershipTier) -> Dict[str, Any]:
        return tier_access_summary(user_tier, workout_crud.list_by_filters(self.db))

    # ---- writes ----
    def create(self, body: WorkoutCreate) -> Workout:
        _check_numbers(body.duration, body.total_calories)
        for item in body.exercises:
            if item.order < 0:
                raise ValidationError("Order must be 0 or greater")
            if exercise_crud.get(self.db, item.exercise_id) is None:
                raise NotFoundError(f"Exercise {item.exercise_id} not found")
        if len({item.exercise_id for item in body.exercises}) != len(body.exercises):
            raise ValidationError("An exercise can appear only once per workout")

        data = body.model_dump(exclude={"exercises"})
        workout = Workout(**data)
        workout.workout_exercises = [WorkoutExercise(**item.model_dump()) for item in body.exercises]
        self.db.add(workout); self.db.commit(); self.db.refresh(workout)
        logger.info("workout created id=%s tier=%s", workout.id, workout.required_tier)
        return workout

    def update(self, workout_id: int, body: WorkoutUpdate) -> Workout:
        workout = self.get(workout_id)
        _check_numbers(body.duration, body.total_calories)
        return workout_crud.update(self.db, workout, body)

    def delete(self, workout_id: int) -> None:
        self.get(workout_id)
        workout_crud.remove(self.db, workout_id)
        logger.info("workout deleted id=%s", workout_id)

    def add_exercise(self, workout_id: int, exercise_id: int, link: WorkoutExerciseLink) -> Workout:
        workout = self.get(workout_id)
        if exercise_crud.get(self.db, exercise_id) is None:
            raise NotFoundError("Exercise not found")
        if link.order < 0:
            raise ValidationError("Order must be 0 or greater")
        if workout_crud.get_link(self.db, workout_id, exercise_id) is not None:
            raise ConflictError("Exercise already added to this workout")
        workout_crud.add_exercise(self.db, workout, exercise_id=exercise_id, **link.model_dump())
        return workout

    def remove_exercise(self, workout_id: int, exercise_id: int) -> Workout:
        workout = self.get(workout_id)
        link = workout_crud.get_link(self.db, workout_id, exercise_id)
        if link is None:
            raise NotFoundError("Exercise is not part of this workout")
        workout_crud.remove_exercise(self.db, link)
        return workout
