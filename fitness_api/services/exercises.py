# fitness_api/services/exercises.py
from __future__ import annotations

from typing import Any, List, Optional

from sqlalchemy.orm import Session

from fitness_api.core.errors import AccessDeniedError, NotFoundError, ValidationError
from fitness_api.core.tiers import coerce_tier, filter_accessible, is_accessible
from fitness_api.crud.exercise import exercise_crud
from fitness_api.models.enums import MembershipTier
from fitness_api.models.exercise import Exercise
from fitness_api.schemas.exercise import ExerciseCreate, ExerciseFilter, ExerciseUpdate


def _check_numbers(duration: Optional[int], calories: Optional[int]) -> None:
    if duration is not None and duration <= 0:
        raise ValidationError("Duration must be greater than 0")
    if calories is not None and calories < 0:
        raise ValidationError("Calories cannot be negative")


class ExerciseService:
    def __init__(self, db: Session):
        self.db = db

    def get(self, exercise_id: int) -> Exercise:
        exercise = exercise_crud.get(self.db, exercise_id)
        if exercise is None:
            raise NotFoundError("Exercise not found")
        return exercise

    def get_for_tier(self, exercise_id: int, user_tier: MembershipTier) -> Exercise:
        exercise = self.get(exercise_id)
        if not is_accessible(exercise, user_tier):
            raise AccessDeniedError("This exercise requires a higher membership tier")
        return exercise

    def list(self, user_tier: MembershipTier, filters: Optional[ExerciseFilter] = None) -> List[Exercise]:
        return filter_accessible(user_tier, exercise_crud.list_by_filters(self.db, filters))

    def by_tier(self, tier: Any, user_tier: MembershipTier) -> List[Exercise]:
        rows = exercise_crud.list_by_filters(self.db, ExerciseFilter(required_tier=coerce_tier(tier)))
        return filter_accessible(user_tier, rows)

    def create(self, body: ExerciseCreate) -> Exercise:
        _check_numbers(body.duration, body.calories)
        return exercise_crud.create(self.db, body)

    def update(self, exercise_id: int, body: ExerciseUpdate) -> Exercise:
        exercise = self.get(exercise_id)
        _check_numbers(body.duration, body.calories)
        return exercise_crud.update(self.db, exercise, body)

    def delete(self, exercise_id: int) -> None:
        self.get(exercise_id)
        exercise_crud.remove(self.db, exercise_id)
