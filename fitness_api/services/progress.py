# fitness_api/services/progress.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from fitness_api.core.errors import AccessDeniedError, NotFoundError, ValidationError
from fitness_api.crud.exercise import exercise_crud
from fitness_api.crud.progress import progress_crud
from fitness_api.crud.workout import workout_crud
from fitness_api.models.progress import UserProgress
from fitness_api.schemas.progress import ProgressCreate, ProgressFilter, ProgressUpdate


def _check_values(progress: Optional[float], duration: Optional[int], calories: Optional[int]) -> None:
    if progress is not None and not 0 <= progress <= 100:
        raise ValidationError("Progress must be between 0 and 100")
    if duration is not None and duration <= 0:
        raise ValidationError("Duration must be greater than 0")
    if calories is not None and calories < 0:
        raise ValidationError("Calories burned cannot be negative")


class ProgressService:
    def __init__(self, db: Session):
        self.db = db

    def _owned(self, progress_id: int, user_id: int) -> UserProgress:
        row = progress_crud.get(self.db, progress_id)
        if row is None:
            raise NotFoundError("Progress record not found")
        if row.user_id != user_id:
            raise AccessDeniedError("Not allowed to modify this progress record")
        return row

    def list_for_user(self, user_id: int, filters: Optional[ProgressFilter] = None) -> List[UserProgress]:
        return progress_crud.list_by_user(self.db, user_id, filters)

    def completed(self, user_id: int) -> List[UserProgress]:
        return progress_crud.list_completed_workouts(self.db, user_id)

    def stats(self, user_id: int) -> Dict[str, Any]:
        return progress_crud.stats(self.db, user_id)

    def create(self, user_id: int, body: ProgressCreate) -> UserProgress:
        _check_values(body.progress, body.duration, body.calories_burned)
        if workout_crud.get(self.db, body.workout_id) is None:
            raise NotFoundError("Workout not found")
        if body.exercise_id is not None and exercise_crud.get(self.db, body.exercise_id) is None:
            raise NotFoundError("Exercise not found")
        return progress_crud.create(self.db, body, extra={"user_id": user_id})

    def update(self, progress_id: int, user_id: int, body: ProgressUpdate) -> UserProgress:
        row = self._owned(progress_id, user_id)
        _check_values(body.progress, body.duration, body.calories_burned)
        return progress_crud.update(self.db, row, body)

    def delete(self, progress_id: int, user_id: int) -> None:
        self._owned(progress_id, user_id)
        progress_crud.remove(self.db, progress_id)
