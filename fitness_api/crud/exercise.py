# fitness_api/crud/exercise.py
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from fitness_api.crud.base import CRUDBase
from fitness_api.models.exercise import Exercise
from fitness_api.schemas.exercise import ExerciseCreate, ExerciseFilter, ExerciseUpdate


class CRUDExercise(CRUDBase[Exercise, ExerciseCreate, ExerciseUpdate]):
    def list_by_filters(self, db: Session, filters: Optional[ExerciseFilter] = None) -> List[Exercise]:
        f = filters or ExerciseFilter()
        stmt = select(Exercise)
        if f.difficulty is not None:
            stmt = stmt.where(Exercise.difficulty == f.difficulty)
        if f.required_tier is not None:
            stmt = stmt.where(Exercise.required_tier == f.required_tier)
        if f.is_premium is not None:
            stmt = stmt.where(Exercise.is_premium == f.is_premium)
        if f.duration_min is not None:
            stmt = stmt.where(Exercise.duration >= f.duration_min)
        if f.duration_max is not None:
            stmt = stmt.where(Exercise.duration <= f.duration_max)
        if f.search:
            like = f"%{f.search}%"
            stmt = stmt.where(Exercise.name.ilike(like) | Exercise.description.ilike(like))
        return list(db.scalars(stmt.order_by(Exercise.name, Exercise.id)).all())


exercise_crud = CRUDExercise(Exercise)
