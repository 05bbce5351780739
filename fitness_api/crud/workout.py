# fitness_api/crud/workout.py
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from fitness_api.crud.base import CRUDBase
from fitness_api.models.workout import Workout, WorkoutExercise
from fitness_api.schemas.workout import WorkoutCreate, WorkoutFilter, WorkoutUpdate


class CRUDWorkout(CRUDBase[Workout, WorkoutCreate, WorkoutUpdate]):
    def list_by_filters(self, db: Session, filters: Optional[WorkoutFilter] = None) -> List[Workout]:
        f = filters or WorkoutFilter()
        stmt = select(Workout)
        if f.type is not None:
            stmt = stmt.where(Workout.type == f.type)
        if f.required_tier is not None:
            stmt = stmt.where(Workout.required_tier == f.required_tier)
        if f.is_premium is not None:
            stmt = stmt.where(Workout.is_premium == f.is_premium)
        if f.duration_min is not None:
            stmt = stmt.where(Workout.duration >= f.duration_min)
        if f.duration_max is not None:
            stmt = stmt.where(Workout.duration <= f.duration_max)
        if f.search:
            like = f"%{f.search}%"
            stmt = stmt.where(Workout.title.ilike(like) | Workout.description.ilike(like))
        return list(db.scalars(stmt.order_by(Workout.title, Workout.id)).all())

    # ---- workout <-> exercise links ----
    def get_link(self, db: Session, workout_id: int, exercise_id: int) -> Optional[WorkoutExercise]:
        stmt = select(WorkoutExercise).where(
            WorkoutExercise.workout_id == workout_id,
            WorkoutExercise.exercise_id == exercise_id,
        )
        return db.execute(stmt).scalar_one_or_none()

    def add_exercise(self, db: Session, workout: Workout, *, exercise_id: int, order: int,
                     sets: Optional[int] = None, reps: Optional[int] = None,
                     duration: Optional[int] = None) -> WorkoutExercise:
        link = WorkoutExercise(workout_id=workout.id, exercise_id=exercise_id, order=order,
                               sets=sets, reps=reps, duration=duration)
        db.add(link); db.commit(); db.refresh(link); db.refresh(workout)
        return link

    def remove_exercise(self, db: Session, link: WorkoutExercise) -> None:
        workout_id = link.workout_id
        db.delete(link); db.commit()
        workout = db.get(Workout, workout_id)
        if workout is not None:
            db.refresh(workout)


workout_crud = CRUDWorkout(Workout)
