# fitness_api/crud/progress.py
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from fitness_api.crud.base import CRUDBase
from fitness_api.models.progress import UserProgress
from fitness_api.schemas.progress import ProgressCreate, ProgressFilter, ProgressUpdate


class CRUDProgress(CRUDBase[UserProgress, ProgressCreate, ProgressUpdate]):
    def list_by_user(self, db: Session, user_id: int, filters: Optional[ProgressFilter] = None) -> List[UserProgress]:
        f = filters or ProgressFilter()
        stmt = select(UserProgress).where(UserProgress.user_id == user_id)
        if f.workout_id is not None:
            stmt = stmt.where(UserProgress.workout_id == f.workout_id)
        if f.exercise_id is not None:
            stmt = stmt.where(UserProgress.exercise_id == f.exercise_id)
        if f.completed is not None:
            stmt = stmt.where(UserProgress.completed == f.completed)
        if f.date_from is not None:
            stmt = stmt.where(UserProgress.created_at >= f.date_from)
        if f.date_to is not None:
            stmt = stmt.where(UserProgress.created_at <= f.date_to)
        stmt = stmt.order_by(UserProgress.created_at.desc(), UserProgress.id.desc())
        return list(db.scalars(stmt).all())

    def list_completed_workouts(self, db: Session, user_id: int) -> List[UserProgress]:
        # whole-workout records only; per-exercise rows carry an exercise_id
        stmt = (
            select(UserProgress)
            .where(
                UserProgress.user_id == user_id,
                UserProgress.completed.is_(True),
                UserProgress.exercise_id.is_(None),
            )
            .order_by(UserProgress.completed_at.desc(), UserProgress.id.desc())
        )
        return list(db.scalars(stmt).all())

    def stats(self, db: Session, user_id: int) -> Dict[str, Any]:
        mine = UserProgress.user_id == user_id
        whole = UserProgress.exercise_id.is_(None)
        total = db.scalar(select(func.count()).select_from(UserProgress).where(mine, whole)) or 0
        completed = db.scalar(
            select(func.count()).select_from(UserProgress).where(mine, whole, UserProgress.completed.is_(True))
        ) or 0
        duration = db.scalar(select(func.sum(UserProgress.duration)).where(mine)) or 0
        calories = db.scalar(select(func.sum(UserProgress.calories_burned)).where(mine)) or 0
        avg_progress = db.scalar(
            select(func.avg(UserProgress.progress)).where(mine, UserProgress.progress.is_not(None))
        ) or 0
        return {
            "total_workouts": total,
            "completed_workouts": completed,
            "completion_rate": (completed / total) * 100 if total > 0 else 0,
            "total_duration": int(duration),
            "total_calories": int(calories),
            "average_progress": float(avg_progress),
        }


progress_crud = CRUDProgress(UserProgress)
