# fitness_api/api/v1/progress.py
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from fitness_api.api.deps import get_current_user, get_db
from fitness_api.models.user import User
from fitness_api.schemas.progress import ProgressCreate, ProgressFilter, ProgressOut, ProgressStats, ProgressUpdate
from fitness_api.services.progress import ProgressService

router = APIRouter()


@router.get("/", response_model=List[ProgressOut])
def list_progress(
    workout_id: Optional[int] = None,
    exercise_id: Optional[int] = None,
    completed: Optional[bool] = None,
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    filters = ProgressFilter(workout_id=workout_id, exercise_id=exercise_id, completed=completed,
                             date_from=date_from, date_to=date_to)
    return ProgressService(db).list_for_user(user.id, filters)


@router.get("/stats", response_model=ProgressStats)
def progress_stats(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return ProgressService(db).stats(user.id)


@router.get("/completed", response_model=List[ProgressOut])
def completed_workouts(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return ProgressService(db).completed(user.id)


@router.post("/", response_model=ProgressOut, status_code=status.HTTP_201_CREATED)
def create_progress(body: ProgressCreate, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return ProgressService(db).create(user.id, body)


@router.put("/{progress_id}", response_model=ProgressOut)
def update_progress(progress_id: int, body: ProgressUpdate,
                    user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return ProgressService(db).update(progress_id, user.id, body)


@router.delete("/{progress_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_progress(progress_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    ProgressService(db).delete(progress_id, user.id)
    return None  # 204
