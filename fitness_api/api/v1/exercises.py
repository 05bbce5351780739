# fitness_api/api/v1/exercises.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from fitness_api.api.deps import get_db, get_user_tier, require_roles
from fitness_api.models.enums import ExerciseDifficulty, MembershipTier, UserRole
from fitness_api.schemas.exercise import ExerciseCreate, ExerciseFilter, ExerciseOut, ExerciseUpdate
from fitness_api.services.exercises import ExerciseService

router = APIRouter()

_staff = [Depends(require_roles(UserRole.TRAINER, UserRole.ADMIN))]


@router.get("/", response_model=List[ExerciseOut])
def list_exercises(
    difficulty: Optional[ExerciseDifficulty] = None,
    required_tier: Optional[MembershipTier] = None,
    is_premium: Optional[bool] = None,
    duration_min: Optional[int] = Query(None, ge=0),
    duration_max: Optional[int] = Query(None, ge=0),
    search: Optional[str] = None,
    tier: MembershipTier = Depends(get_user_tier),
    db: Session = Depends(get_db),
):
    filters = ExerciseFilter(difficulty=difficulty, required_tier=required_tier, is_premium=is_premium,
                             duration_min=duration_min, duration_max=duration_max, search=search)
    return ExerciseService(db).list(tier, filters)


@router.get("/available", response_model=List[ExerciseOut])
def available(tier: MembershipTier = Depends(get_user_tier), db: Session = Depends(get_db)):
    return ExerciseService(db).list(tier)


@router.get("/tier/{required_tier}", response_model=List[ExerciseOut])
def by_tier(required_tier: str, tier: MembershipTier = Depends(get_user_tier), db: Session = Depends(get_db)):
    return ExerciseService(db).by_tier(required_tier, tier)


@router.get("/{exercise_id}", response_model=ExerciseOut)
def get_exercise(exercise_id: int, tier: MembershipTier = Depends(get_user_tier), db: Session = Depends(get_db)):
    return ExerciseService(db).get_for_tier(exercise_id, tier)


@router.post("/", response_model=ExerciseOut, status_code=status.HTTP_201_CREATED, dependencies=_staff)
def create_exercise(body: ExerciseCreate, db: Session = Depends(get_db)):
    return ExerciseService(db).create(body)


@router.put("/{exercise_id}", response_model=ExerciseOut, dependencies=_staff)
def update_exercise(exercise_id: int, body: ExerciseUpdate, db: Session = Depends(get_db)):
    return ExerciseService(db).update(exercise_id, body)


@router.delete("/{exercise_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=_staff)
def delete_exercise(exercise_id: int, db: Session = Depends(get_db)):
    ExerciseService(db).delete(exercise_id)
    return None  # 204
