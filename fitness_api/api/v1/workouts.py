# fitness_api/api/v1/workouts.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from fitness_api.api.deps import get_db, get_user_tier, require_roles
from fitness_api.models.enums import MembershipTier, UserRole, WorkoutType
from fitness_api.schemas.workout import (
    MembershipInfo,
    WorkoutCreate,
    WorkoutExerciseLink,
    WorkoutFilter,
    WorkoutOut,
    WorkoutUpdate,
)
from fitness_api.services.workouts import WorkoutService

router = APIRouter()

_staff = [Depends(require_roles(UserRole.TRAINER, UserRole.ADMIN))]


@router.get("/", response_model=List[WorkoutOut])
def list_workouts(
    type: Optional[WorkoutType] = None,
    required_tier: Optional[MembershipTier] = None,
    is_premium: Optional[bool] = None,
    duration_min: Optional[int] = Query(None, ge=0),
    duration_max: Optional[int] = Query(None, ge=0),
    search: Optional[str] = None,
    tier: MembershipTier = Depends(get_user_tier),
    db: Session = Depends(get_db),
):
    filters = WorkoutFilter(type=type, required_tier=required_tier, is_premium=is_premium,
                            duration_min=duration_min, duration_max=duration_max, search=search)
    return WorkoutService(db).list(tier, filters)


@router.get("/available", response_model=List[WorkoutOut])
def available(tier: MembershipTier = Depends(get_user_tier), db: Session = Depends(get_db)):
    return WorkoutService(db).available(tier)


@router.get("/trending", response_model=List[WorkoutOut])
def trending(tier: MembershipTier = Depends(get_user_tier), db: Session = Depends(get_db)):
    return WorkoutService(db).trending(tier)


@router.get("/today", response_model=List[WorkoutOut])
def today(tier: MembershipTier = Depends(get_user_tier), db: Session = Depends(get_db)):
    return WorkoutService(db).today(tier)


@router.get("/membership-info", response_model=MembershipInfo)
def membership_info(tier: MembershipTier = Depends(get_user_tier), db: Session = Depends(get_db)):
    return WorkoutService(db).membership_info(tier)


@router.get("/tier/{required_tier}", response_model=List[WorkoutOut])
def by_tier(required_tier: str, tier: MembershipTier = Depends(get_user_tier), db: Session = Depends(get_db)):
    return WorkoutService(db).by_tier(required_tier, tier)


@router.get("/type/{workout_type}", response_model=List[WorkoutOut])
def by_type(workout_type: WorkoutType, tier: MembershipTier = Depends(get_user_tier), db: Session = Depends(get_db)):
    return WorkoutService(db).by_type(workout_type, tier)


@router.get("/{workout_id}", response_model=WorkoutOut)
def get_workout(workout_id: int, tier: MembershipTier = Depends(get_user_tier), db: Session = Depends(get_db)):
    return WorkoutService(db).get_for_tier(workout_id, tier)


@router.post("/", response_model=WorkoutOut, status_code=status.HTTP_201_CREATED, dependencies=_staff)
def create_workout(body: WorkoutCreate, db: Session = Depends(get_db)):
    return WorkoutService(db).create(body)


@router.put("/{workout_id}", response_model=WorkoutOut, dependencies=_staff)
def update_workout(workout_id: int, body: WorkoutUpdate, db: Session = Depends(get_db)):
    return WorkoutService(db).update(workout_id, body)


@router.delete("/{workout_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=_staff)
def delete_workout(workout_id: int, db: Session = Depends(get_db)):
    WorkoutService(db).delete(workout_id)
    return None  # 204


@router.post("/{workout_id}/exercises/{exercise_id}", response_model=WorkoutOut,
             status_code=status.HTTP_201_CREATED, dependencies=_staff)
def add_exercise(
    workout_id: int,
    exercise_id: int,
    body: Optional[WorkoutExerciseLink] = None,
    db: Session = Depends(get_db),
):
    return WorkoutService(db).add_exercise(workout_id, exercise_id, body or WorkoutExerciseLink())


@router.delete("/{workout_id}/exercises/{exercise_id}", response_model=WorkoutOut, dependencies=_staff)
def remove_exercise(workout_id: int, exercise_id: int, db: Session = Depends(get_db)):
    return WorkoutService(db).remove_exercise(workout_id, exercise_id)
