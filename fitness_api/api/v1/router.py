# fitness_api/api/v1/router.py
from fastapi import APIRouter

from fitness_api.api.v1 import (
    auth,
    exercises,
    membership_plans,
    memberships,
    payments,
    progress,
    subscriptions,
    users,
    workouts,
)

api_router = APIRouter()

api_router.include_router(auth.router,             prefix="/auth",             tags=["auth"])
api_router.include_router(users.router,            prefix="/users",            tags=["users"])
api_router.include_router(workouts.router,         prefix="/workouts",         tags=["workouts"])
api_router.include_router(exercises.router,        prefix="/exercises",        tags=["exercises"])
api_router.include_router(membership_plans.router, prefix="/membership-plans", tags=["membership-plans"])
api_router.include_router(memberships.router,      prefix="/memberships",      tags=["memberships"])
api_router.include_router(subscriptions.router,    prefix="/subscriptions",    tags=["subscriptions"])
api_router.include_router(payments.router,         prefix="/payments",         tags=["payments"])
api_router.include_router(progress.router,         prefix="/progress",         tags=["progress"])
