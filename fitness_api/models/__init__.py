# Loads every model so its table is registered on Base.metadata
from fitness_api.models.user import User
from fitness_api.models.exercise import Exercise
from fitness_api.models.workout import Workout, WorkoutExercise
from fitness_api.models.membership import Membership, MembershipPlan
from fitness_api.models.subscription import Subscription
from fitness_api.models.payment import Payment
from fitness_api.models.progress import UserProgress

__all__ = [
    "User",
    "Exercise",
    "Workout",
    "WorkoutExercise",
    "Membership",
    "MembershipPlan",
    "Subscription",
    "Payment",
    "UserProgress",
]
