from enum import Enum

from fitness_api.core.tiers import MembershipTier  # noqa: F401


class UserRole(str, Enum):
    CLIENT = "CLIENT"
    TRAINER = "TRAINER"
    ADMIN = "ADMIN"


class WorkoutType(str, Enum):
    CARDIO = "CARDIO"
    STRENGTH = "STRENGTH"
    HIIT = "HIIT"
    YOGA = "YOGA"
    FLEXIBILITY = "FLEXIBILITY"


class ExerciseDifficulty(str, Enum):
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"


class MembershipStatus(str, Enum):
    ACTIVE = "ACTIVE"
    PENDING = "PENDING"
    CANCELLED = "CANCELLED"
    EXPIRED = "EXPIRED"


class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


class PaymentMethod(str, Enum):
    CARD = "CARD"
    MOBILE_MONEY = "MOBILE_MONEY"
    BANK_TRANSFER = "BANK_TRANSFER"
    CASH = "CASH"


class BillingCycle(str, Enum):
    monthly = "monthly"
    quarterly = "quarterly"
    yearly = "yearly"
