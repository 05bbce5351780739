from datetime import datetime
from typing import Any, Optional

from sqlalchemy import JSON, Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fitness_api.db.base import Base
from fitness_api.models.enums import MembershipTier
from fitness_api.util.time import utcnow


class Exercise(Base):
    __tablename__ = "exercises"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), index=True)
    description: Mapped[Optional[str]] = mapped_column(Text(), nullable=True)
    difficulty: Mapped[str] = mapped_column(String(20), index=True)
    duration: Mapped[int] = mapped_column(Integer)
    calories: Mapped[int] = mapped_column(Integer)
    image: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    video_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    instructions: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)
    required_tier: Mapped[str] = mapped_column(String(20), default=MembershipTier.FREE.value, index=True)
    is_premium: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    workout_exercises = relationship("WorkoutExercise", back_populates="exercise", cascade="all, delete-orphan")
