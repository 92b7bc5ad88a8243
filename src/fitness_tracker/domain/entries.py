"""Domain models for persisted log entries."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from fitness_tracker.domain.records import ExerciseType


@dataclass(frozen=True)
class ExerciseEntry:
    """Row stored in the exercises table."""

    user_id: UUID
    day: date
    exercise_name: str
    exercise_type: ExerciseType
    sets: int | None = None
    reps: int | None = None
    weight: float | None = None
    duration_minutes: float | None = None
    distance: float | None = None
    calories_burned: float | None = None


@dataclass(frozen=True)
class FoodEntry:
    """Row stored in the food table."""

    user_id: UUID
    day: date
    meal: str
    calories: int
    protein: int


@dataclass(frozen=True)
class WeightEntry:
    """One body weight per user and day."""

    user_id: UUID
    day: date
    weight: float
