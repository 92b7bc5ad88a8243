"""Typed records produced by the parsers."""

from dataclasses import dataclass, field
from typing import Literal

from fitness_tracker.domain.nutrition import UnitQuantity

ExerciseType = Literal["cardio", "strength"]
ExerciseSource = Literal["MET_DATABASE", "AI_ESTIMATE"]
FoodSource = Literal["USDA", "FALLBACK_DB", "USDA+FALLBACK", "AI_ESTIMATE"]
MealSource = Literal["FALLBACK_DB", "ESTIMATE"]


@dataclass(frozen=True)
class ParsedStrength:
    """Strength set parsed from text such as 'bench press 3x8 at 185'."""

    exercise: str
    sets: int
    reps: int
    weight: float


@dataclass(frozen=True)
class ParsedCardio:
    """Cardio session; pace is minutes per mile."""

    activity: str
    distance: float
    duration: float
    pace: float


@dataclass(frozen=True)
class ParsedMeal:
    """Meal parsed without the completion service.

    Meals with no fallback-table item carry the local "ESTIMATE" source and
    estimated=True; that tag never appears on AI-assisted results.
    """

    meal: str
    items: list[str]
    quantities: list[UnitQuantity]
    calories: int
    protein: int
    fat: int
    carbs: int
    estimated: bool
    source: MealSource


@dataclass(frozen=True)
class ParsedWeight:
    """Body weight in pounds."""

    weight: float


@dataclass(frozen=True)
class ParsedFood:
    """Meal extracted by the completion service and enriched from lookups."""

    items: list[str]
    calories: int
    protein: int
    fat: int
    carbs: int
    source: FoodSource
    quantities: list[UnitQuantity] = field(default_factory=list)
    calorie_warning: bool = False


@dataclass(frozen=True)
class ParsedExercise:
    """Exercise extracted by the completion service."""

    exercise_name: str
    exercise_type: ExerciseType
    source: ExerciseSource
    sets: int | None = None
    reps: int | None = None
    weight: float | None = None
    duration_minutes: float | None = None
    distance: float | None = None
    calories_burned: float | None = None


ParsedRecord = ParsedStrength | ParsedCardio | ParsedMeal | ParsedWeight
ExtractedRecord = ParsedFood | ParsedExercise
