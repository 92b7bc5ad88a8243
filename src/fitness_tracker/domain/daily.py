"""Domain models for daily plans and completion logs."""

from dataclasses import dataclass
from datetime import date

from fitness_tracker.domain.nutrition import MacroTotals


@dataclass(frozen=True)
class MealPlanRow:
    """Planned meal with its stored details payload."""

    id: str
    meal_type: str
    details: dict[str, object]


@dataclass(frozen=True)
class DailyLogRow:
    """Completion state of a planned item on a given day."""

    item_id: str
    item_type: str
    completed: bool
    modified_details: dict[str, object] | None


@dataclass(frozen=True)
class DailyNutrition:
    """Macros planned for a day versus macros from completed meals."""

    day: date
    potential: MacroTotals
    actual: MacroTotals
