"""Derived numeric fields: pace, MET calories, macro scaling and totals."""

import logging
import math
import re
from collections.abc import Iterable

from fitness_tracker.domain.daily import DailyLogRow, MealPlanRow
from fitness_tracker.domain.nutrition import MacroProfile, MacroTotals

DEFAULT_BODY_WEIGHT_KG = 70.0
AI_ESTIMATE_CALORIE_LIMIT = 1000
AI_ESTIMATE_CLAMPED_CALORIES = 800
AI_ESTIMATE_MACRO_SCALE = 0.8
DATABASE_CALORIE_WARNING = 1500

ZERO_TOTALS = MacroTotals(calories=0, protein=0, fat=0, carbs=0)

_RANGE_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*-\s*(\d+(?:\.\d+)?)\s*$")

_logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


def cardio_pace(duration_minutes: float, distance_miles: float) -> float:
    """Return minutes per mile. Callers format the result."""
    return duration_minutes / distance_miles


def met_calories(
    met_value: float,
    duration_minutes: float,
    weight_kg: float | None = None,
) -> int:
    """Estimate calories burned as METs x body weight (kg) x hours."""
    body_weight = weight_kg if weight_kg else DEFAULT_BODY_WEIGHT_KG
    return round_half_up(met_value * body_weight * (duration_minutes / 60))


def scale_macros(per_100g: MacroProfile, multiplier: float) -> MacroTotals:
    """Scale a per-100 g profile to a portion, rounding each field."""
    return MacroTotals(
        calories=round_half_up(per_100g.calories * multiplier),
        protein=round_half_up(per_100g.protein_g * multiplier),
        fat=round_half_up(per_100g.fat_g * multiplier),
        carbs=round_half_up(per_100g.carbs_g * multiplier),
    )


def sum_macros(portions: Iterable[MacroTotals | None]) -> MacroTotals:
    """Sum already-rounded portions; missing portions contribute nothing."""
    total = ZERO_TOTALS
    for portion in portions:
        if portion is None:
            continue
        total = MacroTotals(
            calories=total.calories + portion.calories,
            protein=total.protein + portion.protein,
            fat=total.fat + portion.fat,
            carbs=total.carbs + portion.carbs,
        )
    return total


def clamp_ai_estimate(totals: MacroTotals) -> tuple[MacroTotals, bool]:
    """Cap an unverified model estimate that looks implausibly high.

    Returns the (possibly clamped) totals and whether clamping happened.
    """
    if totals.calories <= AI_ESTIMATE_CALORIE_LIMIT:
        return totals, False
    _logger.warning(
        "AI estimate of %s calories is suspect, clamping to %s",
        totals.calories,
        AI_ESTIMATE_CLAMPED_CALORIES,
    )
    clamped = MacroTotals(
        calories=AI_ESTIMATE_CLAMPED_CALORIES,
        protein=round_half_up(totals.protein * AI_ESTIMATE_MACRO_SCALE),
        fat=round_half_up(totals.fat * AI_ESTIMATE_MACRO_SCALE),
        carbs=round_half_up(totals.carbs * AI_ESTIMATE_MACRO_SCALE),
    )
    return clamped, True


def exceeds_database_threshold(calories: float) -> bool:
    """Flag looked-up meal totals that are unusually high."""
    return calories > DATABASE_CALORIE_WARNING


def parse_macro_value(value: object) -> float:
    """Parse a stored macro value that may be a number, text, or a range.

    "400-500" parses to its midpoint; anything unparsable counts as 0.
    """
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, int | float):
        return float(value)
    if not isinstance(value, str):
        return 0.0
    match = _RANGE_PATTERN.match(value)
    if match:
        low, high = float(match.group(1)), float(match.group(2))
        return (low + high) / 2
    try:
        return float(value.strip())
    except ValueError:
        return 0.0


def macros_from_details(details: dict[str, object]) -> MacroTotals:
    """Read calories/protein/fat/carbs from a stored details payload."""
    return MacroTotals(
        calories=round_half_up(parse_macro_value(details.get("calories"))),
        protein=round_half_up(parse_macro_value(details.get("protein"))),
        fat=round_half_up(parse_macro_value(details.get("fat"))),
        carbs=round_half_up(parse_macro_value(details.get("carbs"))),
    )


def daily_totals(
    meal_plans: list[MealPlanRow], daily_logs: list[DailyLogRow]
) -> tuple[MacroTotals, MacroTotals]:
    """Return (potential, actual) totals for a day's planned meals.

    Potential covers every planned meal; actual only completed ones. A log's
    modified details take precedence over the plan's details.
    """
    logs = {log.item_id: log for log in daily_logs if log.item_type == "meal"}
    potential: list[MacroTotals] = []
    actual: list[MacroTotals] = []
    for meal in meal_plans:
        log = logs.get(meal.id)
        details = (log.modified_details if log else None) or meal.details
        macros = macros_from_details(details)
        potential.append(macros)
        if log and log.completed:
            actual.append(macros)
    return sum_macros(potential), sum_macros(actual)
