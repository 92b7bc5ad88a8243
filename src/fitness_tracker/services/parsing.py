"""Rule-based parsing of free-text log entries.

Each record type has an ordered list of grammars. The first grammar that
matches wins; there is no scoring between candidates. Parsers return None
when nothing matches and never raise.
"""

import logging
import random
import re
from dataclasses import dataclass, field
from typing import Literal, Protocol

from fitness_tracker.domain.nutrition import MacroTotals, UnitQuantity
from fitness_tracker.domain.records import (
    ParsedCardio,
    ParsedMeal,
    ParsedRecord,
    ParsedStrength,
    ParsedWeight,
)
from fitness_tracker.services.fallback_foods import lookup_fallback
from fitness_tracker.services.metrics import cardio_pace, scale_macros, sum_macros
from fitness_tracker.services.units import is_known_unit, serving_multiplier

RecordType = Literal["exercise", "cardio", "meal", "weight"]

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldIndex:
    """Regex group numbers holding each strength field."""

    exercise: int
    sets: int
    reps: int
    weight: int


@dataclass(frozen=True)
class ExercisePattern:
    """A strength grammar and where its fields are captured."""

    example: str
    regex: re.Pattern[str]
    fields: FieldIndex


_NAME_FIRST = FieldIndex(exercise=1, sets=2, reps=3, weight=4)
_SETS_FIRST = FieldIndex(exercise=3, sets=1, reps=2, weight=4)
_WEIGHT_FIRST = FieldIndex(exercise=2, sets=3, reps=4, weight=1)

EXERCISE_PATTERNS: tuple[ExercisePattern, ...] = (
    ExercisePattern(
        "bench press, 3 sets of 8 at 185 pounds",
        re.compile(
            r"(.+?),?\s*(\d+)\s*sets?\s*of\s*(\d+)\s*(?:at|@)\s*"
            r"(\d+(?:\.\d+)?)\s*(?:pounds?|lbs?)?"
        ),
        _NAME_FIRST,
    ),
    ExercisePattern(
        "bench press 3 sets 8 reps 185 pounds",
        re.compile(
            r"(.+?)\s*(\d+)\s*sets?\s*(\d+)\s*(?:reps?)\s*"
            r"(\d+(?:\.\d+)?)\s*(?:pounds?|lbs?)?"
        ),
        _NAME_FIRST,
    ),
    ExercisePattern(
        "3 sets of 8 bench press at 185",
        re.compile(
            r"(\d+)\s*sets?\s*of\s*(\d+)\s*(.+?)\s*(?:at|@)\s*"
            r"(\d+(?:\.\d+)?)\s*(?:pounds?|lbs?)?"
        ),
        _SETS_FIRST,
    ),
    ExercisePattern(
        "bench press 3x8 at 185",
        re.compile(
            r"(.+?)\s*(\d+)\s*x\s*(\d+)\s*(?:at|@)\s*"
            r"(\d+(?:\.\d+)?)\s*(?:pounds?|lbs?)?"
        ),
        _NAME_FIRST,
    ),
    ExercisePattern(
        "185 pound bench press 3 sets of 8",
        re.compile(r"(\d+(?:\.\d+)?)\s*(?:pounds?|lbs?)\s*(.+?)\s*(\d+)\s*sets?\s*of\s*(\d+)"),
        _WEIGHT_FIRST,
    ),
    ExercisePattern(
        "bench press 3 by 8 at 185",
        re.compile(
            r"(.+?)\s*(\d+)\s*(?:by|x)\s*(\d+)\s*(?:at|@)?\s*"
            r"(\d+(?:\.\d+)?)\s*(?:pounds?|lbs?)?"
        ),
        _NAME_FIRST,
    ),
)

CARDIO_PATTERN = re.compile(
    r"(.+?)\s*(\d+(?:\.\d+)?)\s*miles?\s*in\s*(\d+(?:\.\d+)?)\s*minutes?"
)
WEIGHT_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s*(?:pounds?|lbs?)?")

_MEAL_SEPARATOR = re.compile(r"\s*(?:,|;|\+|&|\band\b|\bwith\b)\s*")
_LEADING_AMOUNT = re.compile(r"^(\d+\s*/\s*\d+|\d+(?:\.\d+)?)\s*(.*)$")
_DEFAULT_AMOUNT_GRAMS = 100.0
_COUNT_UNIT = "pieces"


class MealEstimator(Protocol):
    """Low-confidence estimate for meals no table entry covers."""

    def __call__(self, meal: str) -> MacroTotals:
        """Return estimated totals for the meal text."""


@dataclass
class RangeMealEstimator:
    """Placeholder estimator drawing calories and protein from fixed ranges."""

    rng: random.Random = field(default_factory=random.Random)
    calorie_range: tuple[int, int] = (300, 700)
    protein_range: tuple[int, int] = (20, 50)

    def __call__(self, meal: str) -> MacroTotals:
        return MacroTotals(
            calories=self.rng.randint(*self.calorie_range),
            protein=self.rng.randint(*self.protein_range),
            fat=0,
            carbs=0,
        )


def parse_exercise(text: str) -> ParsedStrength | None:
    """Parse a strength entry such as 'bench press 3x8 at 185'."""
    for index, pattern in enumerate(EXERCISE_PATTERNS):
        match = pattern.regex.search(text)
        if not match:
            continue
        exercise = match.group(pattern.fields.exercise).strip()
        if not exercise:
            continue
        _logger.debug("Exercise pattern %s matched %r", index, text)
        return ParsedStrength(
            exercise=exercise,
            sets=int(match.group(pattern.fields.sets)),
            reps=int(match.group(pattern.fields.reps)),
            weight=float(match.group(pattern.fields.weight)),
        )
    return None


def parse_cardio(text: str) -> ParsedCardio | None:
    """Parse '<activity> <N> miles in <M> minutes'."""
    match = CARDIO_PATTERN.search(text)
    if not match:
        return None
    distance = float(match.group(2))
    duration = float(match.group(3))
    if distance <= 0 or duration <= 0:
        return None
    return ParsedCardio(
        activity=match.group(1).strip(),
        distance=distance,
        duration=duration,
        pace=cardio_pace(duration, distance),
    )


def parse_weight(text: str) -> ParsedWeight | None:
    """Parse a body weight; the pound unit is optional."""
    match = WEIGHT_PATTERN.search(text)
    if not match:
        return None
    weight = float(match.group(1))
    if weight <= 0:
        return None
    return ParsedWeight(weight=weight)


def parse_meal(text: str, estimator: MealEstimator | None = None) -> ParsedMeal | None:
    """Parse a meal description into items and table-based macro totals.

    Any non-empty text is accepted. Items found in the fallback table are
    scaled by their stated quantity and summed; when none are found the
    estimator supplies low-confidence totals instead.
    """
    meal = text.strip()
    if not meal:
        return None
    quantities = split_meal_items(meal.lower())
    portions = []
    for quantity in quantities:
        per_100g = lookup_fallback(quantity.item)
        if per_100g is None:
            _logger.debug("No table entry for meal item %r", quantity.item)
            continue
        multiplier = serving_multiplier(quantity.amount, quantity.unit)
        portions.append(scale_macros(per_100g, multiplier))

    if portions:
        totals = sum_macros(portions)
        estimated = False
        source = "FALLBACK_DB"
    else:
        totals = (estimator or RangeMealEstimator())(meal)
        estimated = True
        source = "ESTIMATE"
    return ParsedMeal(
        meal=meal,
        items=[quantity.item for quantity in quantities],
        quantities=quantities,
        calories=totals.calories,
        protein=totals.protein,
        fat=totals.fat,
        carbs=totals.carbs,
        estimated=estimated,
        source=source,
    )


def split_meal_items(text: str) -> list[UnitQuantity]:
    """Split meal text into items with their stated or default quantities."""
    quantities = []
    for chunk in _MEAL_SEPARATOR.split(text):
        chunk = chunk.strip()
        if chunk:
            quantities.append(_read_quantity(chunk))
    return quantities


def _read_quantity(chunk: str) -> UnitQuantity:
    match = _LEADING_AMOUNT.match(chunk)
    if not match:
        return UnitQuantity(item=chunk, amount=_DEFAULT_AMOUNT_GRAMS, unit="grams")
    amount = _parse_amount(match.group(1))
    rest = match.group(2).strip()
    unit, _, remainder = rest.partition(" ")
    if unit and is_known_unit(unit):
        item = remainder.strip()
        if item.startswith("of "):
            item = item[3:].strip()
        return UnitQuantity(item=item or unit, amount=amount, unit=unit)
    return UnitQuantity(item=rest or chunk, amount=amount, unit=_COUNT_UNIT)


def _parse_amount(raw: str) -> float:
    if "/" in raw:
        numerator, denominator = raw.split("/", 1)
        if float(denominator) == 0:
            return 0.0
        return float(numerator) / float(denominator)
    return float(raw)


def parse_input(
    text: str, record_type: RecordType, estimator: MealEstimator | None = None
) -> ParsedRecord | None:
    """Dispatch to the parser for a record type.

    Matching is done on lower-cased, trimmed text; meals keep the original case.
    """
    normalized = text.lower().strip()
    if record_type == "exercise":
        return parse_exercise(normalized)
    if record_type == "cardio":
        return parse_cardio(normalized)
    if record_type == "meal":
        return parse_meal(text.strip(), estimator)
    if record_type == "weight":
        return parse_weight(normalized)
    _logger.warning("Unknown record type %r", record_type)
    return None
