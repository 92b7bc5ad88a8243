"""Conversion of stated food quantities to grams.

Nutrient tables are normalized per 100 g, so every quantity is reduced to a
gram equivalent and then to a serving multiplier relative to 100 g.

Volume units are approximated as mass with a density of 1 g/ml and count units
use typical average weights. Both are deliberate approximations.
"""

import logging
from typing import Literal

UnitFamily = Literal["weight", "volume", "count"]

WEIGHT_UNITS: dict[str, float] = {
    "g": 1.0,
    "gram": 1.0,
    "grams": 1.0,
    "kg": 1000.0,
    "kilogram": 1000.0,
    "kilograms": 1000.0,
    "lb": 453.6,
    "lbs": 453.6,
    "pound": 453.6,
    "pounds": 453.6,
    "oz": 28.35,
    "ounce": 28.35,
    "ounces": 28.35,
}

VOLUME_UNITS: dict[str, float] = {
    "cup": 240.0,
    "cups": 240.0,
    "tbsp": 15.0,
    "tablespoon": 15.0,
    "tablespoons": 15.0,
    "tsp": 5.0,
    "teaspoon": 5.0,
    "teaspoons": 5.0,
    "ml": 1.0,
    "milliliter": 1.0,
    "milliliters": 1.0,
    "l": 1000.0,
    "liter": 1000.0,
    "liters": 1000.0,
}

COUNT_UNITS: dict[str, float] = {
    "piece": 100.0,
    "pieces": 100.0,
    "item": 100.0,
    "items": 100.0,
    "tortilla": 30.0,
    "tortillas": 30.0,
    "slice": 25.0,
    "slices": 25.0,
}

DEFAULT_GRAMS_PER_UNIT = 100.0
REFERENCE_GRAMS = 100.0

_UNIT_TABLES: tuple[tuple[UnitFamily, dict[str, float]], ...] = (
    ("weight", WEIGHT_UNITS),
    ("volume", VOLUME_UNITS),
    ("count", COUNT_UNITS),
)

_logger = logging.getLogger(__name__)


def unit_family(unit: str) -> UnitFamily | None:
    """Return which unit table knows the unit, if any."""
    key = unit.strip().lower()
    for family, table in _UNIT_TABLES:
        if key in table:
            return family
    return None


def is_known_unit(unit: str) -> bool:
    """Return True when the unit appears in one of the unit tables."""
    return unit_family(unit) is not None


def grams_equivalent(amount: float, unit: str) -> float:
    """Convert an amount in the given unit to grams.

    Unknown units are treated as servings of 100 g; this never raises.
    """
    key = unit.strip().lower()
    for family, table in _UNIT_TABLES:
        factor = table.get(key)
        if factor is not None:
            grams = amount * factor
            _logger.debug("%s conversion: %s %s = %sg", family, amount, unit, grams)
            return grams
    grams = amount * DEFAULT_GRAMS_PER_UNIT
    _logger.debug("Unknown unit %r, defaulting to %s x 100g", unit, amount)
    return grams


def serving_multiplier(amount: float, unit: str) -> float:
    """Return the gram equivalent relative to the 100 g reference."""
    return grams_equivalent(amount, unit) / REFERENCE_GRAMS
