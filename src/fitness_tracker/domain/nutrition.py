"""Nutrition domain models."""

from dataclasses import dataclass
from typing import Literal

LookupSource = Literal["USDA", "FALLBACK_DB", "NOT_FOUND", "ERROR"]


@dataclass(frozen=True)
class MacroProfile:
    """Macronutrient profile for 100 g of a food."""

    calories: float
    protein_g: float
    fat_g: float
    carbs_g: float


@dataclass(frozen=True)
class MacroTotals:
    """Rounded macronutrient amounts for a portion or a meal."""

    calories: int
    protein: int
    fat: int
    carbs: int


@dataclass(frozen=True)
class UnitQuantity:
    """A stated amount of a named item, e.g. 2 cups of rice."""

    item: str
    amount: float
    unit: str


@dataclass(frozen=True)
class FoodMatch:
    """First FDC search hit for a query, with per-100 g macros."""

    fdc_id: int
    description: str
    data_type: str | None
    macros: MacroProfile


@dataclass(frozen=True)
class FoodLookupResult:
    """Resolved nutrients for one meal item."""

    item: str
    nutrients: MacroTotals | None
    source: LookupSource
