"""Exercise MET lookup models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MetExercise:
    """Row of the MET reference table, with calories when computable."""

    name: str
    category: str
    met_value: float
    description: str
    calories_burned: int | None = None


@dataclass(frozen=True)
class MetLookup:
    """Outcome of a MET lookup by exercise name."""

    found: bool
    exercise: MetExercise | None = None
