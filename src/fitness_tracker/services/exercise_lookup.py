"""MET-based calorie lookups for named exercises."""

import logging
from dataclasses import dataclass
from typing import Protocol

from fitness_tracker.domain.exercise import MetExercise, MetLookup
from fitness_tracker.errors import LookupUnavailable
from fitness_tracker.services.metrics import met_calories


class ExerciseRepository(Protocol):
    """Read access to the MET reference table."""

    def find_exercise(self, name: str) -> dict[str, object] | None:
        """Return the first row whose name contains the query, if any."""


_logger = logging.getLogger(__name__)


@dataclass
class ExerciseLookupService:
    """Looks up MET values and derives calories burned."""

    repository: ExerciseRepository

    def lookup(
        self,
        exercise_name: str,
        duration_minutes: float | None = None,
        weight_kg: float | None = None,
    ) -> MetLookup:
        """Find an exercise by name; calories need a known duration."""
        name = exercise_name.strip()
        if not name:
            return MetLookup(found=False)
        try:
            row = self.repository.find_exercise(name)
        except Exception as exc:
            raise LookupUnavailable(f"MET lookup failed for {name!r}: {exc}") from exc
        if row is None:
            _logger.info("Exercise %r not in MET table", name)
            return MetLookup(found=False)

        try:
            met_value = float(row.get("met_value") or 0.0)
        except (TypeError, ValueError) as exc:
            raise LookupUnavailable(
                f"MET value for {name!r} is not a number: {row.get('met_value')!r}"
            ) from exc
        calories = None
        if duration_minutes and met_value > 0:
            calories = met_calories(met_value, duration_minutes, weight_kg)
        _logger.info(
            "MET match for %r: %s (met=%s, calories=%s)",
            name,
            row.get("exercise_name"),
            met_value,
            calories,
        )
        return MetLookup(
            found=True,
            exercise=MetExercise(
                name=str(row.get("exercise_name", name)),
                category=str(row.get("category") or ""),
                met_value=met_value,
                description=str(row.get("description") or ""),
                calories_burned=calories,
            ),
        )
