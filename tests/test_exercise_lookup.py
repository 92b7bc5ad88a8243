"""Tests for MET lookups."""

import pytest

from fitness_tracker.errors import LookupUnavailable
from fitness_tracker.services.exercise_lookup import ExerciseLookupService
from tests.conftest import InMemoryExerciseRepository


def test_lookup_computes_calories_from_met(
    exercise_lookup: ExerciseLookupService,
) -> None:
    result = exercise_lookup.lookup("Running", duration_minutes=30, weight_kg=70)

    assert result.found is True
    assert result.exercise is not None
    assert result.exercise.name == "running"
    assert result.exercise.met_value == 9.8
    assert result.exercise.calories_burned == 343


def test_lookup_defaults_body_weight(exercise_lookup: ExerciseLookupService) -> None:
    result = exercise_lookup.lookup("bench press", duration_minutes=60)

    assert result.exercise is not None
    assert result.exercise.calories_burned == 420


def test_lookup_without_duration_has_no_calories(
    exercise_lookup: ExerciseLookupService,
) -> None:
    result = exercise_lookup.lookup("bench press")

    assert result.found is True
    assert result.exercise is not None
    assert result.exercise.calories_burned is None


def test_lookup_miss(exercise_lookup: ExerciseLookupService) -> None:
    assert exercise_lookup.lookup("underwater basket weaving").found is False
    assert exercise_lookup.lookup("  ").found is False


def test_repository_failures_raise_lookup_unavailable() -> None:
    repository = InMemoryExerciseRepository(error=RuntimeError("db down"))
    service = ExerciseLookupService(repository)

    with pytest.raises(LookupUnavailable):
        service.lookup("running", duration_minutes=30)


def test_unreadable_met_value_raises_lookup_unavailable() -> None:
    repository = InMemoryExerciseRepository(
        rows=[{"exercise_name": "rowing", "met_value": "vigorous"}]
    )
    service = ExerciseLookupService(repository)

    with pytest.raises(LookupUnavailable):
        service.lookup("rowing", duration_minutes=20)
