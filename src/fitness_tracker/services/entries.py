"""Persistence of confirmed parse results."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from fitness_tracker.domain.entries import ExerciseEntry, FoodEntry, WeightEntry
from fitness_tracker.domain.records import (
    ExtractedRecord,
    ParsedCardio,
    ParsedExercise,
    ParsedFood,
    ParsedMeal,
    ParsedRecord,
    ParsedStrength,
    ParsedWeight,
)

_logger = logging.getLogger(__name__)

Entry = ExerciseEntry | FoodEntry | WeightEntry


class EntryRepository(Protocol):
    """Persistence interface for log entries."""

    def insert_exercise(self, entry: ExerciseEntry) -> None:
        """Insert an exercise row."""

    def insert_food(self, entry: FoodEntry) -> None:
        """Insert a food row."""

    def find_weight_id(self, user_id: UUID, day: date) -> str | None:
        """Return the id of the weight row for a user and day, if any."""

    def insert_weight(self, entry: WeightEntry) -> None:
        """Insert a weight row."""

    def update_weight(self, entry_id: str, weight: float) -> None:
        """Update the weight on an existing row."""


@dataclass
class EntryService:
    """Maps parse results onto entry rows and stores them."""

    repository: EntryRepository

    def save(
        self, user_id: UUID, day: date, record: ParsedRecord | ExtractedRecord
    ) -> Entry:
        """Store any parse result in the table for its kind."""
        if isinstance(record, ParsedStrength | ParsedCardio | ParsedExercise):
            return self.save_exercise(user_id, day, record)
        if isinstance(record, ParsedFood):
            return self.save_food(user_id, day, record)
        if isinstance(record, ParsedMeal):
            return self.save_meal(user_id, day, record)
        return self.save_weight(user_id, day, record)

    def save_exercise(
        self,
        user_id: UUID,
        day: date,
        record: ParsedStrength | ParsedCardio | ParsedExercise,
    ) -> ExerciseEntry:
        """Store a strength, cardio or extracted exercise."""
        if isinstance(record, ParsedStrength):
            entry = ExerciseEntry(
                user_id=user_id,
                day=day,
                exercise_name=record.exercise,
                exercise_type="strength",
                sets=record.sets,
                reps=record.reps,
                weight=record.weight,
            )
        elif isinstance(record, ParsedCardio):
            entry = ExerciseEntry(
                user_id=user_id,
                day=day,
                exercise_name=record.activity,
                exercise_type="cardio",
                duration_minutes=record.duration,
                distance=record.distance,
            )
        else:
            entry = ExerciseEntry(
                user_id=user_id,
                day=day,
                exercise_name=record.exercise_name,
                exercise_type=record.exercise_type,
                sets=record.sets,
                reps=record.reps,
                weight=record.weight,
                duration_minutes=record.duration_minutes,
                distance=record.distance,
                calories_burned=record.calories_burned,
            )
        self.repository.insert_exercise(entry)
        _logger.info("Saved %s exercise %r", entry.exercise_type, entry.exercise_name)
        return entry

    def save_food(self, user_id: UUID, day: date, record: ParsedFood) -> FoodEntry:
        """Store an extracted food record under its joined item names."""
        entry = FoodEntry(
            user_id=user_id,
            day=day,
            meal=", ".join(record.items),
            calories=record.calories,
            protein=record.protein,
        )
        self.repository.insert_food(entry)
        return entry

    def save_meal(self, user_id: UUID, day: date, record: ParsedMeal) -> FoodEntry:
        """Store a pattern-parsed meal under its original text."""
        entry = FoodEntry(
            user_id=user_id,
            day=day,
            meal=record.meal,
            calories=record.calories,
            protein=record.protein,
        )
        self.repository.insert_food(entry)
        return entry

    def save_weight(
        self, user_id: UUID, day: date, record: ParsedWeight
    ) -> WeightEntry:
        """Store the day's weight, replacing an earlier reading."""
        entry = WeightEntry(user_id=user_id, day=day, weight=record.weight)
        existing_id = self.repository.find_weight_id(user_id, day)
        if existing_id:
            self.repository.update_weight(existing_id, record.weight)
            _logger.info("Updated weight for %s on %s", user_id, day)
        else:
            self.repository.insert_weight(entry)
        return entry
