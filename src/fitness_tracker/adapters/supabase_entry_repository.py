"""Supabase repository for exercise, food and weight entries."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from fitness_tracker.domain.entries import ExerciseEntry, FoodEntry, WeightEntry
from fitness_tracker.services.entries import EntryRepository


@dataclass
class SupabaseEntryRepository(EntryRepository):
    """Supabase implementation for log entries."""

    client: Client

    def insert_exercise(self, entry: ExerciseEntry) -> None:
        """Insert an exercise row."""
        self.client.table("exercises").insert(
            {
                "user_id": str(entry.user_id),
                "date": entry.day.isoformat(),
                "exercise_name": entry.exercise_name,
                "exercise_type": entry.exercise_type,
                "sets": entry.sets,
                "reps": entry.reps,
                "weight": entry.weight,
                "duration_minutes": entry.duration_minutes,
                "distance": entry.distance,
                "calories_burned": entry.calories_burned,
            }
        ).execute()

    def insert_food(self, entry: FoodEntry) -> None:
        """Insert a food row."""
        self.client.table("food").insert(
            {
                "user_id": str(entry.user_id),
                "date": entry.day.isoformat(),
                "meal": entry.meal,
                "calories": entry.calories,
                "protein": entry.protein,
            }
        ).execute()

    def find_weight_id(self, user_id: UUID, day: date) -> str | None:
        """Return the weight row id for a user and day."""
        response = (
            self.client.table("weight_logs")
            .select("id")
            .eq("user_id", str(user_id))
            .eq("date", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return str(response.data[0]["id"])

    def insert_weight(self, entry: WeightEntry) -> None:
        """Insert a weight row."""
        self.client.table("weight_logs").insert(
            {
                "user_id": str(entry.user_id),
                "date": entry.day.isoformat(),
                "weight": entry.weight,
            }
        ).execute()

    def update_weight(self, entry_id: str, weight: float) -> None:
        """Update the weight on an existing row."""
        self.client.table("weight_logs").update({"weight": weight}).eq(
            "id", entry_id
        ).execute()
