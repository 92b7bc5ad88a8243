"""Supabase repository for the MET reference table."""

from dataclasses import dataclass

from supabase import Client

from fitness_tracker.services.exercise_lookup import ExerciseRepository


@dataclass
class SupabaseExerciseRepository(ExerciseRepository):
    """Substring lookup into the exercise_database table."""

    client: Client

    def find_exercise(self, name: str) -> dict[str, object] | None:
        """Return the first row whose exercise_name contains the query."""
        response = (
            self.client.table("exercise_database")
            .select("exercise_name, category, met_value, description")
            .ilike("exercise_name", f"%{name}%")
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0]
