"""Supabase repository for meal plans and daily logs."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from fitness_tracker.domain.daily import DailyLogRow, MealPlanRow
from fitness_tracker.services.daily import DailyLogRepository


@dataclass
class SupabaseDailyRepository(DailyLogRepository):
    """Supabase implementation for daily plan data."""

    client: Client

    def list_meal_plans(self, user_id: UUID) -> list[MealPlanRow]:
        """Return the user's planned meals."""
        response = (
            self.client.table("meal_plans")
            .select("id, meal_type, details")
            .eq("user_id", str(user_id))
            .order("meal_type", desc=False)
            .execute()
        )
        return [
            MealPlanRow(
                id=str(row["id"]),
                meal_type=str(row.get("meal_type", "")),
                details=_as_dict(row.get("details")) or {},
            )
            for row in response.data or []
        ]

    def list_daily_logs(self, user_id: UUID, day: date) -> list[DailyLogRow]:
        """Return the user's completion logs for a day."""
        response = (
            self.client.table("daily_logs")
            .select("item_id, item_type, completed, modified_details")
            .eq("user_id", str(user_id))
            .eq("date", day.isoformat())
            .execute()
        )
        return [
            DailyLogRow(
                item_id=str(row["item_id"]),
                item_type=str(row.get("item_type", "")),
                completed=bool(row.get("completed", False)),
                modified_details=_as_dict(row.get("modified_details")),
            )
            for row in response.data or []
        ]


def _as_dict(value: object) -> dict[str, object] | None:
    if isinstance(value, dict):
        return value
    return None
