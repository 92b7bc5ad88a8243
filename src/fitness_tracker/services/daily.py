"""Daily nutrition totals from meal plans and completion logs."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from fitness_tracker.domain.daily import DailyLogRow, DailyNutrition, MealPlanRow
from fitness_tracker.services.metrics import daily_totals


class DailyLogRepository(Protocol):
    """Read interface for meal plans and daily completion logs."""

    def list_meal_plans(self, user_id: UUID) -> list[MealPlanRow]:
        """Return the user's planned meals."""

    def list_daily_logs(self, user_id: UUID, day: date) -> list[DailyLogRow]:
        """Return the user's completion logs for a day."""


@dataclass
class DailyService:
    """Computes planned versus completed nutrition for a day."""

    repository: DailyLogRepository

    def get_nutrition(self, user_id: UUID, day: date) -> DailyNutrition:
        """Return potential and actual macro totals for a day."""
        meal_plans = self.repository.list_meal_plans(user_id)
        daily_logs = self.repository.list_daily_logs(user_id, day)
        potential, actual = daily_totals(meal_plans, daily_logs)
        return DailyNutrition(day=day, potential=potential, actual=actual)
