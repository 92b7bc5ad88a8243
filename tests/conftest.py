"""Shared test fixtures."""

import json
from dataclasses import dataclass, field
from datetime import date
from uuid import UUID

import pytest

from fitness_tracker.adapters.fdc_client import FdcClient
from fitness_tracker.config import Settings
from fitness_tracker.containers import AppContainer
from fitness_tracker.domain.daily import DailyLogRow, MealPlanRow
from fitness_tracker.domain.entries import ExerciseEntry, FoodEntry, WeightEntry
from fitness_tracker.services.cache import TtlCache
from fitness_tracker.services.daily import DailyLogRepository, DailyService
from fitness_tracker.services.entries import EntryRepository, EntryService
from fitness_tracker.services.exercise_lookup import (
    ExerciseLookupService,
    ExerciseRepository,
)
from fitness_tracker.services.extraction import CompletionClient, ExtractionService
from fitness_tracker.services.nutrition import NutritionService


def fdc_hit(
    fdc_id: int,
    description: str,
    calories: float,
    protein: float,
    fat: float,
    carbs: float,
) -> dict[str, object]:
    """Build a /foods/search hit with per-100 g nutrients."""
    return {
        "fdcId": fdc_id,
        "description": description,
        "dataType": "Foundation",
        "foodNutrients": [
            {"nutrientId": 1008, "nutrientName": "Energy", "value": calories},
            {"nutrientId": 1003, "nutrientName": "Protein", "value": protein},
            {"nutrientId": 1004, "nutrientName": "Total lipid (fat)", "value": fat},
            {
                "nutrientId": 1005,
                "nutrientName": "Carbohydrate, by difference",
                "value": carbs,
            },
        ],
    }


@dataclass
class FakeFdcClient(FdcClient):
    """Fake FDC client answering searches from a query table."""

    foods: dict[str, dict[str, object]] = field(
        default_factory=lambda: {
            "chicken breast": fdc_hit(171077, "Chicken breast", 165, 31, 3.6, 0),
        }
    )
    error: Exception | None = None
    queries: list[str] = field(default_factory=list)

    async def search_foods(self, query: str, page_size: int = 1) -> dict[str, object]:
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        hit = self.foods.get(query.lower())
        return {"totalHits": 1 if hit else 0, "foods": [hit] if hit else []}


@dataclass
class FakeCompletionClient(CompletionClient):
    """Fake completion client returning a fixed reply."""

    content: str = ""
    error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

    async def complete(  # noqa: PLR0913
        self,
        *,
        model: str,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        self.calls.append(
            {
                "model": model,
                "system_prompt": system_prompt,
                "user_prompt": user_prompt,
                "max_tokens": max_tokens,
                "temperature": temperature,
            }
        )
        if self.error is not None:
            raise self.error
        return self.content

    def reply_with(self, payload: dict[str, object]) -> None:
        self.content = json.dumps(payload)


@dataclass
class InMemoryExerciseRepository(ExerciseRepository):
    """In-memory MET reference table for tests."""

    rows: list[dict[str, object]] = field(
        default_factory=lambda: [
            {
                "exercise_name": "running",
                "category": "cardio",
                "met_value": 9.8,
                "description": "Running, 6 mph (10 min/mile)",
            },
            {
                "exercise_name": "bench press",
                "category": "strength",
                "met_value": 6.0,
                "description": "Weight lifting, vigorous effort",
            },
        ]
    )
    error: Exception | None = None

    def find_exercise(self, name: str) -> dict[str, object] | None:
        if self.error is not None:
            raise self.error
        needle = name.lower()
        for row in self.rows:
            if needle in str(row["exercise_name"]).lower():
                return row
        return None


@dataclass
class InMemoryEntryRepository(EntryRepository):
    """In-memory entry repository for tests."""

    exercises: list[ExerciseEntry] = field(default_factory=list)
    foods: list[FoodEntry] = field(default_factory=list)
    weights: dict[str, WeightEntry] = field(default_factory=dict)

    def insert_exercise(self, entry: ExerciseEntry) -> None:
        self.exercises.append(entry)

    def insert_food(self, entry: FoodEntry) -> None:
        self.foods.append(entry)

    def find_weight_id(self, user_id: UUID, day: date) -> str | None:
        key = f"{user_id}:{day.isoformat()}"
        return key if key in self.weights else None

    def insert_weight(self, entry: WeightEntry) -> None:
        self.weights[f"{entry.user_id}:{entry.day.isoformat()}"] = entry

    def update_weight(self, entry_id: str, weight: float) -> None:
        current = self.weights[entry_id]
        self.weights[entry_id] = WeightEntry(
            user_id=current.user_id, day=current.day, weight=weight
        )


@dataclass
class InMemoryDailyRepository(DailyLogRepository):
    """In-memory meal plans and daily logs for tests."""

    meal_plans: list[MealPlanRow] = field(default_factory=list)
    daily_logs: dict[date, list[DailyLogRow]] = field(default_factory=dict)

    def list_meal_plans(self, user_id: UUID) -> list[MealPlanRow]:
        return list(self.meal_plans)

    def list_daily_logs(self, user_id: UUID, day: date) -> list[DailyLogRow]:
        return list(self.daily_logs.get(day, []))


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=(
            "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
            "eyJyb2xlIjoic2VydmljZV9yb2xlIn0.c2lnbmF0dXJl"
        ),
        openai_api_key="openai-key",
        fdc_api_key="fdc-key",
    )


@pytest.fixture
def fdc_client() -> FakeFdcClient:
    return FakeFdcClient()


@pytest.fixture
def completion_client() -> FakeCompletionClient:
    return FakeCompletionClient()


@pytest.fixture
def nutrition_service(fdc_client: FakeFdcClient) -> NutritionService:
    return NutritionService(
        fdc_client=fdc_client, cache=TtlCache(), retry_delay_seconds=0
    )


@pytest.fixture
def exercise_repository() -> InMemoryExerciseRepository:
    return InMemoryExerciseRepository()


@pytest.fixture
def exercise_lookup(
    exercise_repository: InMemoryExerciseRepository,
) -> ExerciseLookupService:
    return ExerciseLookupService(exercise_repository)


@pytest.fixture
def extraction_service(
    completion_client: FakeCompletionClient,
    nutrition_service: NutritionService,
    exercise_lookup: ExerciseLookupService,
) -> ExtractionService:
    return ExtractionService(
        completion_client=completion_client,
        nutrition_service=nutrition_service,
        exercise_lookup=exercise_lookup,
    )


@pytest.fixture
def entry_repository() -> InMemoryEntryRepository:
    return InMemoryEntryRepository()


@pytest.fixture
def daily_repository() -> InMemoryDailyRepository:
    return InMemoryDailyRepository()


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    nutrition_service: NutritionService,
    exercise_lookup: ExerciseLookupService,
    extraction_service: ExtractionService,
    entry_repository: InMemoryEntryRepository,
    daily_repository: InMemoryDailyRepository,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        nutrition_service=nutrition_service,
        exercise_lookup=exercise_lookup,
        extraction_service=extraction_service,
        entry_service=EntryService(entry_repository),
        daily_service=DailyService(daily_repository),
        close_resources=close_resources,
    )
